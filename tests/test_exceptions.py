"""
커스텀 예외 및 에러 핸들러 테스트
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from index_tracker.exceptions import (
    AppError,
    NotFoundError,
    NotifyError,
    QuoteFetchError,
    ValidationError,
    register_exception_handlers,
)


def _make_app_with_route(exc: Exception) -> TestClient:
    """테스트용 앱을 생성하고, /test 에서 주어진 예외를 발생시킨다."""
    test_app = FastAPI()
    register_exception_handlers(test_app)

    @test_app.get("/test")
    async def _raise():
        raise exc

    return TestClient(test_app, raise_server_exceptions=False)


# ────────────── 예외 클래스 기본 동작 ──────────────


class TestExceptionClasses:
    def test_app_error_defaults(self):
        err = AppError()
        assert err.status_code == 500
        assert err.code == "INTERNAL_ERROR"
        assert err.message == "Internal server error."

    def test_custom_message(self):
        err = NotFoundError("Alert not found")
        assert err.message == "Alert not found"
        assert err.status_code == 404

    def test_detail_kwarg(self):
        err = QuoteFetchError(detail={"symbol": "AAPL"})
        assert err.detail == {"symbol": "AAPL"}
        assert err.message == QuoteFetchError.message

    def test_all_status_codes(self):
        cases = [
            (NotFoundError(), 404),
            (ValidationError(), 400),
            (QuoteFetchError(), 502),
            (NotifyError(), 502),
        ]
        for err, expected in cases:
            assert err.status_code == expected
            assert isinstance(err, AppError)


# ────────────── 핸들러 응답 형식 ──────────────


class TestExceptionHandlers:
    def test_app_error_response(self):
        client = _make_app_with_route(NotFoundError("Alert not found", detail={"id": "x"}))
        response = client.get("/test")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Alert not found",
            "code": "NOT_FOUND",
            "detail": {"id": "x"},
        }

    def test_detail_omitted_when_none(self):
        client = _make_app_with_route(QuoteFetchError())
        body = client.get("/test").json()

        assert "detail" not in body
        assert body["code"] == "QUOTE_FETCH_ERROR"

    def test_unhandled_error_is_500(self):
        client = _make_app_with_route(RuntimeError("secret internals"))
        response = client.get("/test")

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "INTERNAL_ERROR"
        assert "secret internals" not in body["error"]
