"""Stock Index Tracker — 주요 종목 시세 조회 및 가격 임계값 알림 서비스"""

__version__ = "1.0.0"
