"""Amazon 상품 피드 수집 서비스 (Lightweight → Playwright 계층형 수집)"""

__version__ = "1.0.0"
