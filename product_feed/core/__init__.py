"""설정/로깅/예외 공통 모듈"""
