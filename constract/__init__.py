"""Constract AI - 전세사기 위험도 분석 서비스"""

__version__ = "1.0.0"
