"""OCR 텍스트 정규화 및 필드 추출"""

from .text_normalizer import normalize_text
from .field_extractor import extract_field, extract_fields, parse_amount

__all__ = ["normalize_text", "extract_field", "extract_fields", "parse_amount"]
