"""OCR 텍스트 정규화 (키워드 매칭용)."""
from typing import Optional


def normalize_text(text: Optional[str]) -> str:
    """
    소문자 변환 + 연속 공백(줄바꿈 포함)을 한 칸으로 축약

    None/빈 문자열은 빈 문자열을 반환한다. 두 번 적용해도 결과가 같다.
    """
    if not text:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return " ".join(text.lower().split())
