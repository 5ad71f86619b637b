"""텍스트 정규화 테스트."""
import pytest

from constract.ingest.text_normalizer import normalize_text


def test_lowercases_and_collapses_whitespace():
    assert normalize_text("  HUG  보증보험\n\n가입\t확인 ") == "hug 보증보험 가입 확인"


@pytest.mark.parametrize("value", [None, ""])
def test_empty_input_returns_empty_string(value):
    assert normalize_text(value) == ""


def test_idempotent(sample_contract):
    once = normalize_text(sample_contract)
    assert normalize_text(once) == once
