"""필드 추출 테스트."""
from constract.ingest import extract_field, extract_fields, normalize_text, parse_amount
from constract.ingest.field_extractor import extract_period, parse_korean_amount


def test_extract_field_returns_first_match():
    text = "보증금: 100,000,000 보증금: 200,000,000"
    assert extract_field(text, "보증금") == "100,000,000"


def test_extract_field_missing_label_returns_none():
    assert extract_field("임대인 홍길동", "보증금") is None
    assert extract_field("", "보증금") is None
    assert extract_field(None, "보증금") is None


def test_parse_amount():
    assert parse_amount("280,000,000") == 280_000_000
    assert parse_amount(" 1 000 ") == 1000
    assert parse_amount("abc") == 0
    assert parse_amount("") == 0
    assert parse_amount(None) == 0
    assert parse_amount(float("nan")) == 0
    assert parse_amount(12.7) == 12


def test_parse_korean_amount():
    assert parse_korean_amount("2억 5천만원") == 250_000_000
    assert parse_korean_amount("3억") == 300_000_000
    assert parse_korean_amount("120,000,000") is None


def test_extract_period():
    assert extract_period("임대차 기간: 2024.02.01 ~ 2026.01.31") == ("2024.02.01", "2026.01.31")
    assert extract_period("기간 미정") == (None, None)


def test_extract_fields_from_documents(sample_contract, sample_registry):
    fields = extract_fields(normalize_text(sample_contract), normalize_text(sample_registry))

    assert fields.landlord == "홍길동"
    assert fields.tenant == "김영희"
    assert fields.owner == "홍길동"
    assert fields.deposit == 280_000_000
    assert fields.market_price == 350_000_000
    assert fields.mortgage_amount == 120_000_000
    assert fields.address == "서울특별시 강남구"
    assert fields.contract_date == "2024.01.15"
    assert fields.start_date == "2024.02.01"
    assert fields.end_date == "2026.01.31"
    assert fields.is_proxy is False


def test_extract_fields_empty_input():
    fields = extract_fields("", "")
    assert all(value is None for value in fields.model_dump().values())


def test_extract_field_keeps_korean_unit_text():
    assert extract_field("보증금: 금 3억5천만원", "보증금") == "3억5천만"
    assert extract_field("보증금 2억 4,000만원", "보증금") == "2억 4,000만"
    assert extract_fields("보증금 2억 4,000만원").deposit == 240_000_000


def test_name_requires_separator_and_two_characters():
    contract = normalize_text("임대인과 임차인은 아래와 같이 계약한다. 임대인: 홍길동")
    fields = extract_fields(contract, normalize_text("소유자 홍길동"))

    assert fields.landlord == "홍길동"
    assert fields.owner == "홍길동"
