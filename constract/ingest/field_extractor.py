"""
계약서 / 등기부 필드 추출

정규식 기반 best-effort 추출 (LLM 없음).

- `<라벨><구분자><값>` 형태에서 **첫 번째 매치만** 반환한다.
  같은 라벨이 여러 번 나오면 뒤쪽 값은 무시된다.
- 금액은 매치된 원본 문자열 그대로 반환 (쉼표, 억/천만/만 단위 포함). 숫자 변환은 parse_amount / parse_korean_amount.
- 추출 실패는 None (예외 없음).
"""
import logging
import math
import re
from typing import Optional, Sequence, Tuple, Union

from constract.core.models import ExtractedFields

logger = logging.getLogger(__name__)


# ===========================
# 패턴
# ===========================
SEPARATOR = r"[:\s]*"
AMOUNT_PATTERN = r"(?:금\s*)?(\d[\d,]*(?:\.\d+)?(?:(?:억|천만|백만|만)(?:\s*\d[\d,]*(?:천만|백만|만))*)?)"
NAME_PATTERN = r"(?:성명[:\s]*)?([가-힣]{2,5})"
NAME_SEPARATOR = r"[:\s]+"  # '임대인과', '임대인은' 같은 조사 결합 제외
DATE_PATTERN = r"(\d{4}[./-]\d{1,2}[./-]\d{1,2})"
ADDRESS_PATTERN = re.compile(
    r"([가-힣]+(?:특별시|광역시|특별자치시|특별자치도|시|도)\s+[가-힣]+(?:시|군|구)(?:\s+[가-힣]+구)?)"
)
PERIOD_PATTERN = re.compile(
    r"(?:임대차\s*기간|계약\s*기간|존속\s*기간)[^0-9]{0,20}"
    + DATE_PATTERN
    + r"\s*(?:~|부터|\s-\s)\s*"
    + DATE_PATTERN
)
INSURANCE_DENIED = re.compile(r"보증보험[^.]{0,10}?미\s*가입")
INSURANCE_JOINED = re.compile(r"보증보험[^.]{0,10}?가입")
PROXY_KEYWORDS = ("대리인", "위임장", "대리", "위임")
KOREAN_UNIT_PATTERN = re.compile(r"(\d[\d,]*(?:\.\d+)?)\s*(억|천만|백만|만)")
KOREAN_UNITS = {"억": 100_000_000, "천만": 10_000_000, "백만": 1_000_000, "만": 10_000}

Label = Union[str, Sequence[str]]


def _label_regex(label: Label) -> Optional[str]:
    labels = [label] if isinstance(label, str) else list(label)
    labels = [l for l in labels if l]
    if not labels:
        return None
    return "(?:" + "|".join(re.escape(l) for l in labels) + ")"


def extract_field(
    text: Optional[str],
    label: Label,
    value_pattern: str = AMOUNT_PATTERN,
    separator: str = SEPARATOR,
) -> Optional[str]:
    """
    라벨 뒤의 값 추출 (첫 번째 매치)

    Args:
        text: 정규화된 텍스트
        label: 라벨 문자열 또는 라벨 목록 (목록이면 텍스트상 가장 먼저 나오는 라벨)
        value_pattern: 캡처 그룹 1개를 가진 값 정규식
        separator: 라벨과 값 사이 구분자 정규식

    Returns:
        매치된 값 문자열 또는 None
    """
    if not text or not isinstance(text, str):
        return None
    label_regex = _label_regex(label)
    if label_regex is None:
        return None

    match = re.search(label_regex + separator + value_pattern, text)
    return match.group(1) if match else None


def extract_amount(text: Optional[str], label: Label) -> Optional[str]:
    """금액 추출 (예: '보증금: 200,000,000' → '200,000,000')"""
    return extract_field(text, label, AMOUNT_PATTERN)


def extract_name(text: Optional[str], label: Label) -> Optional[str]:
    """한글 이름 추출 (예: '임대인: 홍길동' → '홍길동')"""
    return extract_field(text, label, NAME_PATTERN, separator=NAME_SEPARATOR)


def extract_date(text: Optional[str], label: Label) -> Optional[str]:
    """날짜 추출 (예: '계약일자: 2024.01.15' → '2024.01.15')"""
    return extract_field(text, label, DATE_PATTERN, separator=r"[일자]*" + SEPARATOR)


def extract_address(text: Optional[str]) -> Optional[str]:
    """시/도 + 시/군/구 단위 주소 추출"""
    if not text:
        return None
    match = ADDRESS_PATTERN.search(text)
    return match.group(1) if match else None


def extract_period(text: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """임대차 기간 (시작일, 종료일)"""
    if not text:
        return None, None
    match = PERIOD_PATTERN.search(text)
    if not match:
        return None, None
    return match.group(1), match.group(2)


# ===========================
# 금액 변환
# ===========================
def parse_amount(value: Union[str, int, float, None]) -> int:
    """
    금액 문자열 → 정수 (원)

    쉼표/공백은 무시하고 앞부분 숫자만 읽는다 ('3억' → 3, 'abc' → 0).
    숫자로 읽을 수 없으면 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return 0 if math.isnan(value) or math.isinf(value) else int(value)

    cleaned = re.sub(r"[,\s]", "", str(value))
    match = re.match(r"[+-]?\d+", cleaned)
    return int(match.group(0)) if match else 0


def parse_korean_amount(value: str) -> Optional[int]:
    """
    한글 단위 금액 → 정수 (원)

    '2억 5천만원' → 250000000, 단위가 없으면 None
    """
    matches = KOREAN_UNIT_PATTERN.findall(value or "")
    if not matches:
        return None
    total = sum(float(number.replace(",", "")) * KOREAN_UNITS[unit] for number, unit in matches)
    return int(total)


def _optional_amount(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    amount = parse_korean_amount(raw)
    return amount if amount is not None else parse_amount(raw)


def _detect_insurance(text: str) -> Optional[bool]:
    if INSURANCE_DENIED.search(text):
        return False
    if INSURANCE_JOINED.search(text):
        return True
    return None


# ===========================
# 통합 추출
# ===========================
def extract_fields(contract_text: str, registry_text: str = "") -> ExtractedFields:
    """
    정규화된 계약서/등기부 텍스트에서 ExtractedFields 생성

    계약서 우선, 주소/시세는 등기부도 참고한다.
    """
    contract_text = contract_text or ""
    registry_text = registry_text or ""
    combined = f"{contract_text} {registry_text}".strip()

    start_date, end_date = extract_period(contract_text)

    fields = ExtractedFields(
        landlord=extract_name(contract_text, "임대인"),
        tenant=extract_name(contract_text, "임차인"),
        owner=extract_name(registry_text, "소유자"),
        deposit=_optional_amount(extract_amount(contract_text, ("보증금", "전세금"))),
        market_price=_optional_amount(extract_amount(combined, ("시세", "매매가", "감정가"))),
        mortgage_amount=_optional_amount(extract_amount(registry_text, ("채권최고액", "근저당"))),
        address=extract_address(contract_text) or extract_address(registry_text),
        contract_date=extract_date(contract_text, "계약"),
        start_date=start_date,
        end_date=end_date,
        has_insurance=_detect_insurance(combined),
        is_proxy=any(k in contract_text for k in PROXY_KEYWORDS) if contract_text else None,
    )

    found = [name for name, value in fields.model_dump().items() if value is not None]
    logger.debug(f"필드 추출 완료: {len(found)}개 ({', '.join(found)})")
    return fields
