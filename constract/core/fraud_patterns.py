"""
전세사기 유형 카탈로그

8가지 대표 사기 유형. 규칙 기반/AI 분석 모두 이 목록을 기준으로 점검한다.
id는 체크리스트 UI 등 외부에서 유형별 대응 가이드를 매핑하는 키이므로 변경 금지.
"""
from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .models import RiskLevel


CATALOG_VERSION = "2024.1"


class FraudPattern(BaseModel):
    """사기 유형 정의"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    keywords: FrozenSet[str]
    risk_level: RiskLevel
    aliases: FrozenSet[str] = frozenset()  # LLM이 사용할 수 있는 다른 표기


FRAUD_PATTERNS: Tuple[FraudPattern, ...] = (
    FraudPattern(
        id="empty_shell_jeonse",
        name="깡통전세",
        description="전세가율 과도",
        keywords=frozenset({"보증금", "전세금", "전세가"}),
        risk_level=RiskLevel.CRITICAL,
        aliases=frozenset({"전세가율과도", "보증금과다", "깡통주택"}),
    ),
    FraudPattern(
        id="owner_mismatch",
        name="소유자-임대인 불일치",
        description="등기부 소유자 확인",
        keywords=frozenset({"소유자", "소유권", "등기"}),
        risk_level=RiskLevel.HIGH,
        aliases=frozenset({"위장임대인", "소유자불일치", "임대인불일치"}),
    ),
    FraudPattern(
        id="missing_guarantee_insurance",
        name="보증보험 미가입",
        description="HUG/SGI 보험",
        keywords=frozenset({"보증보험", "HUG", "SGI", "보험"}),
        risk_level=RiskLevel.HIGH,
        aliases=frozenset({"보증보험", "보증보험미가입", "보험미가입"}),
    ),
    FraudPattern(
        id="excessive_senior_liens",
        name="선순위 권리 과다",
        description="근저당/선순위 확인",
        keywords=frozenset({"근저당", "저당", "선순위", "채권"}),
        risk_level=RiskLevel.CRITICAL,
        aliases=frozenset({"근저당과다", "선순위과다", "선순위채권"}),
    ),
    FraudPattern(
        id="proxy_contract_fraud",
        name="대리인 계약 사기",
        description="위임장 검증",
        keywords=frozenset({"대리", "위임", "대리인"}),
        risk_level=RiskLevel.CRITICAL,
        aliases=frozenset({"대리인계약", "대리인사기", "위임장위조"}),
    ),
    FraudPattern(
        id="double_contract",
        name="이중계약 사기",
        description="전입신고 확인",
        keywords=frozenset({"계약일", "전입", "확정일자"}),
        risk_level=RiskLevel.CRITICAL,
        aliases=frozenset({"이중계약"}),
    ),
    FraudPattern(
        id="organized_fraud_ring",
        name="전세 사기단",
        description="조직적 사기",
        keywords=frozenset({"중개", "공인중개사", "법무사"}),
        risk_level=RiskLevel.CRITICAL,
        aliases=frozenset({"사기단", "조직적사기", "공모"}),
    ),
    FraudPattern(
        id="lien_escalation",
        name="근저당 급증 사기",
        description="권리변동 확인",
        keywords=frozenset({"잔금", "권리변동", "설정"}),
        risk_level=RiskLevel.HIGH,
        aliases=frozenset({"근저당급증", "권리변동", "잔금일근저당"}),
    ),
)


def _label_key(label: str) -> str:
    return "".join(str(label).split()).replace("-", "").lower()


def get_pattern(pattern_id: str) -> FraudPattern:
    """id로 사기 유형 조회 (없으면 KeyError)"""
    for pattern in FRAUD_PATTERNS:
        if pattern.id == pattern_id:
            return pattern
    raise KeyError(pattern_id)


def find_pattern_by_label(label: str) -> Optional[FraudPattern]:
    """
    id, 이름, 별칭 중 하나와 일치하는 사기 유형 조회

    공백과 하이픈은 무시한다 (예: "소유자 - 임대인 불일치" == "소유자-임대인불일치").
    """
    key = _label_key(label)
    if not key:
        return None
    for pattern in FRAUD_PATTERNS:
        labels = {pattern.id, pattern.name, *pattern.aliases}
        if key in {_label_key(candidate) for candidate in labels}:
            return pattern
    return None


def build_catalog_reference() -> str:
    """프롬프트에 삽입할 사기 유형 참고 텍스트"""
    lines = []
    for i, pattern in enumerate(FRAUD_PATTERNS, 1):
        keywords = ", ".join(sorted(pattern.keywords))
        lines.append(
            f"{i}. [{pattern.id}] {pattern.name} - {pattern.description} "
            f"(위험도: {pattern.risk_level.value}, 관련 키워드: {keywords})"
        )
    return "\n".join(lines)
