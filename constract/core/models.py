"""
분석 데이터 모델

계약서/등기부 분석 결과(AnalysisResult)와 그 구성 요소.
모든 결과 모델은 생성 후 변경할 수 없다 (frozen, 목록 필드는 tuple).
"""
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


PLACEHOLDER = "확인 필요"


class RiskLevel(str, Enum):
    """위험 수준"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Severity(str, Enum):
    """이슈 심각도"""
    WARNING = "warning"
    HIGH = "high"
    CRITICAL = "critical"


class ContractStage(str, Enum):
    """사용자가 선택한 계약 진행 단계"""
    PRE_CONTRACT = "pre_contract"  # 계약 전
    DURING_CONTRACT = "during_contract"  # 계약 중 (계약일 ~ 잔금일)
    POST_CONTRACT = "post_contract"  # 계약 후 (입주 이후)


class AnalysisSource(str, Enum):
    """결과를 생성한 분석 경로"""
    AI = "ai"
    RULES = "rules"
    MANUAL = "manual"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ===========================
# 추출 데이터
# ===========================
class ExtractedFields(_Frozen):
    """문서에서 추출한 필드 (모두 선택적, 추출 실패는 None)"""
    landlord: Optional[str] = None  # 임대인
    tenant: Optional[str] = None  # 임차인
    owner: Optional[str] = None  # 등기부상 소유자
    deposit: Optional[int] = None  # 보증금 (원)
    market_price: Optional[int] = None  # 시세 (원)
    mortgage_amount: Optional[int] = None  # 근저당 채권최고액 (원)
    address: Optional[str] = None
    contract_date: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    has_insurance: Optional[bool] = None  # 보증보험 가입 여부
    is_proxy: Optional[bool] = None  # 대리인 계약 여부


# ===========================
# 분석 구성 요소
# ===========================
class FraudCheck(_Frozen):
    """
    사기 유형별 점검 결과

    passed=True 는 해당 위험 요인이 발견되지 않았음을 의미한다.
    """
    id: str
    title: str
    description: str
    passed: bool
    risk_level: RiskLevel


class Issue(_Frozen):
    """사용자에게 보여줄 구체적인 발견 사항"""
    type: str
    severity: Severity
    message: str


class SummaryPanel(_Frozen):
    """위험 진단 패널 한 줄 요약 (값이 없으면 '확인 필요')"""
    jeonse_ratio: str = PLACEHOLDER
    mortgage_total: str = PLACEHOLDER
    seizure_status: str = PLACEHOLDER
    owner_match: str = PLACEHOLDER
    special_terms_check: str = PLACEHOLDER


class MatchedPattern(_Frozen):
    """AI가 판단한 사기 유형 매칭 (신뢰도 + 근거)"""
    pattern_id: str
    name: str
    confidence: float = 0.0
    reasoning: str = ""


class GraphEntity(_Frozen):
    """관계 그래프 노드"""
    id: str
    type: str = "person"  # person | organization | asset | money | date | location
    name: str = ""
    value: Optional[str] = None


class GraphRelation(_Frozen):
    """관계 그래프 엣지"""
    source: str
    target: str
    type: str = ""  # owns | pays | receives | resides | guarantees | mediates
    label: str = ""


class VerificationItem(_Frozen):
    """계약서 vs 등기부 교차 검증 항목"""
    status: str = "unknown"  # match | mismatch | unknown
    contract_value: Optional[str] = None
    registry_value: Optional[str] = None
    message: Optional[str] = None


class DocumentVerification(_Frozen):
    owner_match: VerificationItem = Field(default_factory=VerificationItem)
    address_match: VerificationItem = Field(default_factory=VerificationItem)
    area_match: VerificationItem = Field(default_factory=VerificationItem)


class PersonalizedGuide(_Frozen):
    """단계별 맞춤 가이드"""
    checklist: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    next_steps: Tuple[str, ...] = ()


class GlossaryTerm(_Frozen):
    term: str
    definition: str


class ManualMetrics(_Frozen):
    """수동 입력 분석의 계산 지표"""
    deposit: int
    market_price: int
    jeonse_ratio: float  # %
    mortgage_amount: int
    prior_deposits: int
    total_liability: int
    liability_ratio: float  # %


# ===========================
# 최종 결과
# ===========================
class AnalysisResult(_Frozen):
    """
    분석 결과 (AI / 규칙 / 수동 입력 경로 공통)

    overall_score 는 0~100 안전 점수 (높을수록 안전)이며,
    overall_risk_level 은 항상 band_level(overall_score) 와 일치한다.
    """
    overall_score: int = Field(ge=0, le=100)
    overall_risk_level: RiskLevel
    fraud_checks: Tuple[FraudCheck, ...]
    issues: Tuple[Issue, ...] = ()
    recommendations: Tuple[str, ...] = ()
    extracted_data: ExtractedFields = Field(default_factory=ExtractedFields)
    summary_panel: SummaryPanel = Field(default_factory=SummaryPanel)

    source: AnalysisSource = AnalysisSource.RULES
    stage: Optional[ContractStage] = None
    no_registry: bool = False

    # AI 경로 전용 표시 데이터
    matched_patterns: Tuple[MatchedPattern, ...] = ()
    entities: Tuple[GraphEntity, ...] = ()
    relations: Tuple[GraphRelation, ...] = ()
    document_verification: Optional[DocumentVerification] = None
    personalized_guide: Optional[PersonalizedGuide] = None
    glossary: Tuple[GlossaryTerm, ...] = ()

    # 수동 입력 경로 전용
    input_data: Optional[ManualMetrics] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "AnalysisResult":
        from .fraud_patterns import FRAUD_PATTERNS
        from .scoring import band_level

        if self.overall_risk_level != band_level(self.overall_score):
            raise ValueError(
                f"risk level {self.overall_risk_level.value} does not match score {self.overall_score}"
            )
        if len(self.fraud_checks) != len(FRAUD_PATTERNS):
            raise ValueError(
                f"expected {len(FRAUD_PATTERNS)} fraud checks, got {len(self.fraud_checks)}"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        """JSON 직렬화 가능한 dict (enum → 문자열)."""
        return self.model_dump(mode="json")
