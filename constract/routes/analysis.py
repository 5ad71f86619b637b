"""
위험도 분석 API

- GET  /analyze/patterns   사기 유형 카탈로그
- POST /analyze/documents  계약서/등기부 텍스트 분석 (AI 우선, 규칙 기반 폴백)
- POST /analyze/manual     수동 입력 분석
"""
import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from constract.core.fraud_patterns import CATALOG_VERSION, FRAUD_PATTERNS
from constract.core.manual_analyzer import ManualInput
from constract.core.models import AnalysisResult, ContractStage, RiskLevel
from constract.core.orchestrator import AnalysisOrchestrator, create_orchestrator
from constract.core.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["analysis"])


@lru_cache
def get_orchestrator() -> AnalysisOrchestrator:
    """앱 전역 오케스트레이터 (테스트에서는 dependency_overrides로 교체)"""
    return create_orchestrator(settings)


# ===========================
# Request / Response 모델
# ===========================
class DocumentAnalysisRequest(BaseModel):
    """문서 분석 요청"""
    contract_text: str = Field(default="", max_length=200_000, description="OCR 추출 계약서 텍스트")
    registry_text: Optional[str] = Field(default="", max_length=200_000, description="OCR 추출 등기부등본 텍스트")
    stage: ContractStage = Field(default=ContractStage.PRE_CONTRACT, description="계약 단계")


class FraudPatternInfo(BaseModel):
    id: str
    name: str
    description: str
    risk_level: RiskLevel


class FraudPatternsResponse(BaseModel):
    version: str
    patterns: List[FraudPatternInfo]


# ===========================
# 엔드포인트
# ===========================
@router.get("/patterns", response_model=FraudPatternsResponse)
async def list_fraud_patterns():
    """사기 유형 카탈로그 조회"""
    return FraudPatternsResponse(
        version=CATALOG_VERSION,
        patterns=[
            FraudPatternInfo(id=p.id, name=p.name, description=p.description, risk_level=p.risk_level)
            for p in FRAUD_PATTERNS
        ],
    )


@router.post("/documents", response_model=AnalysisResult)
async def analyze_documents(
    request: DocumentAnalysisRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """
    계약서/등기부 텍스트 위험도 분석

    AI 분석이 실패하면 규칙 기반 결과를 반환한다 (항상 200).
    """
    logger.info(
        f"문서 분석 요청: stage={request.stage.value}, "
        f"contract={len(request.contract_text)}자, registry={len(request.registry_text or '')}자"
    )
    return await orchestrator.analyze(request.contract_text, request.registry_text or "", request.stage)


@router.post("/manual", response_model=AnalysisResult)
async def analyze_manual(
    form: ManualInput,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """수동 입력 위험도 분석"""
    logger.info("수동 입력 분석 요청")
    return orchestrator.analyze_manual_input(form)
