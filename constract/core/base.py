"""분석기 공통 인터페이스."""
from typing import Protocol, runtime_checkable

from .models import AnalysisResult, ContractStage


@runtime_checkable
class RiskAnalyzer(Protocol):
    """
    문서 텍스트 → AnalysisResult 분석 전략

    구현체: RuleBasedAnalyzer (키워드/정규식), AiAssistedAnalyzer (LLM)
    """

    name: str

    async def analyze(
        self,
        contract_text: str,
        registry_text: str = "",
        stage: ContractStage = ContractStage.PRE_CONTRACT,
    ) -> AnalysisResult:
        ...
