"""공통 테스트 픽스처."""
import pytest

from constract.core.orchestrator import AnalysisOrchestrator


SAMPLE_CONTRACT = """부동산 임대차 계약서
임대인: 홍길동
임차인: 김영희
소재지: 서울특별시 강남구 역삼동 123-45
보증금: 금 280,000,000원
시세: 350,000,000원
계약일자: 2024.01.15
임대차 기간: 2024.02.01 ~ 2026.01.31
특약사항: 잔금일 다음 날까지 권리변동 금지"""

SAMPLE_REGISTRY = """등기사항전부증명서
소유자 홍길동
근저당권설정 채권최고액 금 120,000,000원"""


@pytest.fixture
def sample_contract() -> str:
    return SAMPLE_CONTRACT


@pytest.fixture
def sample_registry() -> str:
    return SAMPLE_REGISTRY


@pytest.fixture
def rules_only_orchestrator() -> AnalysisOrchestrator:
    return AnalysisOrchestrator()


class FailingLLM:
    """ainvoke 호출 시 항상 예외를 던지는 LLM 스텁"""

    def __init__(self, error: Exception):
        self.error = error
        self.calls = 0

    async def ainvoke(self, messages, **kwargs):
        self.calls += 1
        raise self.error


@pytest.fixture
def failing_llm():
    return FailingLLM(ConnectionError("network down"))
