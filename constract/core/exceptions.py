"""Exceptions raised by the analysis pipeline."""


class AnalysisError(Exception):
    """Base exception for analysis errors."""
    pass


class AIServiceError(AnalysisError):
    """LLM 호출 실패 (네트워크, 인증, rate limit, 5xx)."""
    pass


class MalformedResponseError(AnalysisError):
    """LLM 응답이 JSON이 아니거나 필수 필드(riskScore)가 없음."""
    pass
