"""
Constract AI - 전세사기 분석 프롬프트

LLM에 주입하는 시스템 프롬프트, 계약 단계별 가이드, 응답 JSON 스키마를 정의합니다.
"""
from typing import List

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from .fraud_patterns import build_catalog_reference
from .models import ContractStage


# 시스템 프롬프트 (LLM에 주입)
SYSTEM_PROMPT = """당신은 **대한민국 전세사기 위험 분석 전문가**입니다.
임대차 계약서와 등기부등본을 분석하여 임차인의 보증금을 위협하는 위험 요소를 찾아주세요.

**전세사기 유형 (반드시 이 목록을 기준으로 판단)**
{catalog}

**현재 계약 단계: {stage_label}**
{stage_guidance}

**분석 원칙**
1. 계약서/등기부 원문에 근거해서만 판단하고, 근거가 없으면 detected=false 로 두세요.
2. 계약서상 임대인과 등기부상 소유자, 주소, 면적이 일치하는지 교차 검증하세요.
3. riskScore는 0~100 사이 정수이며 **높을수록 위험**합니다.
4. 법률 자문이 아닌 참고 정보임을 전제로, 신중한 표현을 사용하세요.

다음 JSON 형식으로만 응답하세요 (다른 텍스트 금지):
{schema}
"""

RESPONSE_SCHEMA = """{
    "extractedData": {
        "landlord": "임대인 이름",
        "tenant": "임차인 이름",
        "owner": "등기부상 소유자",
        "address": "주소",
        "deposit": 보증금(숫자, 원),
        "marketPrice": 추정시세(숫자, 원),
        "mortgageAmount": 근저당금액(숫자, 원),
        "startDate": "시작일",
        "endDate": "종료일",
        "hasInsurance": 보증보험여부(boolean),
        "isProxy": 대리인계약여부(boolean)
    },
    "entities": [
        { "id": "고유ID", "type": "person|organization|asset|money|date|location", "name": "표시이름", "value": "실제값" }
    ],
    "relations": [
        { "source": "엔티티ID", "target": "엔티티ID", "type": "owns|pays|receives|resides|guarantees|mediates", "label": "관계설명" }
    ],
    "documentVerification": {
        "ownerMatch": { "status": "match|mismatch|unknown", "contractValue": "계약서상 임대인", "registryValue": "등기부상 소유자", "message": "불일치 시 설명" },
        "addressMatch": { "status": "match|mismatch|unknown", "contractValue": "계약서상 주소", "registryValue": "등기부상 주소", "message": "불일치 시 설명" },
        "areaMatch": { "status": "match|mismatch|unknown", "contractValue": "계약서상 면적", "registryValue": "등기부상 면적", "message": "불일치 시 설명" }
    },
    "riskScore": 0-100 (높을수록 위험),
    "issues": [
        { "type": "위험유형", "severity": "critical|high|medium|low", "message": "상세 설명" }
    ],
    "fraudChecks": {
        "사기유형 id": { "detected": boolean, "score": 0-100 }
    },
    "matchedPatterns": [
        { "id": "사기유형 id", "confidence": 0.0-1.0, "reasoning": "판단 근거" }
    ],
    "summary_panel": {
        "jeonse_ratio": "전세가율 한 줄 요약",
        "mortgage_total": "근저당 총액 한 줄 요약",
        "seizure_status": "압류/가압류 한 줄 요약",
        "owner_match": "소유자 일치 한 줄 요약",
        "special_terms_check": "특약 핵심 한 줄 요약"
    },
    "personalizedGuide": {
        "checklist": ["확인1", "확인2"],
        "warnings": ["주의사항1"],
        "nextSteps": ["다음단계1"]
    },
    "glossary": [
        { "term": "근저당", "definition": "부동산을 담보로 대출받을 때 설정하는 권리" }
    ],
    "recommendations": ["권장사항1", "권장사항2"]
}"""

STAGE_LABELS = {
    ContractStage.PRE_CONTRACT: "계약 전",
    ContractStage.DURING_CONTRACT: "계약 중 (계약일 ~ 잔금일)",
    ContractStage.POST_CONTRACT: "계약 후 (입주 이후)",
}

# 단계별 중점 확인 사항
STAGE_GUIDANCE = {
    ContractStage.PRE_CONTRACT: """- 전세가율(보증금 / 시세)이 70%를 넘는지 확인하세요.
- 등기부상 소유자와 임대인이 같은 사람인지, 대리인이라면 위임장과 인감증명서가 있는지 확인하세요.
- 선순위 근저당과 선순위 임차보증금의 합계가 시세 대비 과도한지 판단하세요.
- 전세보증보험(HUG/SGI) 가입 가능 여부를 안내하세요.""",
    ContractStage.DURING_CONTRACT: """- 계약일 이후 잔금일 전까지 근저당 추가 설정 등 권리변동 가능성을 점검하세요.
- 잔금 당일 등기부등본 재확인 필요성을 안내하세요.
- 특약사항에 '잔금일 다음 날까지 권리변동 금지', '위반 시 계약 해제 및 배상' 조항이 있는지 확인하세요.
- 보증금은 반드시 등기부상 소유자 명의 계좌로 송금해야 함을 안내하세요.""",
    ContractStage.POST_CONTRACT: """- 전입신고와 확정일자를 받았는지, 대항력과 우선변제권이 확보되었는지 확인하세요.
- 이중계약 여부와 입주 후 새로 설정된 권리가 있는지 점검하세요.
- 전세보증보험 가입 및 만기 전 보증금 반환 절차를 안내하세요.
- 보증금 미반환 시 임차권등기명령 등 대응 절차를 안내하세요.""",
}


def build_system_prompt(stage: ContractStage = ContractStage.PRE_CONTRACT) -> str:
    """카탈로그 + 단계 가이드 + 응답 스키마를 포함한 시스템 프롬프트"""
    return SYSTEM_PROMPT.format(
        catalog=build_catalog_reference(),
        stage_label=STAGE_LABELS[stage],
        stage_guidance=STAGE_GUIDANCE[stage],
        schema=RESPONSE_SCHEMA,
    )


def build_user_prompt(contract_text: str, registry_text: str = "") -> str:
    """사용자 메시지: 계약서 + 등기부 원문"""
    registry_section = f"[등기부등본]\n{registry_text}" if registry_text else "(등기부등본 없음)"
    return f"""다음 문서를 분석해주세요.

[계약서]
{contract_text}

{registry_section}"""


def build_analysis_messages(
    contract_text: str,
    registry_text: str = "",
    stage: ContractStage = ContractStage.PRE_CONTRACT,
) -> List[BaseMessage]:
    return [
        SystemMessage(content=build_system_prompt(stage)),
        HumanMessage(content=build_user_prompt(contract_text, registry_text)),
    ]
