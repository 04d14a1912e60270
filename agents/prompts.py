"""Prompt templates and fixed user-facing messages."""

VISION_PROMPT = "이 이미지에서 모든 텍스트를 순서대로 정확하게 추출해줘."

PARSE_PROMPT_TEMPLATE = (
    '다음 텍스트에서 문제와 객관식 보기를 찾아서 JSON 형식으로 분리해줘. '
    '결과는 반드시 {{"question": "문제 내용", "options": ["보기1", "보기2", ...]}} '
    '형태의 JSON 객체 문자열이어야 해. 보기가 없으면 options는 빈 배열 []로 해줘. '
    '다른 설명은 절대 추가하지 마. 텍스트:\n```\n{text}\n```'
)

SOLVE_PROMPT_TEMPLATE = (
    '다음 문제의 정답과 그 이유를 설명해줘. 가능한 경우 '
    '{{"answer": "정답", "explanation": "풀이 과정 설명"}} 형태의 JSON 객체 문자열로 응답해줘. '
    '다른 설명은 절대 추가하지 마.\n문제: {question}\n보기: {options}'
)

NO_OPTIONS = "없음"

NO_QUESTION_ANSWER = "문제 없음"
NO_QUESTION_EXPLANATION = "문제를 인식할 수 없어 풀이할 수 없습니다."

SOLVE_FAILED_ANSWER = "풀이 실패"
SOLVE_FAILED_EXPLANATION = "AI가 정답 및 해설 생성에 실패했습니다: {error}"

ANALYSIS_COMPLETE = "분석 완료"
IMAGE_REQUIRED = "이미지 파일이 필요합니다."
IMAGE_TOO_LARGE = "이미지 파일이 너무 큽니다."
EXTRACTION_FAILED = "이미지에서 텍스트 추출 실패: {error}"
INTERNAL_ERROR = "서버 내부 오류 발생: {error}"
SERVICE_NOT_READY = "서비스가 준비되지 않았습니다. 잠시 후 다시 시도해주세요."
