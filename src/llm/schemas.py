"""
Output contracts handed to the model.

Written in the OpenAPI subset that Gemini's responseSchema accepts. They are
plain data so any provider (or a fake one in tests) can read them.
"""

TODO_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "할 일의 제목 (간결하게)"},
        "description": {"type": "STRING", "description": "할 일의 상세 설명", "nullable": True},
        "due_date": {
            "type": "STRING",
            "description": "마감일 (ISO 8601 형식: YYYY-MM-DDTHH:mm:ss+09:00) - 필수",
        },
        "priority": {
            "type": "STRING",
            "enum": ["high", "medium", "low"],
            "description": "우선순위 (high: 긴급/중요, medium: 보통, low: 낮음)",
        },
        "category": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": '카테고리 배열 (최소 1개 필수, 예: ["업무"], ["개인", "건강"])',
        },
    },
    "required": ["title", "due_date", "priority", "category"],
    "propertyOrdering": ["title", "description", "due_date", "priority", "category"],
}

ANALYSIS_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING", "description": "전체 요약 (한국어, 친근한 문체)"},
        "urgentTasks": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "긴급 작업 목록 (제목만)",
        },
        "insights": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "인사이트 3-5개 (구체적이고 실행 가능한)",
        },
        "recommendations": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "추천사항 3-5개 (구체적이고 실행 가능한)",
        },
    },
    "required": ["summary", "urgentTasks", "insights", "recommendations"],
    "propertyOrdering": ["summary", "urgentTasks", "insights", "recommendations"],
}


def schema_fields(schema: dict) -> set[str]:
    return set(schema.get("properties", {}).keys())
