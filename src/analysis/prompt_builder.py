from __future__ import annotations

import json
from typing import Sequence

from analysis.statistics import TodoStats
from todo_ai.models import TodoSnapshot

PERIOD_LABELS = {"today": "오늘", "week": "이번 주"}

PERIOD_GUIDANCE = {
    "today": """**오늘의 요약 특화**:
- 당일 집중도 분석 (남은 시간 고려)
- 남은 할 일의 우선순위 제시
- 오늘 안에 완료 가능한 현실적인 목표 제안
- 내일을 위한 간단한 준비 사항""",
    "week": """**이번 주 요약 특화**:
- 주간 패턴 분석 (요일별 생산성)
- 이번 주 성과 요약 및 칭찬
- 다음 주 계획 제안
- 주말 활용 방법 제시""",
}

NEXT_STEP_HINTS = {
    "today": "내일을 위해 오늘 저녁에 5분만 계획을 세워봐",
    "week": "다음 주는 월요일에 주간 계획을 먼저 세워봐",
}


def _todo_list_json(todos: Sequence[TodoSnapshot]) -> str:
    rows = [
        {
            "title": t.title,
            "completed": t.completed,
            "priority": t.priority,
            "category": t.category,
            "due_date": t.due_date,
            "created_date": t.created_date,
        }
        for t in todos
    ]
    return json.dumps(rows, ensure_ascii=False, indent=2)


def build_analysis_prompt(todos: Sequence[TodoSnapshot], period: str, stats: TodoStats) -> str:
    rate = stats.completion_rate_str
    p = stats.priority_counts
    td = stats.time_distribution
    cheer = "정말 잘하고 있어! 👏" if stats.completion_rate >= 70 else "조금만 더 힘내봐! 💪"

    return f"""당신은 할 일 관리 전문가이자 생산성 코치입니다. 사용자의 할 일 목록을 깊이 있게 분석하고, 실행 가능하며 동기부여가 되는 조언을 제공해주세요.

**분석 기간**: {PERIOD_LABELS[period]}

**할 일 목록 데이터**:
{_todo_list_json(todos)}

**통계** (이미 계산된 정확한 값이므로 그대로 사용할 것):
- 전체 할 일: {stats.total}개
- 완료: {stats.completed}개 ({rate}%)
- 미완료: {stats.remaining}개
- 우선순위 분포: 높음 {p["high"]}개, 보통 {p["medium"]}개, 낮음 {p["low"]}개
- 카테고리 분포: {json.dumps(stats.category_counts, ensure_ascii=False)}
- 마감일 지난 할 일: {stats.overdue}개
- 오늘 마감: {stats.due_today}개
- 시간대 분포: 오전 {td["morning"]}개, 오후 {td["afternoon"]}개, 저녁 {td["evening"]}개

## 분석 가이드라인

### 1. 완료율 분석
- {"일일" if period == "today" else "주간"} 완료율 ({rate}%)을 평가하고 격려
- 우선순위별 완료 패턴 파악 (높음/보통/낮음 중 어떤 우선순위를 잘 완료하는지)
- 완료율이 높으면 칭찬, 낮으면 격려와 함께 개선 방향 제시

### 2. 시간 관리 분석
- 마감일 준수율 계산 (마감일 지난 할 일: {stats.overdue}개)
- 시간대별 업무 집중도 분석 (오전/오후/저녁 중 어디에 집중되어 있는지)
- 가장 효율적인 시간 활용 방법 제안

### 3. 생산성 패턴
- 자주 미루는 작업 유형 식별 (미완료 + 마감일 지난 작업의 공통점)
- 완료하기 쉬운 작업의 특징 도출 (카테고리, 우선순위 등)
- 업무 과부하 여부 판단 (할 일 개수와 시간 분포 기반)

### 4. 실행 가능한 추천
- 구체적인 시간 관리 팁, 우선순위 조정, 일정 재배치, 업무 분산 전략

### 5. 긍정적인 피드백
- 잘하고 있는 부분 강조: "완료율 {rate}%는 정말 훌륭해! 👏"
- 성취감 부여: "이미 {stats.completed}개나 완료했어. 대단해!"

### 6. 기간별 차별화
{PERIOD_GUIDANCE[period]}

## 출력 형식

1. **summary** (1-2문장): 완료율({rate}%)과 가장 중요한 특징 포함, 긍정적인 톤
   - 예: "총 {stats.total}개 중 {stats.completed}개 완료! ({rate}%) {cheer}"
2. **urgentTasks** (최대 5개): 긴급하게 처리해야 할 작업 제목만, 우선순위 high + 마감일 임박 우선, 없으면 빈 배열
3. **insights** (3-5개): 완료율, 시간 관리, 생산성 패턴, 긍정적 발견 (데이터 기반)
4. **recommendations** (3-5개): 즉시 실행 가능하고 구체적인 조언
   - 다음 단계 예: "{NEXT_STEP_HINTS[period]}"

**중요**:
- 한국어 반말로 친근하게
- 통계 수치는 위에 주어진 값을 그대로 사용 (다시 계산하지 말 것)
- 데이터를 기반으로 한 객관적 인사이트

이제 분석 결과를 생성해주세요."""
