"""
Answer Interpreter - 답변 → 키워드/류 힌트

일반 NLP가 아니라 질문 id별 고정 매핑 테이블이다.
- 힌트 토큰 형식: "ch" + 2자리 류 (예: "ch52")
- 모르는 질문 id, 매핑 없는 답변 값 → 빈 결과 (오류 아님)
- 자유 입력 답변은 여기서 분석하지 않는다 (호출 측이 원문을 그대로 사용)
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .types import AnswerAnalysis


HINT_PREFIX = "ch"
_HINT_RE = re.compile(r'^ch(\d{2})$')

YES_VALUES = frozenset({"oui", "yes", "true"})
NO_VALUES = frozenset({"non", "no", "false"})


def chapter_hint(chapter: str) -> str:
    return f"{HINT_PREFIX}{chapter}"


def hint_chapter(hint: str) -> Optional[str]:
    """힌트 토큰의 류 코드 (형식이 다르면 None)"""
    m = _HINT_RE.match(hint)
    return m.group(1) if m else None


def hint_chapters(hints: List[str]) -> List[str]:
    """힌트 리스트 → 류 코드 리스트 (순서 유지, 중복 제거)"""
    chapters = [hint_chapter(h) for h in hints]
    return list(dict.fromkeys(ch for ch in chapters if ch))


@dataclass(frozen=True)
class AnswerRule:
    """질문별 답변 해석 규칙"""
    hints: Dict[str, Tuple[str, ...]] = field(default_factory=dict)  # 정규화 답변 → 류 목록
    emit_keyword: bool = False  # 매핑된 답변 값을 키워드로도 내보낼지


def _yesno(yes: Tuple[str, ...], no: Tuple[str, ...]) -> Dict[str, Tuple[str, ...]]:
    table = {v: yes for v in YES_VALUES}
    table.update({v: no for v in NO_VALUES})
    return table


ANSWER_RULES: Mapping[str, AnswerRule] = MappingProxyType({
    # 섬유 재질 → 원료별 류
    'q_textile_composition': AnswerRule(
        hints={
            'coton': ('52',),
            'laine': ('51',),
            'soie': ('50',),
            'lin': ('53',),
            'polyester': ('54', '55'),
            'synthetique_autre': ('54', '55'),
            'melange': (),
        },
        emit_keyword=True,
    ),
    # 편물(61) vs 직물(62)
    'q_textile_construction': AnswerRule(
        hints={
            'tricote': ('61',),
            'tisse': ('62',),
            'non_tisse': ('56',),
            'dentelle': ('58',),
        },
    ),
    # 전기식(85) vs 기계식(84)
    'q_machine_electric': AnswerRule(
        hints=_yesno(yes=('85',), no=('84',)),
    ),
    'q_metal_type': AnswerRule(
        hints={
            'fer_acier': ('72', '73'),
            'fonte': ('72', '73'),
            'acier_inox': ('72', '73'),
            'aluminium': ('76',),
            'cuivre': ('74',),
            'zinc': ('79',),
            'plomb': ('78',),
            'precieux': ('71',),
        },
        emit_keyword=True,
    ),
    'q_food_state': AnswerRule(
        hints={
            'vivant': ('01', '03'),
        },
    ),
})


def normalize_answer(raw_answer: str) -> str:
    """대소문자 정규화 (앞뒤 공백은 호출 측에서 이미 제거했어도 무방)"""
    return (raw_answer or "").strip().lower()


def interpret_answer(question_id: str, raw_answer: str) -> AnswerAnalysis:
    """
    답변 해석

    Args:
        question_id: 질문 id
        raw_answer: 사용자 답변 원문

    Returns:
        AnswerAnalysis(keywords, hints)
    """
    rule = ANSWER_RULES.get(question_id)
    if rule is None:
        return AnswerAnalysis()

    value = normalize_answer(raw_answer)
    if value not in rule.hints:
        return AnswerAnalysis()

    keywords = [value] if rule.emit_keyword else []
    hints = [chapter_hint(ch) for ch in rule.hints[value]]
    return AnswerAnalysis(keywords=keywords, hints=hints)
