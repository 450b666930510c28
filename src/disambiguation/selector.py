"""
Disambiguation Selector - 다음 질문 1개 선택

후보 류 집합 → 계열 질문 합집합 → id 중복 제거 → (비어 있으면 일반 질문)
→ 답변 완료/프로필로 이미 알 수 있는 질문 제거 → priority 오름차순 1개.

상태를 갖지 않으며 같은 입력이면 항상 같은 질문(또는 None)을 반환한다.
"""

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .question_bank import general_questions, lookup_questions_for_chapter
from .types import Candidate, ProductProfile, Question, ShortCircuit


# 질문 생략 조건 → 프로필 판정
SHORT_CIRCUIT_CHECKS: Dict[ShortCircuit, Callable[[ProductProfile], bool]] = {
    ShortCircuit.MATERIAL_KNOWN: lambda profile: bool(profile.material_composition),
}


def distinct_chapters(candidates: Iterable[Candidate]) -> List[str]:
    """후보의 류 목록 (첫 등장 순서 유지)"""
    return list(dict.fromkeys(c.chapter for c in candidates))


def relevant_questions(candidates: Sequence[Candidate]) -> List[Question]:
    """
    후보 류에 관련된 질문 (id 기준 stable 중복 제거)

    전용 질문이 하나도 없으면 일반 질문 전체.
    """
    seen_ids = set()
    questions: List[Question] = []

    for chapter in distinct_chapters(candidates):
        for q in lookup_questions_for_chapter(chapter):
            if q.id in seen_ids:
                continue
            seen_ids.add(q.id)
            questions.append(q)

    if not questions:
        return list(general_questions())

    return questions


def is_known_from_profile(question: Question, profile: Optional[ProductProfile]) -> bool:
    """프로필만으로 이미 답을 알 수 있는 질문인지"""
    if profile is None or question.short_circuit is None:
        return False
    check = SHORT_CIRCUIT_CHECKS.get(question.short_circuit)
    return bool(check and check(profile))


def eligible_questions(
    candidates: Sequence[Candidate],
    answer_history: Mapping[str, str],
    product_profile: Optional[ProductProfile] = None,
) -> List[Question]:
    """
    아직 물어볼 수 있는 질문 (priority 오름차순, 동순위는 은행 순서)

    Args:
        candidates: 현재 후보 (비어 있지 않아야 의미 있음)
        answer_history: 질문 id → 답변
        product_profile: 추출된 물품 속성

    Returns:
        질문 리스트
    """
    questions = relevant_questions(candidates)

    # 이미 답변한 질문 제외
    questions = [q for q in questions if q.id not in answer_history]

    # 프로필에 이미 있는 정보 제외
    questions = [q for q in questions if not is_known_from_profile(q, product_profile)]

    # sorted()는 stable → 동순위는 은행 순서 유지
    return sorted(questions, key=lambda q: q.priority)


def select_next_question(
    candidates: Sequence[Candidate],
    answer_history: Mapping[str, str],
    product_profile: Optional[ProductProfile] = None,
) -> Optional[Question]:
    """
    다음 질문 선택

    Args:
        candidates: 현재 후보 리스트
        answer_history: 질문 id → 답변 (덮어쓰기 방식)
        product_profile: 추출된 물품 속성 (읽기 전용)

    Returns:
        다음 질문, 더 물어볼 것이 없으면 None
    """
    # 후보가 없으면 구분할 대상이 없으므로 상세 설명부터 받는다
    if not candidates:
        return general_questions()[0]

    remaining = eligible_questions(candidates, answer_history, product_profile)
    if not remaining:
        return None

    return remaining[0]


# 테스트
if __name__ == "__main__":
    tshirt = [Candidate(code="6109100010", chapter="61", label="T-shirt coton")]

    q = select_next_question(tshirt, {}, ProductProfile())
    print(f"1st: {q.id if q else None}")

    q = select_next_question(tshirt, {"q_textile_composition": "coton"}, ProductProfile())
    print(f"2nd: {q.id if q else None}")

    q = select_next_question([], {}, ProductProfile())
    print(f"empty: {q.id if q else None}")
