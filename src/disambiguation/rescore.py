"""
류 힌트 기반 후보 재채점

interpret_answer가 낸 "chNN" 힌트와 류가 일치하는 후보에 가산점을 준다.
후보 생성/기본 점수 산출은 외부 검색 단계의 몫이다.
"""

from dataclasses import replace
from typing import List, Sequence

from .interpreter import hint_chapters
from .types import Candidate


def apply_chapter_hints(
    candidates: Sequence[Candidate],
    hints: Sequence[str],
    boost: float = 0.15,
) -> List[Candidate]:
    """
    힌트 류에 속한 후보 점수 가산 후 재정렬

    Args:
        candidates: 현재 후보 (원본은 수정하지 않음)
        hints: 누적 힌트 토큰
        boost: 가산점

    Returns:
        score 내림차순 후보 리스트 (동점은 기존 순서)
    """
    hinted = set(hint_chapters(list(hints)))
    if not hinted:
        return list(candidates)

    rescored = [
        replace(c, score=c.score + boost) if c.chapter in hinted else c
        for c in candidates
    ]
    rescored.sort(key=lambda c: c.score, reverse=True)
    return rescored
