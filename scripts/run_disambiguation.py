"""
질문 루프 대화형 실행

후보 코드를 받아 DisambiguationSession으로 질문/답변을 반복하고
누적 힌트와 재채점 결과를 출력합니다.

Usage:
    python scripts/run_disambiguation.py 6109100010 6209200000
    python scripts/run_disambiguation.py 8471300000:0.4 8517620000:0.35 --material coton
"""

import argparse
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.disambiguation import (
    Candidate, DisambiguationSession, InvalidAnswerError, ProductProfile,
    QuestionType, apply_chapter_hints, load_config,
)
from src.disambiguation.hs_code import format_hs_code, is_valid_hs_code, normalize_hs_code


def parse_candidates(specs: List[str]) -> List[Candidate]:
    """코드[:점수] 형식 인자 → 후보 리스트 (형식 오류는 건너뜀)"""
    candidates = []
    for spec in specs:
        code, _, score = spec.partition(':')
        code = normalize_hs_code(code)
        if not is_valid_hs_code(code):
            print(f"  [skip] 잘못된 코드: {spec}")
            continue
        try:
            value = float(score) if score else 0.0
        except ValueError:
            print(f"  [skip] 잘못된 점수: {spec}")
            continue
        candidates.append(Candidate.from_code(code, score=value))
    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates


def prompt(question) -> str:
    print(f"\nQ [{question.id}] {question.label}")
    if question.type == QuestionType.SELECT:
        for opt in question.options:
            print(f"    - {opt.value}: {opt.label}")
    elif question.type == QuestionType.YESNO:
        print("    - oui / non")
    return input("> ").strip()


def main():
    parser = argparse.ArgumentParser(description="HS 분류 보정 질문 루프")
    parser.add_argument("candidates", nargs="*", help="후보 코드 (코드[:점수])")
    parser.add_argument("--config", default=str(PROJECT_ROOT / "configs" / "disambiguation.yaml"),
                        help="설정 파일 경로")
    parser.add_argument("--material", action="append", default=[],
                        help="이미 알려진 재질 (반복 가능)")
    parser.add_argument("--verbose", action="store_true", help="상세 출력")
    args = parser.parse_args()

    config = load_config(args.config)
    candidates = parse_candidates(args.candidates)
    profile = ProductProfile(material_composition=list(args.material))
    session = DisambiguationSession(config=config, product_profile=profile, verbose=args.verbose)

    print("=" * 60)
    print(f"후보 {len(candidates)}개: {[format_hs_code(c.code) for c in candidates]}")
    print("=" * 60)

    while True:
        question = session.next_question(candidates)
        if question is None:
            break

        answer = prompt(question)
        try:
            analysis = session.submit_answer(answer)
        except InvalidAnswerError as e:
            print(f"  [invalid] {e}")
            continue

        if analysis.hints:
            print(f"  hints: {analysis.hints}")
            candidates = apply_chapter_hints(candidates, analysis.hints, config.hint_boost)

    print("\n" + "=" * 60)
    print(f"종료: {session.saturation_reason}")
    print(f"답변: {session.answers}")
    print(f"키워드: {session.keywords}")
    print(f"힌트: {session.hints}")
    for i, c in enumerate(candidates, 1):
        print(f"  {i}. {format_hs_code(c.code)} (ch{c.chapter}) {c.score:.3f}")


if __name__ == "__main__":
    main()
