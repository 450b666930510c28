"""
질문 은행 내보내기 스크립트

src/disambiguation/question_bank.py의 계열별 질문을 JSONL로 저장합니다.
- family: 질문 계열 (textile, machine, ...)
- id/label/type/options/priority/chapter_hints/short_circuit

Usage:
    python kb/build_scripts/build_questions.py
    python kb/build_scripts/build_questions.py --output kb/structured/question_bank.jsonl
"""

import argparse
import sys
from collections import defaultdict
from pathlib import Path

# 프로젝트 루트를 path에 추가
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.disambiguation.question_bank import (
    CHAPTER_FAMILY, export_question_bank, load_question_bank,
)


DEFAULT_OUTPUT = str(PROJECT_ROOT / "kb" / "structured" / "question_bank.jsonl")


def build_question_bank(output_path: str = DEFAULT_OUTPUT) -> int:
    """질문 은행 JSONL 생성 + 통계 출력"""
    print("=" * 60)
    print("질문 은행 생성")
    print("=" * 60)

    count = export_question_bank(output_path)

    # 다시 읽어서 무결성 확인
    loaded = load_question_bank(output_path)

    print(f"\n계열별 질문 수:")
    for family, questions in loaded.items():
        print(f"  {family.value}: {len(questions)}개")

    chapters_by_family = defaultdict(list)
    for chapter, family in CHAPTER_FAMILY.items():
        chapters_by_family[family.value].append(chapter)

    print(f"\n계열별 류:")
    for family, chapters in chapters_by_family.items():
        print(f"  {family}: {', '.join(sorted(chapters))}")

    return count


def main():
    parser = argparse.ArgumentParser(description="질문 은행 JSONL 생성")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="출력 파일 경로")
    args = parser.parse_args()

    build_question_bank(args.output)


if __name__ == "__main__":
    main()
