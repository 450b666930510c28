"""
답변 해석 / 힌트 재채점 / HS 코드 유틸 테스트
"""
import sys
from pathlib import Path

# 경로 추가
sys.path.insert(0, str(Path(__file__).parent))

from src.disambiguation.hs_code import (
    chapter_of, format_hs_code, is_valid_hs_code, normalize_hs_code,
)
from src.disambiguation.interpreter import hint_chapter, hint_chapters, interpret_answer
from src.disambiguation.rescore import apply_chapter_hints
from src.disambiguation.types import Candidate


# ============================================================
# Answer Interpreter
# ============================================================

def test_cotton_composition_hints_chapter_52():
    result = interpret_answer("q_textile_composition", "coton")
    assert result.hints == ["ch52"]
    assert result.keywords == ["coton"]


def test_composition_case_normalized():
    assert interpret_answer("q_textile_composition", "Coton").hints == ["ch52"]
    assert interpret_answer("q_textile_composition", "LAINE").hints == ["ch51"]
    assert interpret_answer("q_textile_composition", "soie").hints == ["ch50"]


def test_mapped_value_without_hint_keeps_keyword():
    result = interpret_answer("q_textile_composition", "melange")
    assert result.hints == []
    assert result.keywords == ["melange"]


def test_construction_knit_vs_woven():
    assert interpret_answer("q_textile_construction", "tricote").hints == ["ch61"]
    assert interpret_answer("q_textile_construction", "tisse").hints == ["ch62"]
    assert interpret_answer("q_textile_construction", "tisse").keywords == []


def test_machine_electric_yes_no():
    for yes in ("oui", "yes", "true", "OUI"):
        assert interpret_answer("q_machine_electric", yes).hints == ["ch85"]
    for no in ("non", "no", "false"):
        assert interpret_answer("q_machine_electric", no).hints == ["ch84"]


def test_unmapped_value_is_empty():
    result = interpret_answer("q_machine_electric", "peut-être")
    assert result.is_empty()
    assert interpret_answer("q_textile_composition", "bambou").is_empty()


def test_unknown_question_is_empty():
    assert interpret_answer("q_does_not_exist", "coton").is_empty()


def test_free_text_not_mined():
    assert interpret_answer("q_machine_function", "pompe électrique").is_empty()
    assert interpret_answer("q_general_description", "t-shirt en coton").is_empty()


def test_metal_type_multiple_hints():
    result = interpret_answer("q_metal_type", "fer_acier")
    assert result.hints == ["ch72", "ch73"]
    assert result.keywords == ["fer_acier"]


def test_empty_answer_does_not_crash():
    assert interpret_answer("q_textile_composition", "").is_empty()
    assert interpret_answer("q_textile_composition", None).is_empty()


def test_hint_parsing():
    assert hint_chapter("ch52") == "52"
    assert hint_chapter("chapter52") is None
    assert hint_chapters(["ch85", "bogus", "ch84", "ch85"]) == ["85", "84"]


# ============================================================
# Rescore
# ============================================================

def test_hints_boost_matching_chapter():
    candidates = [
        Candidate(code="8413702000", chapter="84", score=0.45),
        Candidate(code="8501100000", chapter="85", score=0.40),
    ]
    rescored = apply_chapter_hints(candidates, ["ch85"], boost=0.15)
    assert [c.chapter for c in rescored] == ["85", "84"]
    assert abs(rescored[0].score - 0.55) < 1e-9
    # 원본 불변
    assert candidates[1].score == 0.40


def test_no_hints_keeps_order():
    candidates = [
        Candidate(code="6109100010", chapter="61", score=0.2),
        Candidate(code="6205200000", chapter="62", score=0.3),
    ]
    assert apply_chapter_hints(candidates, [], boost=0.15) == candidates


def test_rescore_ties_keep_order():
    candidates = [
        Candidate(code="6109100010", chapter="61", score=0.3),
        Candidate(code="6205200000", chapter="62", score=0.3),
        Candidate(code="6302100000", chapter="63", score=0.1),
    ]
    rescored = apply_chapter_hints(candidates, ["ch61", "ch62"], boost=0.1)
    assert [c.chapter for c in rescored] == ["61", "62", "63"]


# ============================================================
# HS code utils
# ============================================================

def test_normalize_and_chapter():
    assert normalize_hs_code("6109.10") == "6109100000"
    assert normalize_hs_code("8471 30 00") == "8471300000"
    assert chapter_of("6109100010") == "61"
    assert chapter_of("0201.10") == "02"
    assert chapter_of("") == ""


def test_valid_hs_code():
    assert is_valid_hs_code("6109100010")
    assert is_valid_hs_code("1905901000")
    assert not is_valid_hs_code("610")
    assert not is_valid_hs_code("00012345")
    assert not is_valid_hs_code("61O9")
    assert not is_valid_hs_code("20240115")  # 날짜


def test_format_hs_code():
    assert format_hs_code("6109100010") == "6109.10.00.10"
    assert format_hs_code("8471") == "8471.00.00.00"
    assert format_hs_code("") == ""


def test_candidate_from_code():
    c = Candidate.from_code("6109.10.00.10", label="T-shirt", score=0.7)
    assert c.chapter == "61"
    assert c.code == "6109.10.00.10"
