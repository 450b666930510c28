"""
질문 루프 세션 / 설정 로드 테스트
"""
import sys
from pathlib import Path

import pytest

# 경로 추가
sys.path.insert(0, str(Path(__file__).parent))

from src.disambiguation.config import DisambiguationConfig, load_config
from src.disambiguation.question_bank import GENERAL_QUESTIONS, MACHINE_QUESTIONS, TEXTILE_QUESTIONS
from src.disambiguation.session import (
    DisambiguationSession, DisambiguationState, InvalidAnswerError,
    SessionStateError, is_low_confidence, validate_answer,
)
from src.disambiguation.types import Candidate, ProductProfile

from scripts.run_disambiguation import parse_candidates


TSHIRT = Candidate(code="6109100010", chapter="61", label="T-shirt coton")


# ============================================================
# Low confidence
# ============================================================

def test_is_low_confidence():
    assert is_low_confidence([])
    assert not is_low_confidence([0.8, 0.1])
    assert is_low_confidence([0.4, 0.3])   # p1 < 0.5
    assert is_low_confidence([0.6, 0.5])   # gap < 0.15
    assert not is_low_confidence([0.6])
    assert is_low_confidence([0.8, 0.1], threshold_top1=0.9)


# ============================================================
# Answer validation
# ============================================================

def test_validate_select_answer():
    composition = TEXTILE_QUESTIONS[0]
    assert validate_answer(composition, " coton ") == "coton"
    assert validate_answer(composition, "Coton") == "Coton"
    with pytest.raises(InvalidAnswerError):
        validate_answer(composition, "bambou")


def test_validate_yesno_answer():
    electric = MACHINE_QUESTIONS[2]
    assert validate_answer(electric, "oui") == "oui"
    assert validate_answer(electric, "No") == "No"
    with pytest.raises(InvalidAnswerError):
        validate_answer(electric, "parfois")


def test_validate_text_answer():
    description = GENERAL_QUESTIONS[0]
    assert validate_answer(description, "t-shirt manches courtes") == "t-shirt manches courtes"
    with pytest.raises(InvalidAnswerError):
        validate_answer(description, "   ")


# ============================================================
# Session
# ============================================================

def test_session_full_loop_until_saturated():
    session = DisambiguationSession()
    answers = {
        "q_textile_composition": "coton",
        "q_textile_construction": "tricote",
        "q_textile_usage": "vetement_dessus",
    }

    asked = []
    while True:
        q = session.next_question([TSHIRT])
        if q is None:
            break
        assert session.state == DisambiguationState.AWAITING_ANSWER
        asked.append(q.id)
        session.submit_answer(answers[q.id])
        assert session.state == DisambiguationState.NEED_QUESTION

    assert asked == ["q_textile_composition", "q_textile_construction", "q_textile_usage"]
    assert session.state == DisambiguationState.SATURATED
    assert session.saturation_reason == "no_more_questions"
    assert session.hints == ["ch52", "ch61"]
    assert session.keywords == ["coton"]
    assert session.answers == answers


def test_saturated_session_stays_saturated():
    session = DisambiguationSession(config=DisambiguationConfig(max_questions=1))
    session.next_question([TSHIRT])
    session.submit_answer("coton")
    assert session.next_question([TSHIRT]) is None
    assert session.saturation_reason == "max_questions"
    assert session.next_question([TSHIRT]) is None
    assert session.is_saturated


def test_pending_question_returned_again():
    session = DisambiguationSession()
    first = session.next_question([TSHIRT])
    again = session.next_question([TSHIRT])
    assert first is again
    assert session.asked == ["q_textile_composition"]


def test_submit_without_question_raises():
    session = DisambiguationSession()
    with pytest.raises(SessionStateError):
        session.submit_answer("coton")


def test_invalid_answer_keeps_question_pending():
    session = DisambiguationSession()
    q = session.next_question([TSHIRT])
    with pytest.raises(InvalidAnswerError):
        session.submit_answer("bambou")
    assert session.state == DisambiguationState.AWAITING_ANSWER
    assert session.pending is q
    assert session.answers == {}


def test_confident_candidates_stop_asking():
    session = DisambiguationSession()
    confident = [
        Candidate(code="6109100010", chapter="61", score=0.9),
        Candidate(code="6205200000", chapter="62", score=0.2),
    ]
    assert session.next_question(confident) is None
    assert session.saturation_reason == "confident"


def test_empty_candidates_ask_description():
    session = DisambiguationSession()
    q = session.next_question([])
    assert q.id == "q_general_description"


def test_empty_candidates_ask_description_once():
    session = DisambiguationSession()
    asked = []
    while True:
        q = session.next_question([])
        if q is None:
            break
        asked.append(q.id)
        session.submit_answer("t-shirt en coton")

    assert asked == ["q_general_description"]
    assert session.saturation_reason == "no_more_questions"
    assert session.is_saturated


def test_unsorted_scores_still_low_confidence():
    # 실제 1-2위 차이는 0.05
    candidates = [
        Candidate(code="6109100010", chapter="61", score=0.8),
        Candidate(code="6109909000", chapter="61", score=0.1),
        Candidate(code="6110200000", chapter="61", score=0.75),
    ]
    session = DisambiguationSession()
    q = session.next_question(candidates)
    assert q is not None
    assert q.id == "q_textile_composition"
    assert session.saturation_reason == ""


def test_profile_short_circuit_in_session():
    profile = ProductProfile(material_composition=["coton"])
    session = DisambiguationSession(product_profile=profile)
    assert session.next_question([TSHIRT]).id == "q_textile_construction"


def test_session_to_dict():
    session = DisambiguationSession()
    session.next_question([TSHIRT])
    snapshot = session.to_dict()
    assert snapshot["state"] == "AWAITING_ANSWER"
    assert snapshot["pending"]["id"] == "q_textile_composition"
    assert snapshot["pending"]["type"] == "select"


def test_verbose_logging(capsys):
    session = DisambiguationSession(verbose=True)
    session.next_question([TSHIRT])
    session.submit_answer("coton")
    out = capsys.readouterr().out
    assert "[Session] ASK q_textile_composition" in out
    assert "[Session] ANSWER q_textile_composition" in out


# ============================================================
# Config
# ============================================================

def test_load_config(tmp_path):
    path = tmp_path / "disambiguation.yaml"
    path.write_text(
        "clarify:\n"
        "  threshold_top1: 0.6\n"
        "  max_questions: 3\n"
        "rescore:\n"
        "  hint_boost: 0.2\n",
        encoding="utf-8",
    )
    config = load_config(str(path))
    assert config.threshold_top1 == 0.6
    assert config.threshold_gap == 0.15
    assert config.max_questions == 3
    assert config.hint_boost == 0.2


def test_missing_config_uses_defaults(tmp_path):
    config = load_config(str(tmp_path / "nope.yaml"))
    assert config == DisambiguationConfig()


def test_repo_config_file_loads():
    path = Path(__file__).parent / "configs" / "disambiguation.yaml"
    assert load_config(str(path)) == DisambiguationConfig()


def test_invalid_config_raises():
    with pytest.raises(ValueError):
        DisambiguationConfig(max_questions=0)
    with pytest.raises(ValueError):
        DisambiguationConfig.from_dict({"clarify": {"threshold_gap": 2}})


def test_config_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "disambiguation.yaml"
    path.write_text("- threshold_top1\n- 0.6\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


# ============================================================
# Demo script
# ============================================================

def test_parse_candidates_skips_bad_entries(capsys):
    candidates = parse_candidates(["6109100010:abc", "610:0.5", "6205200000:0.4", "8413702000"])
    assert [c.code for c in candidates] == ["6205200000", "8413702000"]
    assert candidates[0].score == 0.4
    out = capsys.readouterr().out
    assert "[skip] 잘못된 점수: 6109100010:abc" in out
    assert "[skip] 잘못된 코드: 610:0.5" in out
