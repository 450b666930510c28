"""
HS 분류 보정 질문 엔진 (Adaptive Disambiguation)

Usage:
    from src.disambiguation import Candidate, ProductProfile, select_next_question

    candidates = [Candidate.from_code("6109100010", "T-shirt coton")]
    question = select_next_question(candidates, {}, ProductProfile())

    # 답변 해석
    from src.disambiguation import interpret_answer
    analysis = interpret_answer("q_textile_composition", "coton")  # hints: ["ch52"]

    # 세션 단위 루프
    from src.disambiguation import DisambiguationSession
    session = DisambiguationSession()
    q = session.next_question(candidates)
    session.submit_answer("coton")
"""

from .types import (
    AnswerAnalysis, Candidate, ProductProfile, Question, QuestionOption,
    QuestionType, ShortCircuit,
)
from .question_bank import (
    QuestionBankError, QuestionFamily, lookup_questions_for_chapter,
    general_questions, export_question_bank, load_question_bank,
)
from .selector import select_next_question, eligible_questions
from .interpreter import interpret_answer, hint_chapters
from .rescore import apply_chapter_hints
from .config import DisambiguationConfig, load_config
from .session import (
    DisambiguationSession, DisambiguationState, InvalidAnswerError,
    SessionStateError, is_low_confidence, validate_answer,
)

__all__ = [
    'AnswerAnalysis',
    'Candidate',
    'ProductProfile',
    'Question',
    'QuestionOption',
    'QuestionType',
    'ShortCircuit',
    'QuestionBankError',
    'QuestionFamily',
    'lookup_questions_for_chapter',
    'general_questions',
    'export_question_bank',
    'load_question_bank',
    'select_next_question',
    'eligible_questions',
    'interpret_answer',
    'hint_chapters',
    'apply_chapter_hints',
    'DisambiguationConfig',
    'load_config',
    'DisambiguationSession',
    'DisambiguationState',
    'InvalidAnswerError',
    'SessionStateError',
    'is_low_confidence',
    'validate_answer',
]
