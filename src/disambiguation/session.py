"""
질문 루프 세션 (호출 측 상태 관리)

엔진(selector/interpreter)은 상태가 없으므로 세션별 답변 이력, 누적 힌트,
루프 상태는 여기서 관리한다. 세션 하나는 한 번에 질문 하나씩만 처리한다.

상태 전이:
    NEED_QUESTION → AWAITING_ANSWER → NEED_QUESTION | SATURATED
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from .config import DisambiguationConfig
from .interpreter import NO_VALUES, YES_VALUES, interpret_answer, normalize_answer
from .selector import select_next_question
from .types import AnswerAnalysis, Candidate, ProductProfile, Question, QuestionType


class InvalidAnswerError(ValueError):
    """질문 유형에 맞지 않는 답변"""


class SessionStateError(RuntimeError):
    """현재 상태에서 허용되지 않는 호출"""


class DisambiguationState(str, Enum):
    NEED_QUESTION = "NEED_QUESTION"
    AWAITING_ANSWER = "AWAITING_ANSWER"
    SATURATED = "SATURATED"


def is_low_confidence(
    scores: Sequence[float],
    threshold_top1: float = 0.50,
    threshold_gap: float = 0.15,
) -> bool:
    """
    저신뢰도 판정

    Args:
        scores: 후보 점수 (내림차순)

    Returns:
        True if low confidence
    """
    if not scores:
        return True

    p1 = scores[0]
    p2 = scores[1] if len(scores) > 1 else 0.0

    # 조건: p1 < top1 OR (p1 - p2) < gap
    if p1 < threshold_top1:
        return True
    if (p1 - p2) < threshold_gap:
        return True

    return False


def validate_answer(question: Question, answer: str) -> str:
    """
    답변 형식 검증

    Returns:
        앞뒤 공백을 제거한 답변

    Raises:
        InvalidAnswerError
    """
    cleaned = (answer or "").strip()
    if not cleaned:
        raise InvalidAnswerError(f"빈 답변: {question.id}")

    if question.type == QuestionType.YESNO:
        if normalize_answer(cleaned) not in YES_VALUES | NO_VALUES:
            raise InvalidAnswerError(f"예/아니오 답변이 아님: {question.id}={cleaned!r}")

    elif question.type == QuestionType.SELECT:
        values = {v.lower() for v in question.option_values()}
        if normalize_answer(cleaned) not in values:
            raise InvalidAnswerError(f"선택지에 없는 값: {question.id}={cleaned!r}")

    return cleaned


class DisambiguationSession:
    """
    분류 세션 1건의 질문 루프
    """

    def __init__(
        self,
        config: Optional[DisambiguationConfig] = None,
        product_profile: Optional[ProductProfile] = None,
        verbose: bool = False,
    ):
        self.config = config or DisambiguationConfig()
        self.product_profile = product_profile or ProductProfile()
        self.verbose = verbose

        self.state = DisambiguationState.NEED_QUESTION
        self.answers: Dict[str, str] = {}
        self.keywords: List[str] = []
        self.hints: List[str] = []
        self.asked: List[str] = []  # 질문 id (물어본 순서)
        self.pending: Optional[Question] = None
        self.saturation_reason: str = ""

    def _log(self, message: str):
        if self.verbose:
            print(f"[Session] {message}")

    def _saturate(self, reason: str) -> None:
        self.state = DisambiguationState.SATURATED
        self.pending = None
        self.saturation_reason = reason
        self._log(f"SATURATED ({reason})")

    @property
    def is_saturated(self) -> bool:
        return self.state == DisambiguationState.SATURATED

    def next_question(self, candidates: Sequence[Candidate]) -> Optional[Question]:
        """
        다음 질문 요청

        Args:
            candidates: 현재 후보 (순서 무관)

        Returns:
            질문, 종료 상태면 None
        """
        if self.state == DisambiguationState.SATURATED:
            return None

        # 답변 대기 중이면 같은 질문 재반환
        if self.state == DisambiguationState.AWAITING_ANSWER:
            return self.pending

        scores = sorted((c.score for c in candidates), reverse=True)
        if candidates and not is_low_confidence(
            scores, self.config.threshold_top1, self.config.threshold_gap
        ):
            self._saturate("confident")
            return None

        if len(self.asked) >= self.config.max_questions:
            self._saturate("max_questions")
            return None

        question = select_next_question(candidates, self.answers, self.product_profile)
        if question is None:
            self._saturate("no_more_questions")
            return None

        # 후보 0건이면 답변 여부와 무관하게 일반 설명 질문이 돌아온다
        if question.id in self.answers:
            self._saturate("no_more_questions")
            return None

        self.pending = question
        self.asked.append(question.id)
        self.state = DisambiguationState.AWAITING_ANSWER
        self._log(f"ASK {question.id} (priority={question.priority})")
        return question

    def submit_answer(self, answer: str) -> AnswerAnalysis:
        """
        대기 중인 질문에 대한 답변 처리

        Returns:
            이번 답변의 해석 결과

        Raises:
            SessionStateError: 대기 중인 질문이 없음
            InvalidAnswerError: 질문 유형에 맞지 않는 답변
        """
        if self.state != DisambiguationState.AWAITING_ANSWER or self.pending is None:
            raise SessionStateError(f"대기 중인 질문 없음 (state={self.state.value})")

        question = self.pending
        cleaned = validate_answer(question, answer)

        analysis = interpret_answer(question.id, cleaned)
        self.answers[question.id] = cleaned

        for kw in analysis.keywords:
            if kw not in self.keywords:
                self.keywords.append(kw)
        for hint in analysis.hints:
            if hint not in self.hints:
                self.hints.append(hint)

        self.pending = None
        self.state = DisambiguationState.NEED_QUESTION
        self._log(f"ANSWER {question.id}={cleaned!r} hints={analysis.hints}")
        return analysis

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "pending": self.pending.to_dict() if self.pending else None,
            "answers": dict(self.answers),
            "keywords": list(self.keywords),
            "hints": list(self.hints),
            "asked": list(self.asked),
            "saturation_reason": self.saturation_reason,
        }
