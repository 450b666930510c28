"""
질문 기반 분류 보정(Disambiguation) 타입 정의
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional, Tuple

from .hs_code import chapter_of


class QuestionType(str, Enum):
    """질문 유형"""
    YESNO = "yesno"    # 예/아니오
    SELECT = "select"  # 단일 선택
    TEXT = "text"      # 자유 입력


class ShortCircuit(str, Enum):
    """프로필에 이미 정보가 있으면 질문을 생략하는 조건"""
    MATERIAL_KNOWN = "material_known"  # material_composition 채워짐


@dataclass(frozen=True)
class QuestionOption:
    """선택지 (value는 질문 내에서 유일)"""
    value: str
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {"value": self.value, "label": self.label}


@dataclass(frozen=True)
class Question:
    """질문 정의 (프로세스 수명 동안 불변)"""
    id: str
    label: str
    type: QuestionType
    priority: int  # 낮을수록 먼저
    options: Tuple[QuestionOption, ...] = ()
    required: bool = True
    chapter_hints: Tuple[str, ...] = ()
    short_circuit: Optional[ShortCircuit] = None

    def option_values(self) -> List[str]:
        return [o.value for o in self.options]

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
            "priority": self.priority,
        }
        if self.options:
            result["options"] = [o.to_dict() for o in self.options]
        if self.chapter_hints:
            result["chapter_hints"] = list(self.chapter_hints)
        if self.short_circuit:
            result["short_circuit"] = self.short_circuit.value
        return result

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Question':
        """딕셔너리로부터 생성"""
        short_circuit = data.get('short_circuit')
        return Question(
            id=data['id'],
            label=data['label'],
            type=QuestionType(data['type']),
            priority=int(data['priority']),
            options=tuple(
                QuestionOption(value=o['value'], label=o['label'])
                for o in data.get('options', [])
            ),
            required=data.get('required', True),
            chapter_hints=tuple(data.get('chapter_hints', [])),
            short_circuit=ShortCircuit(short_circuit) if short_circuit else None,
        )


@dataclass
class Candidate:
    """
    외부 검색/스코어링이 제시한 분류 후보

    엔진은 chapter만 읽는다. score는 재채점/신뢰도 판정용.
    """
    code: str     # 10자리 관세 코드
    chapter: str  # code 앞 2자리
    label: str = ""
    score: float = 0.0

    @staticmethod
    def from_code(code: str, label: str = "", score: float = 0.0) -> 'Candidate':
        """코드로부터 chapter를 유도하여 생성"""
        return Candidate(code=code, chapter=chapter_of(code), label=label, score=score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "chapter": self.chapter,
            "label": self.label,
            "score": round(self.score, 4),
        }


@dataclass
class ProductProfile:
    """추출된 물품 속성 스냅샷 (엔진에서는 읽기 전용)"""
    product_name: str = ""
    description: str = ""
    material_composition: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_name": self.product_name,
            "description": self.description,
            "material_composition": list(self.material_composition),
        }


@dataclass
class AnswerAnalysis:
    """답변 해석 결과"""
    keywords: List[str] = field(default_factory=list)
    hints: List[str] = field(default_factory=list)  # "ch52" 등 류 친화 토큰

    def is_empty(self) -> bool:
        return not self.keywords and not self.hints

    def to_dict(self) -> Dict[str, List[str]]:
        return {"keywords": list(self.keywords), "hints": list(self.hints)}
