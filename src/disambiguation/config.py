"""
설정 로드 (configs/disambiguation.yaml)
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_CONFIG_PATH = "configs/disambiguation.yaml"


@dataclass
class DisambiguationConfig:
    """질문 루프 설정"""
    threshold_top1: float = 0.50   # p1 < 0.50 이면 저신뢰도
    threshold_gap: float = 0.15    # (p1 - p2) < 0.15 이면 저신뢰도
    max_questions: int = 5         # 세션당 최대 질문 수
    hint_boost: float = 0.15       # 힌트 일치 후보 가산점

    def __post_init__(self):
        if not 0.0 <= self.threshold_top1 <= 1.0:
            raise ValueError(f"threshold_top1 범위 오류: {self.threshold_top1}")
        if not 0.0 <= self.threshold_gap <= 1.0:
            raise ValueError(f"threshold_gap 범위 오류: {self.threshold_gap}")
        if self.max_questions < 1:
            raise ValueError(f"max_questions는 1 이상: {self.max_questions}")
        if self.hint_boost < 0.0:
            raise ValueError(f"hint_boost는 0 이상: {self.hint_boost}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'DisambiguationConfig':
        """YAML 구조(clarify/rescore 섹션)로부터 생성"""
        clarify = data.get('clarify', {}) or {}
        rescore = data.get('rescore', {}) or {}
        defaults = DisambiguationConfig()
        return DisambiguationConfig(
            threshold_top1=float(clarify.get('threshold_top1', defaults.threshold_top1)),
            threshold_gap=float(clarify.get('threshold_gap', defaults.threshold_gap)),
            max_questions=int(clarify.get('max_questions', defaults.max_questions)),
            hint_boost=float(rescore.get('hint_boost', defaults.hint_boost)),
        )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> DisambiguationConfig:
    """
    설정 파일 로드 (파일이 없으면 기본값)

    Raises:
        ValueError: 값 범위 오류, 최상위가 매핑이 아님
    """
    path = Path(config_path)
    if not path.exists():
        print(f"[Config] 경고: 설정 파일 없음: {path} (기본값 사용)")
        return DisambiguationConfig()

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"설정 파일 최상위는 매핑이어야 함: {path}")

    config = DisambiguationConfig.from_dict(data)
    print(f"[Config] 로드: {path} (max_questions={config.max_questions})")
    return config
