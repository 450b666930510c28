"""
HS 코드 정규화/검증 유틸리티
"""

import re


_NON_CODE_CHARS = re.compile(r'[.\s]')
_DIGITS = re.compile(r'^\d+$')


def normalize_hs_code(code: str) -> str:
    """
    HS 코드를 10자리로 정규화
    - 점/공백 제거
    - 뒤쪽 0 채움 (예: "6109.10" -> "6109100000")
    """
    if not code:
        return ""
    cleaned = _NON_CODE_CHARS.sub('', code)
    return cleaned.ljust(10, '0')


def is_valid_hs_code(code: str) -> bool:
    """HS 코드 형태 검증 (4자리 이상 숫자, 류 01-99, 연도 형태 제외)"""
    if not code or len(code) < 4:
        return False
    if not _DIGITS.match(code):
        return False

    chapter = int(code[:2])
    if chapter < 1 or chapter > 99:
        return False

    # 날짜(YYYYMMDD)처럼 보이는 8자리 값 제외
    if len(code) >= 8:
        as_number = int(code)
        if 19000000 <= as_number <= 21009999:
            return False

    return True


def chapter_of(code: str) -> str:
    """코드의 류(앞 2자리). 빈 코드면 빈 문자열"""
    return normalize_hs_code(code)[:2]


def format_hs_code(code: str) -> str:
    """표시용 포맷 (NNNN.NN.NN.NN)"""
    if not code:
        return ""
    normalized = normalize_hs_code(code)
    return f"{normalized[:4]}.{normalized[4:6]}.{normalized[6:8]}.{normalized[8:10]}"
