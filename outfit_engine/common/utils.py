import math


def round_half_up(value: float) -> int:
    """0.5는 항상 올림 (Python 기본 round()는 짝수 쪽으로 반올림)"""
    return int(math.floor(value + 0.5))


def clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def normalize_label(value: str | None) -> str:
    """색상/카테고리 비교용 정규화 (소문자, 공백 제거)"""
    if not value:
        return ""
    return value.strip().lower()
