"""Helper utility functions"""

from typing import Any

MAX_QUESTION_LENGTH = 2000


def safe_int(value: Any, default: int = 0) -> int:
    """Safely convert value to integer"""
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def safe_float(value: Any, default: float = 0.0) -> float:
    """Safely convert value to float"""
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def clean_text_input(text: str, max_length: int = MAX_QUESTION_LENGTH) -> str:
    """Collapse whitespace and cap the length of user text"""
    if not text:
        return ""

    text = ' '.join(text.split())

    if len(text) > max_length:
        text = text[:max_length]

    return text.strip()


def preview_text(text: str, max_length: int = 60) -> str:
    """Shorten text for log lines"""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
