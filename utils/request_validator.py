from typing import Any, Optional

from .helpers import clean_text_input, MAX_QUESTION_LENGTH


class QuestionValidator:
    """Validation for incoming /api/ask payloads"""

    @staticmethod
    def is_valid_payload(payload: Any) -> bool:
        """A payload must be a JSON object with a non-blank string question"""
        if not isinstance(payload, dict):
            return False

        question = payload.get('question')
        if not isinstance(question, str):
            return False

        return bool(question.strip())

    @staticmethod
    def extract_question(payload: Any, max_length: int = MAX_QUESTION_LENGTH) -> Optional[str]:
        """Return the cleaned question, or None if the payload is invalid"""
        if not QuestionValidator.is_valid_payload(payload):
            return None

        question = clean_text_input(payload['question'], max_length=max_length)
        return question or None
