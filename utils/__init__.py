"""Utility functions module"""

from .constants import APIConfig, SessionDefaults, ErrorMessages
from .errors import VoiceTutorError, AnswerStreamError
from .helpers import safe_int, safe_float, clean_text_input, preview_text
from .logging import (
    ColoredFormatter, setup_logging, log_session_transition, log_performance
)
from .answer_splitter import split_answer_and_code, FENCE_MARKER
from .request_validator import QuestionValidator

__all__ = [
    # Constants
    'APIConfig', 'SessionDefaults', 'ErrorMessages',

    # Errors
    'VoiceTutorError', 'AnswerStreamError',

    # Helpers
    'safe_int', 'safe_float', 'clean_text_input', 'preview_text',

    # Logging
    'ColoredFormatter', 'setup_logging', 'log_session_transition', 'log_performance',

    # Parsing and validation
    'split_answer_and_code', 'FENCE_MARKER', 'QuestionValidator'
]
