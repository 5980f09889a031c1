"""Exceptions shared by the voice tutor components"""


class VoiceTutorError(Exception):
    """Base class for voice tutor errors"""


class AnswerStreamError(VoiceTutorError):
    """The answer stream could not be established or ended abnormally"""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
