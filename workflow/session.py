# workflow/session.py
"""
Explicit state for one voice question-answer session
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from speech.transcript import TranscriptAccumulator


class SessionState(Enum):
    IDLE = 'idle'
    LISTENING = 'listening'
    STREAMING = 'streaming'


@dataclass
class StreamBuffer:
    """Growing answer text and its latest answer/code split"""
    full_text: str = ''
    current_answer: str = ''
    current_code: str = ''


@dataclass
class VoiceSession:
    """Everything the recognition and stream callbacks share"""
    state: SessionState = SessionState.IDLE
    transcript: TranscriptAccumulator = field(default_factory=TranscriptAccumulator)
    stream: Optional[StreamBuffer] = None
    force_stop: bool = False
    in_grace_period: bool = False
    answer_text: str = ''
    code_text: str = ''
    error: Optional[str] = None

    @property
    def is_listening(self) -> bool:
        return self.state is SessionState.LISTENING

    @property
    def is_streaming(self) -> bool:
        return self.state is SessionState.STREAMING

    def clear_output(self):
        """Clear the displayed answer, code and error"""
        self.answer_text = ''
        self.code_text = ''
        self.error = None
