"""Voice session workflow module"""

from .session import SessionState, StreamBuffer, VoiceSession
from .stream_consumer import StreamConsumer, StreamUpdate
from .controller import VoiceSessionController, SessionListener

__all__ = [
    'SessionState', 'StreamBuffer', 'VoiceSession', 'StreamConsumer',
    'StreamUpdate', 'VoiceSessionController', 'SessionListener'
]
