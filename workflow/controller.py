# workflow/controller.py
"""
Listening -> submission -> streaming -> reset coordination for one voice session
"""
import logging
import threading
import time
from typing import Callable, Iterable, List, Optional, Union

from speech.recognition_service import RecognitionEngine, NullRecognitionEngine
from speech.types import RecognitionResult
from utils.constants import ErrorMessages, SessionDefaults
from utils.helpers import preview_text
from utils.logging import log_session_transition
from .session import SessionState, StreamBuffer, VoiceSession
from .stream_consumer import StreamConsumer

logger = logging.getLogger(__name__)

AnswerSource = Callable[[str], Iterable[Union[bytes, str]]]


class SessionListener:
    """Receives UI-facing notifications. Override what you need."""

    def on_state_change(self, state: SessionState):
        pass

    def on_transcript(self, interim: str, final: str):
        pass

    def on_update(self, answer: str, code: str):
        pass

    def on_complete(self):
        pass

    def on_error(self, message: str):
        pass


class VoiceSessionController:
    """Drives a VoiceSession through its idle, listening and streaming states.

    All callbacks (recognition results, recognition end, user toggles and
    stream chunks) run on the caller's thread; the session object is the only
    state they share. An engine with ``delivers_late_results`` set calls back
    from its own thread, so stop_and_submit() blocks for the grace delay to
    let its trailing event land.
    """

    def __init__(self, answer_source: AnswerSource,
                 engine: Optional[RecognitionEngine] = None,
                 listener: Optional[SessionListener] = None,
                 grace_delay: float = SessionDefaults.SUBMIT_GRACE_DELAY_MS / 1000.0,
                 sleep: Callable[[float], None] = time.sleep):
        self.answer_source = answer_source
        self.engine = engine or NullRecognitionEngine()
        self.listener = listener or SessionListener()
        self.grace_delay = grace_delay
        self._sleep = sleep
        self._cancel_event = threading.Event()

        self.session = VoiceSession()

        if self.engine.is_available:
            self.engine.subscribe(self.handle_results, self.handle_recognition_end)
        else:
            logger.info("ℹ️ Speech recognition not available, listening disabled")

    @property
    def state(self) -> SessionState:
        return self.session.state

    def toggle(self) -> SessionState:
        """Start listening when idle, stop and submit when listening"""
        if self.session.is_streaming:
            logger.debug("Toggle ignored while streaming")
            return self.session.state

        if not self.engine.is_available:
            return self.session.state

        if self.session.is_listening:
            return self.stop_and_submit()
        return self.start_listening()

    def start_listening(self) -> SessionState:
        if self.session.state is not SessionState.IDLE or not self.engine.is_available:
            return self.session.state

        self.session.transcript.reset()
        self.session.stream = None
        self.session.clear_output()
        self.session.force_stop = False
        self._cancel_event.clear()

        self.listener.on_transcript('', '')
        self.listener.on_update('', '')

        self._set_state(SessionState.LISTENING, 'start')
        self.engine.start()
        return self.session.state

    def stop_and_submit(self) -> SessionState:
        """Stop recognition and stream an answer for the final transcript"""
        if not self.session.is_listening:
            return self.session.state

        self.session.force_stop = True
        self.engine.stop()
        self._set_state(SessionState.IDLE, 'stop')

        # Let a trailing recognition event land before reading the transcript
        if self.grace_delay > 0 and self.engine.delivers_late_results:
            self.session.in_grace_period = True
            try:
                self._sleep(self.grace_delay)
            finally:
                self.session.in_grace_period = False

        question = self.session.transcript.final.strip()
        if not question:
            logger.warning(f"⚠️ {ErrorMessages.EMPTY_TRANSCRIPT}")
            return self.session.state

        return self.submit(question)

    def submit(self, question: str) -> SessionState:
        """Stream the answer to a question; returns once the stream has ended"""
        if self.session.state is not SessionState.IDLE:
            return self.session.state

        self.session.force_stop = True
        self.session.stream = StreamBuffer()
        self.session.clear_output()
        self._cancel_event.clear()
        self._set_state(SessionState.STREAMING, 'submit')

        logger.info(f"📨 Submitting question: '{preview_text(question)}'")
        consumer = StreamConsumer(self.session.stream)

        try:
            chunks = self.answer_source(question)
            for update in consumer.consume(chunks, self._cancel_event):
                self.session.answer_text = update.answer
                self.session.code_text = update.code
                self.listener.on_update(update.answer, update.code)
        except Exception as e:
            logger.error(f"❌ Answer stream failed: {e}")
            self.session.error = str(e) or ErrorMessages.STREAM_FAILED
            self.listener.on_error(self.session.error)
        finally:
            self._finish_stream()

        if not self.session.error:
            self.listener.on_complete()
        return self.session.state

    def abort(self):
        """Ask the in-flight stream to stop before its next chunk"""
        if self.session.is_streaming:
            self._cancel_event.set()

    def handle_results(self, results: List[RecognitionResult]):
        """Recognition result callback"""
        if not (self.session.is_listening or self.session.in_grace_period):
            logger.debug(f"Recognition results ignored in state {self.session.state.value}")
            return

        interim, final, _ = self.session.transcript.ingest(results)
        self.listener.on_transcript(interim, final)

    def handle_recognition_end(self):
        """Recognition end callback: restart if the engine stopped on its own"""
        if self.session.is_listening and not self.session.force_stop:
            logger.info("🔄 Recognition ended unexpectedly, restarting")
            # A restarted engine delivers a fresh result list
            self.session.transcript.start_new_result_list()
            self.engine.start()

    def _finish_stream(self):
        self.session.stream = None
        self.session.transcript.reset()
        self.listener.on_transcript('', '')
        self._set_state(SessionState.IDLE, 'stream end')

    def _set_state(self, state: SessionState, trigger: str):
        previous = self.session.state
        self.session.state = state
        if previous is not state:
            log_session_transition(previous.value, state.value, trigger)
            self.listener.on_state_change(state)
