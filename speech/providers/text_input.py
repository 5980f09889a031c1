import logging
from typing import List

from ..recognition_service import RecognitionEngine
from ..types import RecognitionResult

logger = logging.getLogger(__name__)


class TextInputRecognitionEngine(RecognitionEngine):
    """Recognition engine fed with typed text instead of audio.

    Behaves like a browser engine in continuous mode: results accumulate in
    one list per session, a trailing interim result is revised in place, and
    the whole list is emitted on every change.
    """

    # Results are emitted synchronously from push()
    delivers_late_results = False

    def __init__(self):
        super().__init__()
        self.active = False
        self.start_count = 0
        self._results: List[RecognitionResult] = []

    def start(self):
        if self.active:
            logger.debug("Recognition already active")
            return
        self.active = True
        self.start_count += 1
        self._results = []
        logger.debug("🎤 Text recognition started")

    def stop(self):
        if not self.active:
            return
        self.active = False
        logger.debug("🛑 Text recognition stopped")
        self._emit_end()

    def push(self, text: str, is_final: bool = True):
        """Add or revise a result and emit the cumulative list."""
        if not self.active:
            logger.debug(f"Ignoring input while recognition is inactive: '{text}'")
            return

        result = RecognitionResult.from_text(text, is_final=is_final)
        if self._results and not self._results[-1].is_final:
            self._results[-1] = result
        else:
            self._results.append(result)

        self._emit_results(self._results)

    def simulate_timeout(self):
        """End the session on the engine's own initiative."""
        if not self.active:
            return
        self.active = False
        logger.debug("⏱️ Text recognition timed out")
        self._emit_end()
