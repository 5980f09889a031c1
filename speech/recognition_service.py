import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from .types import RecognitionResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[List[RecognitionResult]], None]
EndCallback = Callable[[], None]


class RecognitionEngine(ABC):
    """Continuous speech recognition engine.

    Emits the full, cumulative list of results on every event and an end
    event when a recognition session stops (on request or on its own).
    """

    # Engines that call back from their own thread may deliver one more event
    # after stop(); the controller waits briefly for it
    delivers_late_results = True

    def __init__(self):
        self._on_result: Optional[ResultCallback] = None
        self._on_end: Optional[EndCallback] = None

    @property
    def is_available(self) -> bool:
        return True

    def subscribe(self, on_result: ResultCallback, on_end: EndCallback):
        """Register the result and end-of-session callbacks."""
        self._on_result = on_result
        self._on_end = on_end

    @abstractmethod
    def start(self):
        """Begin a recognition session."""
        raise NotImplementedError

    @abstractmethod
    def stop(self):
        """Request the session to stop. An engine may emit one trailing event."""
        raise NotImplementedError

    def _emit_results(self, results: List[RecognitionResult]):
        if self._on_result:
            self._on_result(list(results))

    def _emit_end(self):
        if self._on_end:
            self._on_end()


class NullRecognitionEngine(RecognitionEngine):
    """Stand-in used when no recognition capability exists."""

    @property
    def is_available(self) -> bool:
        return False

    def start(self):
        logger.debug("Recognition unavailable, start ignored")

    def stop(self):
        logger.debug("Recognition unavailable, stop ignored")
