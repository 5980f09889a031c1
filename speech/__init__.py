"""Speech recognition package: recognition engines and transcript accumulation."""

from .types import Transcript, RecognitionAlternative, RecognitionResult, TranscriptBuffer
from .recognition_service import RecognitionEngine, NullRecognitionEngine
from .transcript import TranscriptAccumulator, ingest_results

__all__ = [
    "Transcript",
    "RecognitionAlternative",
    "RecognitionResult",
    "TranscriptBuffer",
    "RecognitionEngine",
    "NullRecognitionEngine",
    "TranscriptAccumulator",
    "ingest_results",
]
