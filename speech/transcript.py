import logging
from typing import List, Sequence, Tuple

from .types import RecognitionResult, TranscriptBuffer

logger = logging.getLogger(__name__)

SEPARATOR = ' '


def ingest_results(results: Sequence[RecognitionResult], resume_index: int) -> Tuple[str, str, int]:
    """Process new recognition results from a cumulative result list.

    Returns (interim, final_text, new_index). ``final_text`` holds only the
    results committed by this call, each followed by a separator. The index
    advances across the contiguous run of final results starting at
    ``resume_index``; everything from the first non-final result onwards is
    interim text, rebuilt on every call.
    """
    interim_parts: List[str] = []
    final_text = ''
    new_index = resume_index
    committing = True

    for position in range(resume_index, len(results)):
        result = results[position]
        if committing and result.is_final:
            final_text += result.top_transcript + SEPARATOR
            new_index = position + 1
        else:
            committing = False
            interim_parts.append(result.top_transcript)

    interim = SEPARATOR.join(interim_parts).strip()
    return interim, final_text, new_index


class TranscriptAccumulator:
    """Accumulates interim and final transcript text for one listening session."""

    def __init__(self):
        self.buffer = TranscriptBuffer()

    @property
    def interim(self) -> str:
        return self.buffer.interim

    @property
    def final(self) -> str:
        return self.buffer.final

    @property
    def last_processed_index(self) -> int:
        return self.buffer.last_processed_index

    def ingest(self, results: Sequence[RecognitionResult]) -> Tuple[str, str, int]:
        """Merge a cumulative result list and return (interim, final, index)."""
        interim, final_text, new_index = ingest_results(results, self.buffer.last_processed_index)

        self.buffer.interim = interim
        if final_text:
            self.buffer.final += final_text
            logger.debug(f"📝 Final transcript extended to {len(self.buffer.final)} chars")
        self.buffer.last_processed_index = new_index

        return self.buffer.interim, self.buffer.final, new_index

    def start_new_result_list(self):
        """Keep the final text but re-base the index for a restarted engine session."""
        self.buffer.interim = ""
        self.buffer.last_processed_index = 0

    def reset(self):
        """Clear all accumulated text and the high-water index."""
        self.buffer = TranscriptBuffer()
