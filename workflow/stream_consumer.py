# workflow/stream_consumer.py
"""
Incremental reader for a streamed answer
"""
import codecs
import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from utils.answer_splitter import split_answer_and_code
from .session import StreamBuffer

logger = logging.getLogger(__name__)

Chunk = Union[bytes, str]


@dataclass(frozen=True)
class StreamUpdate:
    answer: str
    code: str


class StreamConsumer:
    """Feeds streamed chunks through the answer/code splitter"""

    def __init__(self, buffer: Optional[StreamBuffer] = None, encoding: str = 'utf-8'):
        self.buffer = buffer if buffer is not None else StreamBuffer()
        self._decoder = codecs.getincrementaldecoder(encoding)(errors='replace')
        self.aborted = False

    def feed(self, chunk: Chunk) -> Optional[StreamUpdate]:
        """Append one chunk and return an update if answer or code changed"""
        if isinstance(chunk, bytes):
            text = self._decoder.decode(chunk)
        else:
            text = chunk
        return self._append(text)

    def finish(self) -> Optional[StreamUpdate]:
        """Flush bytes still held by the decoder at end of stream"""
        return self._append(self._decoder.decode(b'', final=True))

    def consume(self, chunks: Iterable[Chunk],
                cancel_event: Optional[threading.Event] = None) -> Iterator[StreamUpdate]:
        """Yield an update for every chunk that changes the answer or code"""
        try:
            for chunk in chunks:
                if cancel_event is not None and cancel_event.is_set():
                    logger.info("🛑 Answer stream aborted")
                    self.aborted = True
                    break

                update = self.feed(chunk)
                if update:
                    yield update
        finally:
            close = getattr(chunks, 'close', None)
            if close:
                close()

        if not self.aborted:
            update = self.finish()
            if update:
                yield update

    def _append(self, text: str) -> Optional[StreamUpdate]:
        if not text:
            return None

        self.buffer.full_text += text
        answer, code = split_answer_and_code(self.buffer.full_text)

        if answer == self.buffer.current_answer and code == self.buffer.current_code:
            return None

        self.buffer.current_answer = answer
        self.buffer.current_code = code
        return StreamUpdate(answer=answer, code=code)
