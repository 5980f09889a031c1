import io
import logging
from typing import List, Optional

from ..recognition_service import RecognitionEngine
from ..types import RecognitionResult, Transcript

logger = logging.getLogger(__name__)

_MIME_EXTENSIONS = {
    'audio/ogg': 'ogg',
    'audio/wav': 'wav',
    'audio/x-wav': 'wav',
    'audio/mpeg': 'mp3',
    'audio/mp3': 'mp3',
    'audio/webm': 'webm',
    'audio/mp4': 'm4a',
}


class OpenAIRecognitionEngine(RecognitionEngine):
    """Recognition engine that transcribes recorded clips with OpenAI Whisper.

    Each submitted clip becomes one final result appended to the session's
    cumulative result list.
    """

    delivers_late_results = False

    def __init__(self, client, model: str = "whisper-1", language: Optional[str] = None):
        super().__init__()
        self.client = client
        self.model = model
        # Whisper takes ISO-639-1 codes, e.g. "en" for "en-US"
        self.language = language.split('-')[0].lower() if language else None
        self.active = False
        self._results: List[RecognitionResult] = []

    def start(self):
        self.active = True
        self._results = []
        logger.info(f"🎙️ OpenAI recognition started (model {self.model})")

    def stop(self):
        if not self.active:
            return
        self.active = False
        self._emit_end()

    def transcribe(self, media_bytes: bytes, mime_type: str = "audio/wav") -> Transcript:
        """Transcribe audio bytes to text."""
        try:
            buf = io.BytesIO(media_bytes)
            base_mime = mime_type.split(';')[0].strip().lower()
            buf.name = f"audio.{_MIME_EXTENSIONS.get(base_mime, 'wav')}"  # some SDKs expect a filename

            kwargs = {'model': self.model, 'file': buf, 'response_format': "json"}
            if self.language:
                kwargs['language'] = self.language

            result = self.client.audio.transcriptions.create(**kwargs)

            text = getattr(result, 'text', None)
            if not text and isinstance(result, dict):
                text = result.get('text')

            if text:
                cleaned_text = text.strip()
                logger.info(f"✅ ASR completed (OpenAI {self.model}): '{cleaned_text}'")
                return Transcript(text=cleaned_text, language=self.language)

            logger.warning("⚠️ ASR returned no text")
            return Transcript(text="", language=self.language)

        except Exception as e:
            logger.error(f"❌ ASR error: {e}")
            return Transcript(text="", language=self.language)

    def submit_audio(self, media_bytes: bytes, mime_type: str = "audio/wav") -> bool:
        """Transcribe a clip and emit it as a new final result."""
        if not self.active:
            logger.warning("⚠️ Audio submitted while recognition is inactive, ignoring")
            return False

        transcript = self.transcribe(media_bytes, mime_type)
        if not transcript.text:
            return False

        self._results.append(RecognitionResult.from_text(transcript.text, is_final=True))
        self._emit_results(self._results)
        return True
