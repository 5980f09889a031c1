from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Transcript:
    """Result of ASR transcription."""
    text: str
    language: Optional[str] = None
    confidence: Optional[float] = None
    duration_s: Optional[float] = None


@dataclass
class RecognitionAlternative:
    """One candidate transcript for a recognition result."""
    transcript: str
    confidence: Optional[float] = None


@dataclass
class RecognitionResult:
    """One entry of the cumulative result list a recognition engine emits."""
    alternatives: List[RecognitionAlternative] = field(default_factory=list)
    is_final: bool = False

    @property
    def top_transcript(self) -> str:
        if not self.alternatives:
            return ""
        return self.alternatives[0].transcript

    @classmethod
    def from_text(cls, text: str, is_final: bool = False, confidence: Optional[float] = None) -> "RecognitionResult":
        return cls(alternatives=[RecognitionAlternative(text, confidence)], is_final=is_final)


@dataclass
class TranscriptBuffer:
    """Interim and final transcript text plus the high-water index."""
    interim: str = ""
    final: str = ""
    last_processed_index: int = 0
