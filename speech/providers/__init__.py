"""Recognition engine implementations."""

from .text_input import TextInputRecognitionEngine
from .openai_asr import OpenAIRecognitionEngine

__all__ = ["TextInputRecognitionEngine", "OpenAIRecognitionEngine"]
