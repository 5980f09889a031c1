# ai/processor.py

import logging
import time
from typing import Iterator, Optional

import openai

from .prompts import AIPrompts
from utils.errors import AnswerStreamError
from utils.helpers import preview_text
from utils.logging import log_performance

logger = logging.getLogger(__name__)


class AIProcessor:
    """Streams tutor answers from the OpenAI chat completion API"""

    def __init__(self, api_key: str = None, model: str = "gpt-4",
                 system_prompt: Optional[str] = None, client=None):
        self.api_key = api_key
        self.model = model
        self.system_prompt = system_prompt or AIPrompts.SYSTEM_PROMPT
        self.client = client

        if self.client is None and api_key:
            try:
                self.client = openai.OpenAI(api_key=api_key)
                logger.info("✅ OpenAI client initialized")
            except Exception as e:
                logger.error(f"⚠️ OpenAI initialization failed: {e}")
                self.client = None
        elif self.client is None:
            logger.warning("⚠️ Running without OpenAI - answers unavailable")

    def is_available(self) -> bool:
        """Check if an OpenAI client is configured"""
        return self.client is not None

    def open_stream(self, question: str) -> Iterator[str]:
        """Start a streamed answer and return an iterator over its tokens.

        The completion request is sent before this returns, so a backend that
        cannot be reached raises AnswerStreamError here rather than mid-stream.
        """
        if not self.client:
            raise AnswerStreamError("AI client not available")

        logger.info(f"🤖 Asking {self.model}: '{preview_text(question)}'")

        try:
            stream = self.client.chat.completions.create(
                model=self.model,
                stream=True,
                messages=AIPrompts.build_messages(question, self.system_prompt),
            )
        except Exception as e:
            error_msg = str(e)
            if "quota" in error_msg.lower() or "insufficient_quota" in error_msg.lower() or "429" in error_msg:
                logger.warning("⚠️ OpenAI quota exceeded or rate limited")
            else:
                logger.error(f"❌ OpenAI request error: {error_msg}")
            raise AnswerStreamError(f"Completion request failed: {error_msg}") from e

        return self._iter_tokens(stream)

    def _iter_tokens(self, stream) -> Iterator[str]:
        """Yield the text delta of each streamed completion chunk"""
        started = time.time()
        token_count = 0
        success = False
        try:
            for chunk in stream:
                token = self._extract_token(chunk)
                if token:
                    token_count += 1
                    yield token
            success = True
        finally:
            log_performance(f"answer stream ({token_count} tokens)", time.time() - started, success)

    @staticmethod
    def _extract_token(chunk) -> str:
        choices = getattr(chunk, 'choices', None)
        if not choices:
            return ''
        delta = getattr(choices[0], 'delta', None)
        if delta is None:
            return ''
        return getattr(delta, 'content', None) or ''
