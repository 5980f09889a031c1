"""Split streamed model output into a prose answer and a fenced code block"""

from typing import Tuple

FENCE_MARKER = '```'

# Characters allowed in a language tag after the opening fence (js, c++, c#, objective-c, ...)
_TAG_PUNCTUATION = '+-#._'


def _is_language_tag(line: str) -> bool:
    """Check if the rest of the opening-fence line is a single language token"""
    if not line:
        return False
    return all(ch.isalnum() or ch in _TAG_PUNCTUATION for ch in line)


def _strip_language_tag(fenced: str) -> str:
    """Drop the language tag line from fenced content, if there is one"""
    newline = fenced.find('\n')
    if newline == -1:
        # Single-line fence: everything is code
        return fenced

    first_line = fenced[:newline].strip()
    if not first_line or _is_language_tag(first_line):
        return fenced[newline + 1:]
    return fenced


def split_answer_and_code(text: str) -> Tuple[str, str]:
    """Split text into (answer, code) around the first complete fenced block.

    The first fence marker opens the block and the next one closes it. Until
    the closing marker arrives the whole text, partial fence included, is
    returned as the answer so a streaming UI never shows half-parsed code.
    """
    if not text:
        return '', ''

    opening = text.find(FENCE_MARKER)
    if opening == -1:
        return text.strip(), ''

    content_start = opening + len(FENCE_MARKER)
    closing = text.find(FENCE_MARKER, content_start)
    if closing == -1:
        return text.strip(), ''

    answer = text[:opening].strip()
    code = _strip_language_tag(text[content_start:closing]).strip()
    return answer, code
