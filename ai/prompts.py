# ai/prompts.py

"""
Prompts for the interview tutor answer backend
"""

from typing import Dict, List, Optional


class AIPrompts:
    """Prompt templates for tutor answers"""

    SYSTEM_PROMPT = (
        "You are a helpful AI interview tutor. Always give a short in 2-3 lines "
        "and explanation followed by a code snippet if applicable."
    )

    @staticmethod
    def build_messages(question: str, system_prompt: Optional[str] = None) -> List[Dict[str, str]]:
        """Build the chat messages for a single question (no history)"""
        return [
            {"role": "system", "content": system_prompt or AIPrompts.SYSTEM_PROMPT},
            {"role": "user", "content": question},
        ]
