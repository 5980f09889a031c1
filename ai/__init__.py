"""AI processing module"""

from .processor import AIProcessor
from .prompts import AIPrompts

__all__ = ['AIProcessor', 'AIPrompts']
