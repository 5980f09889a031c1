"""HTTP client for the answer server"""

from .ask_client import AskClient

__all__ = ['AskClient']
