import logging
from typing import Iterator, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from utils.constants import APIConfig, SessionDefaults
from utils.errors import AnswerStreamError
from utils.helpers import preview_text

logger = logging.getLogger(__name__)


class AskClient:
    """HTTP client for the streaming /api/ask endpoint"""

    def __init__(self, base_url: str = APIConfig.DEFAULT_SERVER_URL,
                 timeout: float = SessionDefaults.REQUEST_TIMEOUT_S,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.url = f"{self.base_url}{APIConfig.ASK_ENDPOINT}"
        self.timeout = timeout

        self.headers = {
            'Content-Type': 'application/json',
            'Accept': 'text/plain'
        }

        self.session = session or self._create_retry_session()

        logger.info(f"✅ Ask client initialized for {self.url}")

    def _create_retry_session(self) -> requests.Session:
        """Create session with retry strategy"""
        session = requests.Session()

        # Only retry connection failures: a question must not be answered twice
        retry_strategy = Retry(
            total=3,
            connect=3,
            read=0,
            status=0,
            backoff_factor=0.5,
            allowed_methods=["POST"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def stream_answer(self, question: str) -> Iterator[bytes]:
        """Post a question and return an iterator over the raw answer chunks.

        Raises AnswerStreamError when the request fails or the server answers
        with a non-success status. The iterator raises it too when the
        connection breaks mid-stream.
        """
        logger.info(f"📡 POST {self.url}: '{preview_text(question)}'")

        try:
            response = self.session.post(
                self.url,
                json={'question': question},
                headers=self.headers,
                stream=True,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            logger.error("❌ Timeout while contacting answer server")
            raise AnswerStreamError("Timed out contacting answer server") from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"❌ Connection error: {e}")
            raise AnswerStreamError("Could not connect to answer server") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Request error: {e}")
            raise AnswerStreamError(f"Request failed: {e}") from e

        if response.status_code != 200:
            message = self._error_message(response)
            response.close()
            logger.error(f"❌ Answer server returned {response.status_code}: {message}")
            raise AnswerStreamError(message, status_code=response.status_code)

        return self._iter_chunks(response)

    def _iter_chunks(self, response: requests.Response) -> Iterator[bytes]:
        try:
            for chunk in response.iter_content(chunk_size=None):
                if chunk:
                    yield chunk
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Answer stream broke: {e}")
            raise AnswerStreamError(f"Answer stream ended abnormally: {e}") from e
        finally:
            response.close()

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
            if isinstance(data, dict) and data.get('message'):
                return str(data['message'])
        except ValueError:
            pass
        return f"Answer server returned HTTP {response.status_code}"
