"""Constants and enumerations"""


class APIConfig:
    ASK_ENDPOINT = '/api/ask'
    HEALTH_ENDPOINT = '/health'
    STREAM_CONTENT_TYPE = 'text/plain; charset=utf-8'
    DEFAULT_MODEL = 'gpt-4'
    DEFAULT_ASR_MODEL = 'whisper-1'
    DEFAULT_SERVER_URL = 'http://localhost:5000'


class SessionDefaults:
    SUBMIT_GRACE_DELAY_MS = 300
    REQUEST_TIMEOUT_S = 60
    RECOGNITION_LANGUAGE = 'en-US'


class ErrorMessages:
    NO_DATA = "No data"
    INVALID_QUESTION = "Request body must be JSON with a non-empty 'question' string"
    BACKEND_UNAVAILABLE = "Answer backend unavailable"
    STREAM_FAILED = "The answer stream failed. Please try again"
    EMPTY_TRANSCRIPT = "Transcript is empty. Nothing to submit."
