import os
import logging
from typing import Dict, Optional
from dotenv import load_dotenv

from utils.constants import APIConfig, SessionDefaults
from utils.helpers import safe_int, safe_float

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class AssistantConfig:
    """Server-side configuration for the answer backend"""

    def __init__(self):
        """Initialize configuration from environment variables with validation"""
        if not self._validate_required_environment():
            raise ValueError("Missing required environment variables. Check configuration.")

        # Core credentials
        self.openai_api_key = os.getenv('OPENAI_API_KEY')

        # AI configuration
        self.openai_model = os.getenv('OPENAI_MODEL', APIConfig.DEFAULT_MODEL)
        self.system_prompt = os.getenv('TUTOR_SYSTEM_PROMPT') or None

        # Server configuration
        self.port = safe_int(os.environ.get('PORT', 5000), default=-1)
        self.debug_mode = os.environ.get('ENVIRONMENT', 'development') == 'development'
        self.host = os.environ.get('HOST', '0.0.0.0')
        self.log_level = os.environ.get('LOG_LEVEL', 'INFO')

        if not self.validate_config():
            raise ValueError("Configuration validation failed. Check required fields.")

        self.print_safe_debug_info()

    def _validate_required_environment(self) -> bool:
        """Validate required environment variables before initialization"""
        required_vars = ['OPENAI_API_KEY']

        missing_vars = [var for var in required_vars if not os.getenv(var)]

        if missing_vars:
            logger.error(f"❌ Missing required environment variables: {', '.join(missing_vars)}")
            logger.error("Please set the required environment variables before starting the application.")
            return False

        return True

    def validate_config(self) -> bool:
        """Validate configuration values"""
        validation_errors = []

        if not self.openai_model:
            validation_errors.append("OPENAI_MODEL must not be empty")

        if self.port < 1 or self.port > 65535:
            validation_errors.append(f"Invalid port number: {os.environ.get('PORT')}")

        if validation_errors:
            for error in validation_errors:
                logger.error(f"❌ Configuration error: {error}")
            return False

        logger.info("✅ Configuration validated successfully")
        return True

    def print_safe_debug_info(self):
        """Log configuration without exposing credentials"""
        logger.info("=" * 50)
        logger.info("🔧 VOICE TUTOR CONFIGURATION")
        logger.info("=" * 50)
        logger.info(f"OPENAI_API_KEY: {'✅ Loaded' if self.openai_api_key else '❌ Missing'}")
        logger.info(f"OPENAI_MODEL: {self.openai_model}")
        logger.info(f"TUTOR_SYSTEM_PROMPT: {'custom' if self.system_prompt else 'default'}")
        logger.info(f"ENVIRONMENT: {'development' if self.debug_mode else 'production'}")
        logger.info(f"HOST: {self.host}")
        logger.info(f"PORT: {self.port}")
        logger.info("=" * 50)

    def get_config_dict(self) -> Dict:
        """Return configuration as dictionary"""
        return {
            'openai_api_key': self.openai_api_key,
            'openai_model': self.openai_model,
            'system_prompt': self.system_prompt,
            'port': self.port,
            'debug_mode': self.debug_mode,
            'host': self.host,
            'log_level': self.log_level
        }

    def get_safe_config(self) -> Dict:
        """Get configuration with sensitive data hidden"""
        safe_config = self.get_config_dict().copy()

        if safe_config['openai_api_key']:
            safe_config['openai_api_key'] = safe_config['openai_api_key'][:7] + "..."

        return safe_config

    def is_production(self) -> bool:
        """Check if running in production mode"""
        return not self.debug_mode


class VoiceClientConfig:
    """Configuration for the terminal voice client"""

    def __init__(self, server_url: Optional[str] = None):
        self.server_url = (server_url or os.getenv('ASK_SERVER_URL', APIConfig.DEFAULT_SERVER_URL)).rstrip('/')
        self.submit_grace_delay = safe_int(
            os.getenv('SUBMIT_GRACE_DELAY_MS'), SessionDefaults.SUBMIT_GRACE_DELAY_MS
        ) / 1000.0
        self.request_timeout = safe_float(
            os.getenv('ASK_REQUEST_TIMEOUT'), SessionDefaults.REQUEST_TIMEOUT_S
        )
        self.recognition_language = os.getenv('RECOGNITION_LANGUAGE', SessionDefaults.RECOGNITION_LANGUAGE)
        self.asr_model = os.getenv('ASR_MODEL', APIConfig.DEFAULT_ASR_MODEL)
        self.openai_api_key = os.getenv('OPENAI_API_KEY')

        if self.submit_grace_delay < 0:
            logger.warning("⚠️ Negative SUBMIT_GRACE_DELAY_MS, using 0")
            self.submit_grace_delay = 0.0

    def get_config_dict(self) -> Dict:
        """Return configuration as dictionary"""
        return {
            'server_url': self.server_url,
            'submit_grace_delay': self.submit_grace_delay,
            'request_timeout': self.request_timeout,
            'recognition_language': self.recognition_language,
            'asr_model': self.asr_model
        }
