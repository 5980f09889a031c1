# app.py - Streaming answer server for the voice tutor
import logging
import os
import time
from typing import Optional

from flask import Flask, Response, request, jsonify, stream_with_context

from ai.processor import AIProcessor
from config.settings import AssistantConfig
from utils.constants import APIConfig, ErrorMessages
from utils.errors import AnswerStreamError
from utils.logging import setup_logging, log_performance
from utils.request_validator import QuestionValidator

logger = logging.getLogger(__name__)


def create_flask_app(config: Optional[AssistantConfig] = None,
                     processor: Optional[AIProcessor] = None) -> Flask:
    """Create the Flask app serving streamed tutor answers"""
    app = Flask(__name__)

    # A missing API key is fatal for the answer backend
    if processor is None:
        try:
            config = config or AssistantConfig()
            processor = AIProcessor(
                api_key=config.openai_api_key,
                model=config.openai_model,
                system_prompt=config.system_prompt
            )
            logger.info("✅ Configuration loaded and answer backend initialized")
        except Exception as e:
            logger.error(f"❌ Configuration error: {e}")
            raise

    @app.route('/')
    def home():
        """Status page"""
        status = '✅ Ready' if processor.is_available() else '❌ Not configured'
        return f'''
        <html>
        <head><title>Voice Tutor</title></head>
        <body style="font-family: Arial, sans-serif; margin: 40px;">
            <h1>🎧 Voice Tutor answer server</h1>
            <p>Answer backend: {status} ({processor.model})</p>
            <p>POST <code>{APIConfig.ASK_ENDPOINT}</code> with <code>{{"question": "..."}}</code>
            to receive a streamed plain-text answer.</p>
        </body>
        </html>
        '''

    @app.route(APIConfig.ASK_ENDPOINT, methods=['POST'])
    def ask():
        """Stream an answer to a single question as plain text"""
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'status': 'error', 'message': ErrorMessages.NO_DATA}), 400

        question = QuestionValidator.extract_question(data)
        if not question:
            return jsonify({'status': 'error', 'message': ErrorMessages.INVALID_QUESTION}), 400

        try:
            tokens = processor.open_stream(question)
        except AnswerStreamError as e:
            logger.error(f"❌ Could not start answer stream: {e}")
            return jsonify({'status': 'error', 'message': ErrorMessages.BACKEND_UNAVAILABLE}), 502

        def generate():
            started = time.time()
            success = False
            try:
                for token in tokens:
                    yield token
                success = True
            except Exception as e:
                # Headers are already sent: re-raise so the server drops the
                # connection without the terminating chunk
                logger.error(f"❌ Answer stream interrupted: {e}")
                raise
            finally:
                log_performance('/api/ask', time.time() - started, success)

        return Response(
            stream_with_context(generate()),
            content_type=APIConfig.STREAM_CONTENT_TYPE,
            headers={'Cache-Control': 'no-cache'}
        )

    @app.route(APIConfig.HEALTH_ENDPOINT, methods=['GET'])
    def health_check():
        """Health check"""
        available = processor.is_available()
        health = {
            'status': 'healthy' if available else 'degraded',
            'components': {
                'ai': {
                    'status': 'available' if available else 'unavailable',
                    'model': processor.model
                }
            },
            'timestamp': time.time()
        }
        return jsonify(health), 200 if available else 503

    return app


def create_app():
    """Create app for WSGI servers, e.g. gunicorn 'app:create_app()'"""
    return create_flask_app()


if __name__ == '__main__':
    setup_logging(os.getenv('LOG_LEVEL', 'INFO'))
    config = AssistantConfig()

    logger.info("🚀 Starting Voice Tutor answer server...")
    flask_app = create_flask_app(config)

    logger.info(f"🌐 Server starting on port {config.port}")
    logger.info(f"🔗 Health Check: http://localhost:{config.port}{APIConfig.HEALTH_ENDPOINT}")

    flask_app.run(
        host=config.host,
        port=config.port,
        debug=config.debug_mode,
        threaded=True
    )
