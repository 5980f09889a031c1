#!/usr/bin/env python3
"""Terminal front end for the voice tutor.

Typed lines stand in for recognised speech:

    Enter on an empty line   start listening / stop and submit
    any other line           a final transcript result while listening
    Ctrl-D                   quit

With --audio, recorded clips are transcribed through OpenAI instead and the
resulting transcript is submitted straight away.

Usage:
    python ask_cli.py
    python ask_cli.py --server http://localhost:5000
    python ask_cli.py --local            # call OpenAI directly
    python ask_cli.py --audio question.wav
"""

import argparse
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

import openai

from ai.processor import AIProcessor
from client.ask_client import AskClient
from config.settings import VoiceClientConfig
from speech.providers.openai_asr import OpenAIRecognitionEngine
from speech.providers.text_input import TextInputRecognitionEngine
from utils.answer_splitter import FENCE_MARKER
from utils.constants import APIConfig
from utils.logging import setup_logging
from workflow.controller import SessionListener, VoiceSessionController
from workflow.session import SessionState


class TerminalListener(SessionListener):
    """Prints transcript and answer updates to a text stream"""

    def __init__(self, out=None):
        self.out = out or sys.stdout
        self._printed_answer = ''
        self._answer = ''
        self._code = ''

    def on_state_change(self, state: SessionState):
        if state is SessionState.LISTENING:
            self._write("🎤 Listening... type your question, empty line to submit\n")
        elif state is SessionState.STREAMING:
            self._printed_answer = ''
            self._answer = ''
            self._code = ''
            self._write("\n💬 ")

    def on_transcript(self, interim: str, final: str):
        if final:
            self._write(f"📝 {final.strip()}\n")

    def on_update(self, answer: str, code: str):
        self._answer = answer
        self._code = code
        self._print_answer(self._settled_prose(answer))

    def on_complete(self):
        self._print_answer(self._answer)
        if self._code:
            self._write(f"\n\n--- code ---\n{self._code}\n------------")
        self._write("\n\n")

    def on_error(self, message: str):
        self._write(f"\n❌ {message}\n\n")

    @staticmethod
    def _settled_prose(answer: str) -> str:
        # An open fence stays in the answer until it closes; hold it back so
        # the code is only printed once, in the code block
        fence = answer.find(FENCE_MARKER)
        if fence != -1:
            return answer[:fence].rstrip()
        return answer.rstrip('`').rstrip()

    def _print_answer(self, answer: str):
        if answer.startswith(self._printed_answer):
            self._write(answer[len(self._printed_answer):])
            self._printed_answer = answer

    def _write(self, text: str):
        self.out.write(text)
        self.out.flush()


def build_answer_source(args, config: VoiceClientConfig):
    if args.local:
        processor = AIProcessor(api_key=config.openai_api_key, model=args.model)
        if not processor.is_available():
            raise SystemExit("OPENAI_API_KEY is required for --local")
        return processor.open_stream

    client = AskClient(config.server_url, timeout=config.request_timeout)
    return client.stream_answer


def run_text_session(controller: VoiceSessionController, engine: TextInputRecognitionEngine, stdin=None):
    stdin = stdin or sys.stdin
    print("Press Enter to start listening (Ctrl-D to quit).")
    for raw_line in stdin:
        line = raw_line.strip()
        if not line:
            try:
                controller.toggle()
            except KeyboardInterrupt:
                print("\n⏹️ Answer cancelled")
        elif controller.state is SessionState.LISTENING:
            engine.push(line, is_final=True)
        else:
            print("Press Enter to start listening first.")


def run_audio_session(controller: VoiceSessionController, engine: OpenAIRecognitionEngine,
                      paths: List[Path]) -> SessionState:
    controller.start_listening()
    for path in paths:
        mime_type = mimetypes.guess_type(path.name)[0] or 'audio/wav'
        engine.submit_audio(path.read_bytes(), mime_type)
    return controller.stop_and_submit()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Ask the interview tutor by voice or text.")
    parser.add_argument('--server', help="answer server base URL (default: ASK_SERVER_URL)")
    parser.add_argument('--local', action='store_true', help="call OpenAI directly instead of the server")
    parser.add_argument('--model', default=APIConfig.DEFAULT_MODEL, help="model for --local")
    parser.add_argument('--audio', nargs='+', type=Path, help="audio clips to transcribe and submit")
    parser.add_argument('--log-level', default='WARNING')
    args = parser.parse_args(argv)

    setup_logging(args.log_level, stream=sys.stderr)
    config = VoiceClientConfig(server_url=args.server)
    answer_source = build_answer_source(args, config)
    listener = TerminalListener()

    if args.audio:
        if not config.openai_api_key:
            parser.error("OPENAI_API_KEY is required for --audio")
        engine = OpenAIRecognitionEngine(
            openai.OpenAI(api_key=config.openai_api_key),
            model=config.asr_model,
            language=config.recognition_language
        )
        controller = VoiceSessionController(answer_source, engine, listener,
                                            grace_delay=config.submit_grace_delay)
        run_audio_session(controller, engine, args.audio)
        return 1 if controller.session.error else 0

    engine = TextInputRecognitionEngine()
    controller = VoiceSessionController(answer_source, engine, listener,
                                        grace_delay=config.submit_grace_delay)
    try:
        run_text_session(controller, engine)
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == '__main__':
    sys.exit(main())
