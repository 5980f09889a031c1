#!/usr/bin/env python3
"""
Tests for the terminal front end
"""

import io

from ask_cli import TerminalListener, run_text_session
from speech.providers.text_input import TextInputRecognitionEngine
from workflow.controller import VoiceSessionController
from workflow.session import SessionState


def test_text_session_submits_typed_question():
    questions = []

    def answer_source(question):
        questions.append(question)
        return iter(["Use a closure.\n```py\n", "def f():\n    pass\n```"])

    out = io.StringIO()
    engine = TextInputRecognitionEngine()
    controller = VoiceSessionController(answer_source, engine, TerminalListener(out),
                                        grace_delay=0)

    run_text_session(controller, engine, stdin=io.StringIO("\nwhat is\na closure\n\n"))

    assert questions == ["what is a closure"]
    assert controller.state is SessionState.IDLE
    output = out.getvalue()
    assert "Use a closure." in output
    assert "--- code ---\ndef f():\n    pass\n" in output
    assert "```" not in output
    assert output.count("def f():") == 1


def test_ctrl_c_cancels_answer_and_keeps_session_running(capsys):
    questions = []

    def answer_source(question):
        questions.append(question)
        return interrupted_then_complete(len(questions))

    def interrupted_then_complete(attempt):
        yield "First part"
        if attempt == 1:
            raise KeyboardInterrupt
        yield " and the rest."

    out = io.StringIO()
    engine = TextInputRecognitionEngine()
    controller = VoiceSessionController(answer_source, engine, TerminalListener(out),
                                        grace_delay=0)

    run_text_session(controller, engine,
                     stdin=io.StringIO("\nfirst\n\n\nsecond\n\n"))

    assert questions == ["first", "second"]
    assert controller.state is SessionState.IDLE
    assert "Answer cancelled" in capsys.readouterr().out
    assert "First part and the rest." in out.getvalue()


def test_partial_fence_is_held_back_until_it_closes():
    out = io.StringIO()
    listener = TerminalListener(out)
    listener.on_state_change(SessionState.STREAMING)

    listener.on_update("Explanation. ``", "")
    listener.on_update("Explanation. ```js\ncode(", "")
    assert "`" not in out.getvalue()

    listener.on_update("Explanation.", "code()")
    listener.on_complete()

    output = out.getvalue()
    assert output.count("code()") == 1
    assert "Explanation." in output


def test_listener_reports_errors():
    out = io.StringIO()
    TerminalListener(out).on_error("Could not connect to answer server")
    assert "❌ Could not connect to answer server" in out.getvalue()
