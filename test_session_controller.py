#!/usr/bin/env python3
"""
Tests for the listening -> streaming -> idle session controller
"""

import pytest

from speech.providers.text_input import TextInputRecognitionEngine
from speech.recognition_service import NullRecognitionEngine
from speech.types import RecognitionResult
from utils.errors import AnswerStreamError
from workflow.controller import SessionListener, VoiceSessionController
from workflow.session import SessionState


class RecordingListener(SessionListener):
    def __init__(self):
        self.states = []
        self.transcripts = []
        self.updates = []
        self.errors = []
        self.completed = 0

    def on_state_change(self, state):
        self.states.append(state)

    def on_transcript(self, interim, final):
        self.transcripts.append((interim, final))

    def on_update(self, answer, code):
        self.updates.append((answer, code))

    def on_complete(self):
        self.completed += 1

    def on_error(self, message):
        self.errors.append(message)


class FakeAnswerSource:
    """Records questions and replays canned chunks"""

    def __init__(self, chunks=None, error_after=None):
        self.chunks = chunks or []
        self.error_after = error_after
        self.questions = []

    def __call__(self, question):
        self.questions.append(question)
        return self._stream()

    def _stream(self):
        for position, chunk in enumerate(self.chunks):
            if self.error_after is not None and position == self.error_after:
                raise AnswerStreamError("connection reset")
            yield chunk


@pytest.fixture
def engine():
    return TextInputRecognitionEngine()


@pytest.fixture
def listener():
    return RecordingListener()


def make_controller(source, engine, listener, sleep=None):
    return VoiceSessionController(source, engine, listener, grace_delay=0.3,
                                  sleep=sleep or (lambda seconds: None))


def test_end_to_end_question_and_streamed_answer(engine, listener):
    source = FakeAnswerSource([b"Answer text ```", b"js\ncode()\n```"])
    controller = make_controller(source, engine, listener)

    assert controller.toggle() is SessionState.LISTENING
    engine.push("what does", is_final=False)
    engine.push("what does this print", is_final=True)
    assert controller.session.transcript.final == "what does this print "

    assert controller.toggle() is SessionState.IDLE

    assert source.questions == ["what does this print"]
    assert controller.session.answer_text == "Answer text"
    assert controller.session.code_text == "code()"
    assert controller.state is SessionState.IDLE
    assert listener.updates[-1] == ("Answer text", "code()")
    assert listener.completed == 1
    assert listener.states == [
        SessionState.LISTENING, SessionState.IDLE, SessionState.STREAMING, SessionState.IDLE
    ]


def test_stream_end_clears_transcript_and_buffers(engine, listener):
    source = FakeAnswerSource(["Short answer."])
    controller = make_controller(source, engine, listener)

    controller.toggle()
    engine.push("hello", is_final=True)
    controller.toggle()

    assert controller.session.transcript.final == ""
    assert controller.session.transcript.interim == ""
    assert controller.session.transcript.last_processed_index == 0
    assert controller.session.stream is None
    assert controller.session.answer_text == "Short answer."
    assert listener.transcripts[-1] == ("", "")


def test_empty_transcript_is_never_submitted(engine, listener):
    source = FakeAnswerSource(["unused"])
    controller = make_controller(source, engine, listener)

    controller.toggle()
    engine.push("um", is_final=False)
    assert controller.toggle() is SessionState.IDLE

    assert source.questions == []
    assert SessionState.STREAMING not in listener.states


def test_toggle_while_streaming_is_ignored(engine, listener):
    class TogglingListener(RecordingListener):
        def on_update(self, answer, code):
            super().on_update(answer, code)
            self.toggle_result = controller.toggle()

    toggling = TogglingListener()
    source = FakeAnswerSource(["one ", "two"])
    controller = make_controller(source, engine, toggling)

    controller.toggle()
    engine.push("question", is_final=True)
    controller.toggle()

    assert toggling.toggle_result is SessionState.STREAMING
    assert engine.start_count == 1
    assert controller.state is SessionState.IDLE
    assert controller.session.answer_text == "one two"


class ThreadedTextEngine(TextInputRecognitionEngine):
    """Text engine flagged as calling back from its own thread"""
    delivers_late_results = True


def test_grace_delay_lets_trailing_result_land(listener):
    engine = ThreadedTextEngine()
    source = FakeAnswerSource(["ok"])

    def late_result(seconds):
        assert seconds == pytest.approx(0.3)
        # The engine delivers one more result after being asked to stop
        controller.handle_results([
            RecognitionResult.from_text("head", is_final=True),
            RecognitionResult.from_text("tail", is_final=True),
        ])

    controller = make_controller(source, engine, listener, sleep=late_result)
    controller.toggle()
    engine.push("head", is_final=True)
    controller.toggle()

    assert source.questions == ["head tail"]


def test_synchronous_engine_submits_without_waiting(engine, listener):
    waits = []
    source = FakeAnswerSource(["ok"])
    controller = make_controller(source, engine, listener, sleep=waits.append)

    controller.toggle()
    engine.push("now", is_final=True)
    controller.toggle()

    assert waits == []
    assert source.questions == ["now"]


def test_results_redelivered_after_stream_end_are_ignored(listener):
    engine = ThreadedTextEngine()
    source = FakeAnswerSource(["done"])
    controller = make_controller(source, engine, listener)

    controller.toggle()
    engine.push("old question", is_final=True)
    controller.toggle()
    assert controller.state is SessionState.IDLE
    transcripts_seen = len(listener.transcripts)

    controller.handle_results([RecognitionResult.from_text("old question", is_final=True)])

    assert controller.session.transcript.final == ""
    assert len(listener.transcripts) == transcripts_seen


def test_engine_timeout_restarts_recognition(engine, listener):
    controller = make_controller(FakeAnswerSource(), engine, listener)

    controller.toggle()
    engine.push("first part", is_final=True)
    engine.simulate_timeout()

    assert engine.active
    assert engine.start_count == 2
    assert controller.state is SessionState.LISTENING

    engine.push("second part", is_final=True)
    assert controller.session.transcript.final == "first part second part "


def test_forced_stop_does_not_restart_recognition(engine, listener):
    controller = make_controller(FakeAnswerSource(["x"]), engine, listener)

    controller.toggle()
    engine.push("question", is_final=True)
    controller.toggle()

    assert not engine.active
    assert engine.start_count == 1


def test_stream_failure_returns_to_idle_with_error(engine, listener):
    source = FakeAnswerSource(["Partial ", "answer"], error_after=1)
    controller = make_controller(source, engine, listener)

    controller.toggle()
    engine.push("question", is_final=True)
    controller.toggle()

    assert controller.state is SessionState.IDLE
    assert controller.session.error == "connection reset"
    assert controller.session.answer_text == "Partial"
    assert listener.errors == ["connection reset"]
    assert listener.completed == 0


def test_request_failure_returns_to_idle(engine, listener):
    def failing_source(question):
        raise AnswerStreamError("Answer server returned HTTP 500", status_code=500)

    controller = make_controller(failing_source, engine, listener)
    controller.toggle()
    engine.push("question", is_final=True)
    controller.toggle()

    assert controller.state is SessionState.IDLE
    assert listener.errors == ["Answer server returned HTTP 500"]

    # The session accepts a new question afterwards
    assert controller.toggle() is SessionState.LISTENING
    assert controller.session.error is None


def test_abort_stops_stream_early(engine, listener):
    class AbortingListener(RecordingListener):
        def on_update(self, answer, code):
            super().on_update(answer, code)
            controller.abort()

    aborting = AbortingListener()
    source = FakeAnswerSource(["first ", "second ", "third"])
    controller = make_controller(source, engine, aborting)

    controller.toggle()
    engine.push("question", is_final=True)
    controller.toggle()

    assert controller.session.answer_text == "first"
    assert controller.state is SessionState.IDLE


def test_multibyte_characters_split_across_chunks(engine, listener):
    encoded = "Café ☕".encode('utf-8')
    source = FakeAnswerSource([encoded[:4], encoded[4:8], encoded[8:]])
    controller = make_controller(source, engine, listener)

    controller.toggle()
    engine.push("coffee", is_final=True)
    controller.toggle()

    assert controller.session.answer_text == "Café ☕"


def test_unavailable_recognition_makes_toggle_inert(listener):
    source = FakeAnswerSource()
    controller = VoiceSessionController(source, NullRecognitionEngine(), listener)

    assert controller.toggle() is SessionState.IDLE
    assert controller.start_listening() is SessionState.IDLE
    assert listener.states == []
