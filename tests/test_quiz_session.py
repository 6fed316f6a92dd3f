"""
Tests for the quiz play session

Tests cover:
- Answer recording, toggling and shape checks
- Navigation clamping
- One-time submission and the attempt hand-off
- Frozen answers after submit
"""

import threading

import pytest

from studyhub_app.core.signals import quiz_submitted
from studyhub_app.modules.quiz.engine import (
    Question,
    QuestionKind,
    QuestionSet,
    QuizSession,
    SessionAlreadySubmitted,
    SessionState,
    ShapeViolation,
    dispatch_inline,
)


class RecordingGateway:
    def __init__(self):
        self.records = []
        self.called = threading.Event()

    def record_attempt(self, record):
        self.records.append(record)
        self.called.set()


def make_questions():
    return QuestionSet([
        Question(1, QuestionKind.SINGLE_CHOICE, 'Q1', ('A', 'B', 'C'), 0, order=0),
        Question(2, QuestionKind.MULTIPLE_CHOICE, 'Q2', ('A', 'B', 'C', 'D'), frozenset({0, 2}), order=1),
        Question(3, QuestionKind.SHORT_ANSWER, 'Q3', order=2),
    ])


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def session(gateway):
    return QuizSession(
        make_questions(),
        quiz_id=10,
        user_id=5,
        attempt_gateway=gateway,
        dispatcher=dispatch_inline,
    )


class TestAnswers:
    def test_record_single_choice(self, session):
        session.record_answer(1, 2)
        assert session.answer_for(1) == 2

    def test_record_replaces_previous_answer(self, session):
        session.record_answer(1, 2)
        session.record_answer(1, 0)
        assert session.answer_for(1) == 0

    def test_toggle_adds_and_removes(self, session):
        session.toggle_multiple_choice_option(2, 0)
        session.toggle_multiple_choice_option(2, 3)
        session.toggle_multiple_choice_option(2, 0)
        assert session.answer_for(2) == frozenset({3})

    def test_toggle_on_single_choice_rejected(self, session):
        with pytest.raises(ShapeViolation):
            session.toggle_multiple_choice_option(1, 0)

    def test_toggle_out_of_range(self, session):
        with pytest.raises(ShapeViolation):
            session.toggle_multiple_choice_option(2, 4)

    def test_wrong_shape_leaves_store_untouched(self, session):
        session.record_answer(1, 1)
        with pytest.raises(ShapeViolation):
            session.record_answer(1, [1])
        assert session.answer_for(1) == 1

    def test_unknown_question(self, session):
        with pytest.raises(ShapeViolation):
            session.record_answer(42, 0)

    def test_to_dict_serialises_sets_and_hides_answers(self, session):
        session.toggle_multiple_choice_option(2, 2)
        session.toggle_multiple_choice_option(2, 0)
        state = session.to_dict()
        assert state['answers'] == {'2': [0, 2]}
        assert 'correct_answer' not in state['current_question']
        assert state['result'] is None


class TestNavigation:
    def test_previous_at_start_stays(self, session):
        assert session.go_to_previous() == 0

    def test_next_stops_at_last_question(self, session):
        for _ in range(5):
            session.go_to_next()
        assert session.current_question_index == 2
        assert session.current_question.id == 3

    def test_navigation_after_submit_is_ignored(self, session):
        session.go_to_next()
        session.submit()
        session.go_to_next()
        session.go_to_previous()
        assert session.current_question_index == 1

    def test_empty_session_has_no_current_question(self):
        empty = QuizSession(QuestionSet())
        assert empty.current_question is None
        assert empty.go_to_next() == 0


class TestSubmit:
    def test_submit_scores_answers(self, session):
        session.record_answer(1, 0)
        session.record_answer(2, [2, 0])
        session.record_answer(3, 'frei')
        result = session.submit()

        assert (result.score, result.max_score, result.percentage) == (2, 2, 100)
        assert session.state is SessionState.SUBMITTED
        assert session.submit_trigger == 'manual'

    def test_submit_is_idempotent(self, session, gateway):
        first = session.submit()
        second = session.submit()
        third = session.submit()

        assert first is second is third
        assert len(gateway.records) == 1

    def test_attempt_record_content(self, session, gateway):
        session.record_answer(1, 1)
        session.submit()
        record = gateway.records[0]
        assert (record.quiz_id, record.user_id, record.score, record.max_score) == (10, 5, 0, 2)
        assert record.status == 'completed'

    def test_answers_frozen_after_submit(self, session):
        session.submit()
        with pytest.raises(SessionAlreadySubmitted):
            session.record_answer(1, 0)
        with pytest.raises(SessionAlreadySubmitted):
            session.toggle_multiple_choice_option(2, 1)

    def test_concurrent_submits_store_once(self, session, gateway):
        results = []
        threads = [threading.Thread(target=lambda: results.append(session.submit())) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(gateway.records) == 1
        assert all(result is results[0] for result in results)

    def test_without_gateway_nothing_is_stored(self):
        anonymous = QuizSession(make_questions())
        result = anonymous.submit()
        assert result.max_score == 2

    def test_failing_gateway_still_returns_result(self, caplog):
        class BrokenGateway:
            def record_attempt(self, record):
                raise RuntimeError('database is down')

        broken = QuizSession(make_questions(), quiz_id=1, attempt_gateway=BrokenGateway(), dispatcher=dispatch_inline)
        broken.record_answer(1, 0)
        result = broken.submit()

        assert result.score == 1
        assert broken.submitted
        assert 'database is down' in caplog.text

    def test_submitted_signal_fires_once(self, session):
        received = []

        def on_submitted(sender, **kwargs):
            received.append(kwargs)

        quiz_submitted.connect(on_submitted)
        try:
            session.submit()
            session.submit()
        finally:
            quiz_submitted.disconnect(on_submitted)

        assert len(received) == 1
        assert received[0]['trigger'] == 'manual'
        assert received[0]['quiz_id'] == 10
