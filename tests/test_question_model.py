"""
Tests for the quiz question model

Tests cover:
- Shape validation per question kind
- Conversion from stored rows
- Answer normalisation
- QuestionSet ordering and lookups
"""

import pytest

from studyhub_app.modules.quiz.engine import Question, QuestionKind, QuestionSet, ShapeViolation


class TestQuestionShapes:
    def test_single_choice_index_out_of_range(self):
        with pytest.raises(ShapeViolation):
            Question(1, QuestionKind.SINGLE_CHOICE, 'Q', ('A', 'B'), 2)

    def test_single_choice_rejects_bool(self):
        with pytest.raises(ShapeViolation):
            Question(1, QuestionKind.SINGLE_CHOICE, 'Q', ('A', 'B'), True)

    def test_choice_question_needs_options(self):
        with pytest.raises(ShapeViolation):
            Question(1, QuestionKind.MULTIPLE_CHOICE, 'Q', (), frozenset())

    def test_multiple_choice_needs_a_set(self):
        with pytest.raises(ShapeViolation):
            Question(1, QuestionKind.MULTIPLE_CHOICE, 'Q', ('A', 'B'), 0)

    def test_short_answer_has_no_gradable_answer(self):
        with pytest.raises(ShapeViolation):
            Question(1, QuestionKind.SHORT_ANSWER, 'Q', None, 'Antwort')

    def test_short_answer_has_no_options(self):
        with pytest.raises(ShapeViolation):
            Question(1, QuestionKind.SHORT_ANSWER, 'Q', ('A',), None)

    def test_public_dict_hides_correct_answer(self):
        question = Question(7, QuestionKind.SINGLE_CHOICE, 'Q', ('A', 'B'), 1)
        public = question.to_public_dict()
        assert 'correct_answer' not in public
        assert public['options'] == ['A', 'B']


class TestFromRecord:
    def test_single_choice_takes_first_stored_index(self):
        question = Question.from_record(
            {'id': 1, 'type': 'single_choice', 'question': 'Q', 'options': ['A', 'B'], 'correct_answer': [1]}
        )
        assert question.correct_answer == 1

    def test_single_choice_plain_index(self):
        question = Question.from_record(
            {'id': 1, 'type': 'single_choice', 'question': 'Q', 'options': ['A', 'B'], 'correct_answer': 0}
        )
        assert question.correct_answer == 0

    def test_single_choice_empty_list_rejected(self):
        with pytest.raises(ShapeViolation):
            Question.from_record(
                {'id': 1, 'type': 'single_choice', 'question': 'Q', 'options': ['A', 'B'], 'correct_answer': []}
            )

    def test_multiple_choice_becomes_frozenset(self):
        question = Question.from_record(
            {'id': 1, 'type': 'multiple_choice', 'question': 'Q', 'options': ['A', 'B', 'C'], 'correct_answer': [2, 0]}
        )
        assert question.correct_answer == frozenset({0, 2})

    def test_short_answer_ignores_stored_options(self):
        question = Question.from_record(
            {'id': 1, 'type': 'short_answer', 'question': 'Q', 'options': ['x'], 'correct_answer': None}
        )
        assert question.options is None
        assert question.correct_answer is None

    def test_unknown_kind(self):
        with pytest.raises(ShapeViolation) as excinfo:
            Question.from_record({'id': 3, 'type': 'essay', 'question': 'Q'})
        assert excinfo.value.question_id == 3
        assert excinfo.value.code == 'SHAPE_VIOLATION'
        assert excinfo.value.status_code == 400

    @pytest.mark.parametrize('options', [5, 'ABC', {'a': 'A'}])
    def test_choice_options_must_be_a_list(self, options):
        with pytest.raises(ShapeViolation) as excinfo:
            Question.from_record(
                {'id': 4, 'type': 'single_choice', 'question': 'Q', 'options': options, 'correct_answer': 0}
            )
        assert excinfo.value.question_id == 4


class TestNormalizeAnswer:
    def test_multiple_choice_accepts_list(self):
        question = Question(1, QuestionKind.MULTIPLE_CHOICE, 'Q', ('A', 'B', 'C'), frozenset({0}))
        assert question.normalize_answer([2, 0, 2]) == frozenset({0, 2})

    def test_multiple_choice_rejects_string(self):
        question = Question(1, QuestionKind.MULTIPLE_CHOICE, 'Q', ('A', 'B', 'C'), frozenset({0}))
        with pytest.raises(ShapeViolation):
            question.normalize_answer('0,2')

    def test_single_choice_rejects_list(self):
        question = Question(1, QuestionKind.SINGLE_CHOICE, 'Q', ('A', 'B'), 0)
        with pytest.raises(ShapeViolation):
            question.normalize_answer([0])

    def test_short_answer_requires_text(self):
        question = Question(1, QuestionKind.SHORT_ANSWER, 'Q')
        assert question.normalize_answer('frei') == 'frei'
        with pytest.raises(ShapeViolation):
            question.normalize_answer(3)


class TestQuestionSet:
    def test_sorted_by_order(self):
        questions = QuestionSet([
            Question('b', QuestionKind.SHORT_ANSWER, 'B', order=2),
            Question('a', QuestionKind.SHORT_ANSWER, 'A', order=1),
        ])
        assert [q.id for q in questions] == ['a', 'b']

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ShapeViolation):
            QuestionSet([
                Question(1, QuestionKind.SHORT_ANSWER, 'A'),
                Question(1, QuestionKind.SHORT_ANSWER, 'B'),
            ])

    def test_require_unknown_id(self):
        with pytest.raises(ShapeViolation):
            QuestionSet().require(99)

    def test_scorable_count(self):
        questions = QuestionSet([
            Question(1, QuestionKind.SHORT_ANSWER, 'A'),
            Question(2, QuestionKind.SINGLE_CHOICE, 'B', ('x', 'y'), 0, order=1),
        ])
        assert questions.scorable_count == 1
