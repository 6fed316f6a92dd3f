"""
Tests for the quiz JSON API

Tests cover:
- Quiz overview, creation and editing
- Owner checks
- Play sessions through the HTTP endpoints
"""

import time

import pytest

from studyhub_app import db
from studyhub_app.models import Quiz, QuizAttempt, QuizQuestion


@pytest.fixture
def quiz_id(logged_in_client):
    response = logged_in_client.post('/quizzes/api/quizzes', json={
        'title': 'Didaktik',
        'description': 'Grundlagen der Didaktik',
        'difficulty': 'Vertiefung',
    })
    assert response.status_code == 201
    return response.get_json()['data']['id']


def single_choice_quiz(user, time_limit_seconds=None):
    quiz = Quiz(user_id=user.user_id, title='Rechtliche Grundlagen', time_limit_seconds=time_limit_seconds)
    db.session.add(quiz)
    db.session.flush()
    db.session.add_all([
        QuizQuestion(quiz_id=quiz.quiz_id, question_type='single_choice', question='Q1',
                     options=['A', 'B'], correct_answer=[0], order=0),
        QuizQuestion(quiz_id=quiz.quiz_id, question_type='single_choice', question='Q2',
                     options=['A', 'B'], correct_answer=[1], order=1),
    ])
    db.session.commit()
    return quiz


class TestQuizAuthoring:
    def test_create_requires_login(self, client):
        response = client.post('/quizzes/api/quizzes', json={'title': 'X'})
        assert response.status_code == 401

    def test_create_seeds_questions(self, logged_in_client, quiz_id):
        body = logged_in_client.get(f'/quizzes/api/quizzes/{quiz_id}').get_json()['data']
        assert body['difficulty'] == 'Vertiefung'
        assert body['is_owner'] is True
        assert body['time_limit_seconds'] is None
        assert [q['question'] for q in body['questions']] == ['Frage 1', 'Frage 2', 'Frage 3']

    def test_create_timed_quiz(self, logged_in_client):
        response = logged_in_client.post('/quizzes/api/quizzes', json={
            'title': 'Zeitquiz', 'is_timed': True, 'time_limit_minutes': 5,
        })
        assert response.get_json()['data']['time_limit_seconds'] == 300

    def test_time_limit_ignored_when_untimed(self, logged_in_client):
        response = logged_in_client.post('/quizzes/api/quizzes', json={
            'title': 'Ohne Zeit', 'is_timed': False, 'time_limit_minutes': 5,
        })
        assert response.get_json()['data']['time_limit_seconds'] is None

    def test_create_requires_title(self, logged_in_client):
        response = logged_in_client.post('/quizzes/api/quizzes', json={'title': ''})
        assert response.status_code == 400
        assert 'title' in response.get_json()['details']['errors']

    def test_unknown_difficulty(self, logged_in_client):
        response = logged_in_client.post('/quizzes/api/quizzes', json={'title': 'X', 'difficulty': 'Extrem'})
        assert response.status_code == 400

    def test_overview_lists_newest_first(self, logged_in_client, quiz_id):
        logged_in_client.post('/quizzes/api/quizzes', json={'title': 'Zweites Quiz'})
        quizzes = logged_in_client.get('/quizzes/api/quizzes').get_json()['data']
        assert [q['title'] for q in quizzes] == ['Zweites Quiz', 'Didaktik']
        assert quizzes[1]['question_count'] == 3
        assert quizzes[1]['status'] == 'offen'

    def test_save_questions(self, logged_in_client, quiz_id):
        questions = logged_in_client.get(f'/quizzes/api/quizzes/{quiz_id}').get_json()['data']['questions']
        questions[0]['question'] = 'Was ist Didaktik?'
        questions[0]['correct_answer'] = [1, 3]
        response = logged_in_client.put(f'/quizzes/api/quizzes/{quiz_id}/questions', json={'questions': questions})

        assert response.status_code == 200
        saved = response.get_json()['data']
        assert saved[0]['question'] == 'Was ist Didaktik?'
        assert saved[0]['correct_answer'] == [1, 3]

    def test_save_malformed_question(self, logged_in_client, quiz_id):
        questions = logged_in_client.get(f'/quizzes/api/quizzes/{quiz_id}').get_json()['data']['questions']
        questions[1]['type'] = 'single_choice'
        questions[1]['correct_answer'] = []
        response = logged_in_client.put(f'/quizzes/api/quizzes/{quiz_id}/questions', json={'questions': questions})

        assert response.status_code == 400
        assert response.get_json()['code'] == 'SHAPE_VIOLATION'

    def test_save_question_with_scalar_options(self, logged_in_client, quiz_id):
        questions = logged_in_client.get(f'/quizzes/api/quizzes/{quiz_id}').get_json()['data']['questions']
        questions[0]['options'] = 5
        response = logged_in_client.put(f'/quizzes/api/quizzes/{quiz_id}/questions', json={'questions': questions})

        assert response.status_code == 400
        assert response.get_json()['code'] == 'SHAPE_VIOLATION'

    def test_save_duplicate_question_ids(self, logged_in_client, quiz_id):
        questions = logged_in_client.get(f'/quizzes/api/quizzes/{quiz_id}').get_json()['data']['questions']
        first = dict(questions[0], question='Kopie')
        response = logged_in_client.put(
            f'/quizzes/api/quizzes/{quiz_id}/questions', json={'questions': [questions[0], first]}
        )

        assert response.status_code == 400
        assert response.get_json()['code'] == 'SHAPE_VIOLATION'
        stored = QuizQuestion.query.filter_by(quiz_id=quiz_id).order_by(QuizQuestion.order).all()
        assert [row.question for row in stored] == ['Frage 1', 'Frage 2', 'Frage 3']

    def test_add_and_delete_question(self, logged_in_client, quiz_id):
        added = logged_in_client.post(f'/quizzes/api/quizzes/{quiz_id}/questions').get_json()['data']
        assert added['options'] == ['Option A', 'Option B']
        assert added['correct_answer'] == [0]
        assert added['order'] == 3

        response = logged_in_client.delete(f"/quizzes/api/questions/{added['id']}")
        assert response.status_code == 200
        assert db.session.get(QuizQuestion, added['id']) is None

    def test_only_owner_edits(self, client, make_user, login_as):
        owner = make_user('owner')
        quiz = single_choice_quiz(owner)
        make_user('intruder')
        login_as('intruder')

        assert client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/questions').status_code == 403
        assert client.delete(f'/quizzes/api/questions/{quiz.questions[0].question_id}').status_code == 403
        detail = client.get(f'/quizzes/api/quizzes/{quiz.quiz_id}').get_json()['data']
        assert detail['is_owner'] is False

    def test_missing_quiz(self, client):
        response = client.get('/quizzes/api/quizzes/999')
        assert response.status_code == 404
        assert response.get_json()['success'] is False


class TestPlay:
    def test_play_without_session(self, client):
        assert client.get('/quizzes/api/play').status_code == 404

    def test_full_run_stores_one_attempt(self, logged_in_client, user):
        quiz = single_choice_quiz(user)
        q1, q2 = (q.question_id for q in quiz.questions)

        state = logged_in_client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play').get_json()['data']
        assert state['question_count'] == 2
        assert state['current_question']['id'] == q1

        logged_in_client.post('/quizzes/api/play/answer', json={'question_id': q1, 'value': 0})
        state = logged_in_client.post('/quizzes/api/play/next').get_json()['data']
        assert state['current_question_index'] == 1
        logged_in_client.post('/quizzes/api/play/answer', json={'question_id': q2, 'value': 0})

        first = logged_in_client.post('/quizzes/api/play/submit').get_json()['data']
        second = logged_in_client.post('/quizzes/api/play/submit').get_json()['data']

        assert first['result']['score'] == 1
        assert first['result']['percentage'] == 50
        assert first['result']['band'] == 'adequate'
        assert second['result'] == first['result']
        assert QuizAttempt.query.filter_by(quiz_id=quiz.quiz_id).count() == 1

        attempts = logged_in_client.get(f'/quizzes/api/quizzes/{quiz.quiz_id}/attempts').get_json()['data']
        assert [(a['score'], a['max_score']) for a in attempts] == [(1, 2)]

    def test_status_after_mastered_attempt(self, logged_in_client, user):
        quiz = single_choice_quiz(user)
        q1, q2 = (q.question_id for q in quiz.questions)
        logged_in_client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play')
        logged_in_client.post('/quizzes/api/play/answer', json={'question_id': q1, 'value': 0})
        logged_in_client.post('/quizzes/api/play/answer', json={'question_id': q2, 'value': 1})
        logged_in_client.post('/quizzes/api/play/submit')

        quizzes = logged_in_client.get('/quizzes/api/quizzes').get_json()['data']
        assert quizzes[0]['status'] == 'beherrscht'

    def test_answer_after_submit_conflicts(self, logged_in_client, user):
        quiz = single_choice_quiz(user)
        logged_in_client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play')
        logged_in_client.post('/quizzes/api/play/submit')

        response = logged_in_client.post('/quizzes/api/play/answer', json={
            'question_id': quiz.questions[0].question_id, 'value': 0,
        })
        assert response.status_code == 409
        assert response.get_json()['code'] == 'ALREADY_SUBMITTED'

    def test_wrong_answer_shape(self, logged_in_client, user):
        quiz = single_choice_quiz(user)
        logged_in_client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play')
        response = logged_in_client.post('/quizzes/api/play/toggle', json={
            'question_id': quiz.questions[0].question_id, 'option_index': 0,
        })
        assert response.status_code == 400
        assert response.get_json()['code'] == 'SHAPE_VIOLATION'

    def test_anonymous_play_is_not_stored(self, client, make_user):
        quiz = single_choice_quiz(make_user('autor'))
        client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play')
        result = client.post('/quizzes/api/play/submit').get_json()['data']['result']

        assert result['max_score'] == 2
        assert QuizAttempt.query.count() == 0

    def test_empty_quiz_scores_full(self, logged_in_client, user):
        quiz = Quiz(user_id=user.user_id, title='Leer')
        db.session.add(quiz)
        db.session.commit()

        logged_in_client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play')
        result = logged_in_client.post('/quizzes/api/play/submit').get_json()['data']['result']
        assert (result['max_score'], result['percentage']) == (0, 100)

    def test_new_play_replaces_old_one(self, app, client, make_user):
        quiz = single_choice_quiz(make_user('autor'))
        client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play')
        client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play')
        assert len(app.extensions['quiz_sessions']) == 1

    def test_abandon(self, app, client, make_user):
        quiz = single_choice_quiz(make_user('autor'))
        client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play')
        assert client.delete('/quizzes/api/play').status_code == 200
        assert client.get('/quizzes/api/play').status_code == 404
        assert len(app.extensions['quiz_sessions']) == 0

    def test_timer_submits_visible_through_api(self, app, client, make_user):
        app.config['QUIZ_TIMER_TICK_SECONDS'] = 0.01
        quiz = single_choice_quiz(make_user('autor'), time_limit_seconds=1)
        state = client.post(f'/quizzes/api/quizzes/{quiz.quiz_id}/play').get_json()['data']
        assert state['remaining_seconds'] in (0, 1)

        deadline = time.monotonic() + 5
        while time.monotonic() < deadline:
            state = client.get('/quizzes/api/play').get_json()['data']
            if state['submitted']:
                break
            time.sleep(0.02)

        assert state['submitted'] is True
        assert state['remaining_seconds'] == 0
        assert state['result']['max_score'] == 2
