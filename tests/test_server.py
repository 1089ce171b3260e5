"""API tests for the auralingo server."""

import unittest

from fastapi.testclient import TestClient

import server.app as app_module
from tests.mocks import FailingStorage, MockStorage


class ServerTestCase(unittest.TestCase):

    def setUp(self):
        self.storage = MockStorage()
        app_module.storage = self.storage
        app_module.user_contexts.clear()
        self.client = TestClient(app_module.app)
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)
        app_module.storage = None
        app_module.user_contexts.clear()

    def correct_option(self, user_id: str = 'default') -> str:
        return app_module.get_context(user_id).quiz.question().correct_option

    def play_quiz(self, topic_id: str, wrong: int = 0, mode: str = '', user_id: str = 'default') -> dict:
        """Play a whole quiz, answering the first `wrong` questions wrongly."""
        question = self.client.post('/api/quiz/start', json={
            'topic_id': topic_id, 'mode': mode, 'user_id': user_id}).json()
        answered = 0
        while True:
            correct = self.correct_option(user_id)
            option = correct
            if answered < wrong:
                option = next(o for o in question['options'] if o != correct)
            body = self.client.post('/api/quiz/answer', json={'option': option, 'user_id': user_id}).json()
            answered += 1
            if body['finished']:
                return body
            question = self.client.get('/api/quiz/question', params={'user_id': user_id}).json()


class TestCatalogEndpoints(ServerTestCase):

    def test_health(self):
        self.assertEqual(self.client.get('/').json()['status'], 'ok')

    def test_topics(self):
        topics = self.client.get('/api/topics').json()['topics']
        self.assertEqual([t['id'] for t in topics], ['toBe', 'pronouns', 'articles', 'presentSimple'])

    def test_level_words(self):
        response = self.client.get('/api/levels/beginner/words')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['words'][0]['wordEng'], 'apple')
        self.assertEqual(self.client.get('/api/levels/expert/words').status_code, 404)


class TestQuizEndpoints(ServerTestCase):

    def test_start_returns_first_question(self):
        body = self.client.post('/api/quiz/start', json={'topic_id': 'toBe'}).json()
        self.assertEqual(body['position'], 0)
        self.assertEqual(body['total'], 10)
        self.assertIn(self.correct_option(), body['options'])

    def test_unknown_topic(self):
        response = self.client.post('/api/quiz/start', json={'topic_id': 'nope'})
        self.assertEqual(response.status_code, 404)

    def test_invalid_mode(self):
        response = self.client.post('/api/quiz/start', json={'topic_id': 'toBe', 'mode': 'turbo'})
        self.assertEqual(response.status_code, 400)

    def test_question_before_start_conflicts(self):
        self.assertEqual(self.client.get('/api/quiz/question').status_code, 409)

    def test_perfect_quiz_awards_xp(self):
        body = self.play_quiz('toBe')
        self.assertEqual(body['result']['score']['percentage'], 100)
        self.assertEqual(body['result']['awarded'], 200)
        progress = self.client.get('/api/progress').json()
        self.assertEqual(progress['total_points'], 200)
        self.assertEqual(progress['completed_assessments'], ['toBe'])

    def test_ninety_percent_awards(self):
        body = self.play_quiz('toBe', wrong=1)
        self.assertEqual(body['result']['awarded'], 190)
        self.assertEqual(len(body['result']['mistakes']), 1)

    def test_eighty_percent_does_not_award(self):
        body = self.play_quiz('toBe', wrong=2)
        self.assertFalse(body['result']['qualified'])
        self.assertEqual(self.client.get('/api/progress').json()['total_points'], 0)

    def test_mastery_credited_separately(self):
        self.play_quiz('articles')
        self.play_quiz('articles', mode='mastery')
        progress = self.client.get('/api/progress').json()
        self.assertEqual(progress['completed_assessments'], ['articles', 'mastery:articles'])
        self.assertEqual(progress['total_points'], 360)

    def test_abandon(self):
        self.client.post('/api/quiz/start', json={'topic_id': 'pronouns'})
        self.assertEqual(self.client.post('/api/quiz/abandon', json={}).json()['phase'], 'selecting')

    def test_storage_failure_on_award(self):
        app_module.storage = FailingStorage(fail_writes=True)
        app_module.user_contexts.clear()
        self.client.post('/api/quiz/start', json={'topic_id': 'pronouns'})
        response = None
        for _ in range(8):
            response = self.client.post('/api/quiz/answer', json={'option': self.correct_option()})
        self.assertEqual(response.status_code, 503)
        app_module.storage.fail_writes = False
        result = self.client.get('/api/quiz/result').json()
        self.assertEqual(result['awarded'], 180)

    def test_users_are_separate(self):
        self.play_quiz('toBe', user_id='anna')
        self.assertEqual(self.client.get('/api/progress').json()['total_points'], 0)
        progress = self.client.get('/api/progress', params={'user_id': 'anna'}).json()
        self.assertEqual(progress['total_points'], 200)


class TestVocabEndpoints(ServerTestCase):

    def test_browse_and_test(self):
        card = self.client.post('/api/vocab/level', json={'level': 'intermediate'}).json()
        self.assertEqual(card['word']['wordEng'], 'journey')
        card = self.client.post('/api/vocab/next', json={}).json()
        self.assertEqual(card['index'], 1)

        question = self.client.post('/api/vocab/test', json={'size': 3}).json()
        self.assertEqual(question['total'], 3)
        self.assertEqual(self.client.post('/api/vocab/next', json={}).status_code, 409)

        trainer = app_module.get_context().trainer
        while True:
            body = self.client.post('/api/vocab/answer', json={
                'option': trainer.question().correct_option}).json()
            if body['finished']:
                break
        self.assertEqual(body['result']['awarded'], 130)
        card = self.client.post('/api/vocab/browse', json={}).json()
        self.assertEqual(card['index'], 0)


class TestProgressEndpoints(ServerTestCase):

    def test_fresh_progress(self):
        progress = self.client.get('/api/progress').json()
        self.assertEqual(progress['total_points'], 0)
        self.assertEqual(progress['completed_assessments'], [])
        self.assertIsNone(progress['last_active_date'])

    def test_reset(self):
        self.play_quiz('toBe')
        progress = self.client.post('/api/progress/reset', json={}).json()
        self.assertEqual(progress['total_points'], 0)

    def test_favorites_update_learned_words(self):
        body = self.client.post('/api/favorites/1/toggle', json={}).json()
        self.assertTrue(body['is_favorite'])
        self.assertEqual(body['learned_words_count'], 1)
        self.client.post('/api/favorites/2/toggle', json={})
        words = self.client.get('/api/favorites').json()['words']
        self.assertEqual([w['id'] for w in words], [1, 2])

        body = self.client.delete('/api/favorites/1').json()
        self.assertEqual(body['favorites'], [2])
        self.assertEqual(body['learned_words_count'], 1)
        progress = self.client.get('/api/progress').json()
        self.assertEqual(progress['learned_words_count'], 1)
        self.assertEqual(progress['level_progress'], 2)

    def test_unknown_favorite(self):
        self.assertEqual(self.client.post('/api/favorites/99999/toggle', json={}).status_code, 404)


if __name__ == '__main__':
    unittest.main()
