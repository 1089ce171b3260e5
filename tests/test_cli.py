"""Tests for the console client."""

import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import MagicMock, patch

from cli.api_client import AuralingoAPIClient
from cli.console import ConsoleUI


class TestAPIClient(unittest.TestCase):

    def setUp(self):
        self.client = AuralingoAPIClient(base_url='http://example.test/', user_id='anna')
        self.client.session = MagicMock()
        self.response = self.client.session.get.return_value
        self.client.session.post.return_value = self.response

    def test_base_url_trailing_slash_stripped(self):
        self.assertEqual(self.client.base_url, 'http://example.test')

    def test_get_sends_user_id(self):
        self.response.json.return_value = {'topics': [{'id': 'toBe'}]}
        self.assertEqual(self.client.get_topics(), [{'id': 'toBe'}])
        self.client.session.get.assert_called_once_with(
            'http://example.test/api/topics', params={'user_id': 'anna'})
        self.response.raise_for_status.assert_called_once()

    def test_post_sends_user_id_and_mode(self):
        self.response.json.return_value = {'position': 0}
        self.client.start_quiz('articles', 'mastery')
        self.client.session.post.assert_called_once_with(
            'http://example.test/api/quiz/start',
            json={'topic_id': 'articles', 'mode': 'mastery', 'user_id': 'anna'})

    def test_get_favorites(self):
        self.response.json.return_value = {'words': [{'id': 1}]}
        self.assertEqual(self.client.get_favorites(), [{'id': 1}])
        self.client.session.get.assert_called_once_with(
            'http://example.test/api/favorites', params={'user_id': 'anna'})


class TestConsoleUI(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.ui = ConsoleUI(self.client)

    def render(self, result: dict) -> str:
        out = io.StringIO()
        with redirect_stdout(out):
            self.ui.print_result(result)
        return out.getvalue()

    def test_result_with_award(self):
        text = self.render({
            'score': {'correct': 9, 'total': 10, 'percentage': 90},
            'mistakes': [{'prompt': 'I ___ happy.', 'correctAnswer': 'am'}],
            'qualified': True, 'awarded': 190, 'total_points': 190,
        })
        self.assertIn('9/10 (90%)', text)
        self.assertIn('I ___ happy.  ->  am', text)
        self.assertIn('+190 XP', text)

    def test_result_already_credited(self):
        text = self.render({
            'score': {'correct': 10, 'total': 10, 'percentage': 100},
            'mistakes': [], 'qualified': True, 'awarded': 0, 'total_points': 200,
        })
        self.assertIn('Already credited', text)

    def test_result_below_threshold(self):
        text = self.render({
            'score': {'correct': 5, 'total': 10, 'percentage': 50},
            'mistakes': [], 'qualified': False, 'awarded': 0, 'total_points': 0,
        })
        self.assertIn('90% or more', text)

    def test_pick_topic(self):
        topics = [{'id': 'toBe', 'title': 'To be', 'description': 'am/is/are', 'count': 10},
                  {'id': 'articles', 'title': 'Articles', 'description': 'a/an/the', 'count': 8}]
        with patch('builtins.input', side_effect=['x', '2']), redirect_stdout(io.StringIO()):
            self.assertEqual(self.ui.pick_topic(topics), 'articles')
        with patch('builtins.input', return_value='exit'), redirect_stdout(io.StringIO()):
            self.assertIsNone(self.ui.pick_topic(topics))

    def test_words_command_lists_saved_words(self):
        self.client.get_favorites.return_value = [
            {'id': 1, 'wordEng': 'apple', 'wordUA': 'яблуко', 'transcription': '/ˈæp.əl/', 'example': ''}]
        topics = [{'id': 'toBe', 'title': 'To be', 'description': 'am/is/are', 'count': 10}]
        out = io.StringIO()
        with patch('builtins.input', side_effect=['words', 'exit']), redirect_stdout(out):
            self.assertIsNone(self.ui.pick_topic(topics))
        self.client.get_favorites.assert_called_once_with()
        self.assertIn('apple /ˈæp.əl/ - яблуко', out.getvalue())


if __name__ == '__main__':
    unittest.main()
