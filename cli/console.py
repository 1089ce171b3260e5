"""Console UI for auralingo application."""

import requests

from core.config import AWARD_THRESHOLD, MASTERY_PREFIX
from cli.api_client import AuralingoAPIClient


class ConsoleUI:
    """Console user interface for auralingo application."""

    def __init__(self, client: AuralingoAPIClient, mode: str = ''):
        self.client = client
        self.mode = mode

    def print_topics(self, topics: list[dict]):
        print('\n' + '=' * 50)
        print('TOPICS' + (' (mastery)' if self.mode == MASTERY_PREFIX else ''))
        print('=' * 50)
        for i, topic in enumerate(topics, 1):
            print(f'  {i}. {topic["title"]} - {topic["description"]} ({topic["count"]} questions)')
        print('=' * 50)

    def print_question(self, question: dict):
        print(f'\nQuestion {question["position"] + 1}/{question["total"]}')
        print(f'>>> {question["prompt"]}')
        for i, option in enumerate(question['options'], 1):
            print(f'  {i}. {option}')

    def print_result(self, result: dict):
        """Print the finished session summary."""
        score = result['score']
        print('\n' + '=' * 50)
        print(f'RESULT: {score["correct"]}/{score["total"]} ({score["percentage"]}%)')
        print('=' * 50)
        if result['mistakes']:
            print('\nMistakes:')
            for mistake in result['mistakes']:
                print(f'  {mistake["prompt"]}  ->  {mistake["correctAnswer"]}')
        if result['awarded']:
            print(f'\n*** +{result["awarded"]} XP! Total: {result["total_points"]} ***')
        elif result['qualified']:
            print('\nAlready credited, no new XP this time.')
        else:
            print(f'\nScore {AWARD_THRESHOLD}% or more to earn XP.')
        print()

    def print_status(self, progress: dict):
        """Print profile summary."""
        print('\n' + '=' * 50)
        print('PROFILE')
        print('=' * 50)
        print(f'XP: {progress["total_points"]}')
        print(f'Completed: {len(progress["completed_assessments"])}')
        print(f'Streak: {progress["streak"]} days')
        print(f'Learned words: {progress["learned_words_count"]}/{progress["words_goal"]} '
              f'({progress["level_progress"]}%)')
        print('=' * 50 + '\n')

    def print_favorites(self, words: list[dict]):
        """Print the saved words."""
        if not words:
            print('\nNo saved words yet.\n')
            return
        print('\nSaved words:')
        for word in words:
            print(f'  {word["wordEng"]} {word["transcription"]} - {word["wordUA"]}')
        print()

    def pick_topic(self, topics: list[dict]) -> str | None:
        """Ask for a topic. Returns its id, or None to quit."""
        while True:
            self.print_topics(topics)
            user_input = input('Topic number ("status", "words", "exit") ==> ').strip().lower()
            if user_input == 'exit':
                return None
            if user_input == 'status':
                self.print_status(self.client.get_progress())
                continue
            if user_input == 'words':
                self.print_favorites(self.client.get_favorites())
                continue
            if user_input.isdigit() and 1 <= int(user_input) <= len(topics):
                return topics[int(user_input) - 1]['id']
            print('Please enter a topic number.')

    def run_quiz(self, topic_id: str) -> bool:
        """Run one quiz. Returns False if the user asked to exit."""
        question = self.client.start_quiz(topic_id, self.mode)
        while True:
            self.print_question(question)
            user_input = input('==> ').strip().lower()
            if user_input == 'exit':
                self.client.abandon_quiz()
                return False
            if not user_input.isdigit() or not 1 <= int(user_input) <= len(question['options']):
                print('Please enter an option number.')
                continue

            answer = self.client.answer(question['options'][int(user_input) - 1])
            if answer['is_correct']:
                print('Correct!')
            else:
                print(f'Wrong. Correct answer: {answer["correct_answer"]}')

            if answer['finished']:
                self.print_result(answer['result'])
                return True
            question = self.client.get_question()

    def run(self):
        """Run the main application loop."""
        try:
            health = self.client.health_check()
            print(f"Connected to auralingo server ({health['service']})")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        topics = self.client.get_topics()
        while True:
            topic_id = self.pick_topic(topics)
            if topic_id is None:
                print('Goodbye!')
                return
            try:
                if not self.run_quiz(topic_id):
                    print('Goodbye!')
                    return
            except requests.HTTPError as e:
                print(f"Error during quiz: {e}")
