"""Assessment engine: question sequencing, judging and scoring."""

import logging
import random

from .errors import InvalidTopic, SessionFinished, UnknownTopic
from .models import AssessmentTopic, Question, SessionState

logger = logging.getLogger(__name__)


def score_of(correct: int, total: int) -> dict:
    """Score summary with the percentage rounded half up."""
    if total <= 0:
        raise InvalidTopic("Cannot score a session with no questions")
    percentage = (200 * correct + total) // (2 * total)
    return {
        'correct': correct,
        'total': total,
        'percentage': percentage
    }


class AssessmentEngine:
    """Runs quiz and vocabulary-test sessions over a topic catalog.

    The engine itself is stateless; everything about a run lives in the
    SessionState it hands out. It never touches persistence.
    """

    def __init__(self, topics: dict[str, AssessmentTopic], rng: random.Random = None):
        self.topics = topics
        self.rng = rng or random.Random()

    def get_topic(self, topic_id: str) -> AssessmentTopic:
        topic = self.topics.get(topic_id)
        if topic is None:
            raise UnknownTopic(f"Unknown topic: {topic_id}")
        return topic

    def start(self, topic_id: str, mode: str = '') -> SessionState:
        """Start a session with the topic's questions in a fresh random order."""
        topic = self.get_topic(topic_id)
        topic.validate()
        order = list(range(len(topic.questions)))
        # random.shuffle is Fisher-Yates: every permutation equally likely
        self.rng.shuffle(order)
        logger.info(f"Session started: topic={topic_id} mode={mode or 'standard'} questions={len(order)}")
        return SessionState(topic_id, order, mode)

    def current_question(self, state: SessionState) -> Question:
        if state.finished:
            raise SessionFinished(f"Session for '{state.topic_id}' is already finished")
        topic = self.get_topic(state.topic_id)
        return topic.questions[state.order[state.position]]

    def submit_answer(self, state: SessionState, selected_option: str) -> tuple[bool, bool]:
        """Judge the answer to the current question and advance.

        There is exactly one attempt per question. Returns
        (is_correct, finished).
        """
        question = self.current_question(state)
        is_correct = question.is_correct(selected_option)
        if is_correct:
            state.correct_count += 1
        else:
            state.mistakes.append({
                'prompt': question.prompt,
                'correctAnswer': question.correct_option
            })
        state.position += 1
        if state.finished:
            logger.info(f"Session finished: topic={state.topic_id} "
                        f"correct={state.correct_count}/{state.total}")
        return is_correct, state.finished

    def score(self, state: SessionState) -> dict:
        return score_of(state.correct_count, state.total)
