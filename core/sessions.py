"""Session flows as explicit state machines.

QuizSession:        selecting -> in_progress -> finished
VocabularyTrainer:  browsing  -> testing     -> test_result
"""

import logging
import random

from .config import LEVELS, VOCAB_TEST_SIZE, VOCAB_TEST_OPTIONS
from .engine import AssessmentEngine
from .errors import InvalidTopic, InvalidTransition, UnknownTopic
from .models import AssessmentTopic, Question, SessionState, WordItem
from .progress import ProgressReconciler
from .vocabulary import QUIZ_TOPICS, get_words

logger = logging.getLogger(__name__)

SELECTING = 'selecting'
IN_PROGRESS = 'in_progress'
FINISHED = 'finished'

BROWSING = 'browsing'
TESTING = 'testing'
TEST_RESULT = 'test_result'


def build_vocab_topic(level: str, words: list[WordItem], rng: random.Random,
                      size: int = VOCAB_TEST_SIZE,
                      option_count: int = VOCAB_TEST_OPTIONS) -> AssessmentTopic:
    """Build a headword -> translation multiple-choice topic for a level."""
    translations = sorted({w.translation for w in words})
    if len(translations) < 2:
        raise InvalidTopic(f"Level '{level}' needs at least 2 distinct translations for a test")

    selected = rng.sample(words, min(size, len(words)))
    questions = []
    for word in selected:
        pool = [t for t in translations if t != word.translation]
        distractors = rng.sample(pool, min(option_count - 1, len(pool)))
        options = [word.translation] + distractors
        rng.shuffle(options)
        questions.append(Question(word.headword, options, word.translation))
    return AssessmentTopic(f"vocab:{level}", f"{level.title()} words", questions)


async def _answer(engine: AssessmentEngine, reconciler: ProgressReconciler,
                  state: SessionState, option: str) -> dict:
    question = engine.current_question(state)
    is_correct, finished = engine.submit_answer(state, option)
    response = {
        'is_correct': is_correct,
        'correct_answer': question.correct_option,
        'finished': finished,
        'result': None
    }
    if finished:
        response['result'] = await reconciler.evaluate(state)
    return response


class QuizSession:
    """One user's grammar quiz flow."""

    def __init__(self, reconciler: ProgressReconciler, engine: AssessmentEngine = None):
        self.reconciler = reconciler
        self.engine = engine or AssessmentEngine(QUIZ_TOPICS)
        self.state = None

    @property
    def phase(self) -> str:
        if self.state is None:
            return SELECTING
        return FINISHED if self.state.finished else IN_PROGRESS

    def _require(self, *phases: str) -> None:
        if self.phase not in phases:
            raise InvalidTransition(f"Quiz is {self.phase}, expected {' or '.join(phases)}")

    def select(self, topic_id: str, mode: str = '') -> SessionState:
        self._require(SELECTING)
        self.state = self.engine.start(topic_id, mode)
        return self.state

    def question(self) -> Question:
        self._require(IN_PROGRESS)
        return self.engine.current_question(self.state)

    async def answer(self, option: str) -> dict:
        """Answer the current question. The last answer settles the award."""
        self._require(IN_PROGRESS)
        return await _answer(self.engine, self.reconciler, self.state, option)

    async def settle(self) -> dict:
        """Result of the finished session, retrying the award if it failed."""
        self._require(FINISHED)
        return await self.reconciler.evaluate(self.state)

    def restart(self) -> SessionState:
        """Run the same topic and mode again with a new shuffle."""
        self._require(IN_PROGRESS, FINISHED)
        self.state = self.engine.start(self.state.topic_id, self.state.mode)
        return self.state

    def abandon(self) -> None:
        """Drop the session. Nothing was persisted mid-session."""
        if self.state is not None:
            logger.info(f"Session abandoned: topic={self.state.topic_id} at {self.state.position}/{self.state.total}")
        self.state = None


class VocabularyTrainer:
    """Flashcard browsing through one level, with a test at the end."""

    def __init__(self, reconciler: ProgressReconciler, rng: random.Random = None,
                 words_provider=get_words, test_size: int = VOCAB_TEST_SIZE):
        self.reconciler = reconciler
        self.rng = rng or random.Random()
        self.words_provider = words_provider
        self.test_size = test_size
        self.level = LEVELS[0]
        self.index = 0
        self.finished = False
        self.engine = None
        self.state = None

    @property
    def phase(self) -> str:
        if self.state is None:
            return BROWSING
        return TEST_RESULT if self.state.finished else TESTING

    def _require(self, *phases: str) -> None:
        if self.phase not in phases:
            raise InvalidTransition(f"Vocabulary trainer is {self.phase}, expected {' or '.join(phases)}")

    @property
    def words(self) -> list[WordItem]:
        return self.words_provider(self.level)

    def select_level(self, level: str) -> None:
        self._require(BROWSING)
        if level not in LEVELS:
            raise UnknownTopic(f"Unknown level: {level}")
        self.level = level
        self.index = 0
        self.finished = False

    def current_word(self) -> WordItem | None:
        """The card being shown, or None once past the last card."""
        self._require(BROWSING)
        words = self.words
        if self.finished or not words:
            return None
        return words[self.index]

    def next_word(self) -> WordItem | None:
        self._require(BROWSING)
        if self.index < len(self.words) - 1:
            self.index += 1
        else:
            self.finished = True
        return self.current_word()

    def previous_word(self) -> WordItem | None:
        self._require(BROWSING)
        if self.finished:
            self.finished = False
        elif self.index > 0:
            self.index -= 1
        return self.current_word()

    def start_test(self, size: int = None) -> SessionState:
        self._require(BROWSING)
        topic = build_vocab_topic(self.level, self.words, self.rng, size or self.test_size)
        self.engine = AssessmentEngine({topic.id: topic}, self.rng)
        self.state = self.engine.start(topic.id)
        return self.state

    def question(self) -> Question:
        self._require(TESTING)
        return self.engine.current_question(self.state)

    async def answer(self, option: str) -> dict:
        self._require(TESTING)
        return await _answer(self.engine, self.reconciler, self.state, option)

    async def settle(self) -> dict:
        self._require(TEST_RESULT)
        return await self.reconciler.evaluate(self.state)

    def back_to_browsing(self) -> None:
        """Leave the test (finished or not) and return to the first card."""
        self._require(TESTING, TEST_RESULT)
        self.engine = None
        self.state = None
        self.index = 0
        self.finished = False
