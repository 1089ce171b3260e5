"""Domain models for auralingo application."""

from datetime import date

from .config import WORDS_GOAL
from .errors import InvalidTopic


def make_assessment_id(topic_id: str, mode: str = '') -> str:
    """Identifier credited in the progress ledger.

    Modes are namespaced so that e.g. the mastery run of a topic is
    credited independently of the standard run.
    """
    if mode:
        return f"{mode}:{topic_id}"
    return topic_id


class WordItem:
    """A single vocabulary entry from the word bank."""

    __slots__ = ('id', 'headword', 'translation', 'phonetic', 'example')

    def __init__(self, id: int, headword: str, translation: str,
                 phonetic: str = '', example: str = ''):
        self.id = id
        self.headword = headword
        self.translation = translation
        self.phonetic = phonetic
        self.example = example

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'wordEng': self.headword,
            'wordUA': self.translation,
            'transcription': self.phonetic,
            'example': self.example
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'WordItem':
        return cls(
            int(data['id']),
            data['wordEng'],
            data['wordUA'],
            data.get('transcription', ''),
            data.get('example', '')
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, WordItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"WordItem(id={self.id}, headword='{self.headword}')"


class Question:
    """A multiple-choice question."""

    def __init__(self, prompt: str, options: list[str], correct_option: str):
        self.prompt = prompt
        self.options = tuple(options)
        self.correct_option = correct_option

    def to_dict(self) -> dict:
        return {
            'question': self.prompt,
            'options': list(self.options),
            'answer': self.correct_option
        }

    def is_correct(self, selected_option: str) -> bool:
        return selected_option == self.correct_option


class AssessmentTopic:
    """A named question set on one grammar or vocabulary theme."""

    def __init__(self, topic_id: str, title: str, questions: list[Question],
                 description: str = ''):
        self.id = topic_id
        self.title = title
        self.description = description
        self.questions = tuple(questions)

    def __len__(self) -> int:
        return len(self.questions)

    def validate(self) -> None:
        """Raise InvalidTopic unless every question can be answered."""
        if not self.questions:
            raise InvalidTopic(f"Topic '{self.id}' has no questions")
        for i, question in enumerate(self.questions):
            if len(set(question.options)) < 2:
                raise InvalidTopic(
                    f"Topic '{self.id}' question {i} needs at least 2 distinct options")
            if question.correct_option not in question.options:
                raise InvalidTopic(
                    f"Topic '{self.id}' question {i} answer is not one of its options")

    def summary(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'count': len(self.questions)
        }


class SessionState:
    """Ephemeral state of one assessment run. Never persisted."""

    def __init__(self, topic_id: str, order: list[int], mode: str = ''):
        self.topic_id = topic_id
        self.mode = mode
        self.order = list(order)
        self.position = 0
        self.correct_count = 0
        self.mistakes = []  # [{prompt, correctAnswer}] in encounter order
        self.outcome = None  # reconciliation result, set once

    @property
    def reconciled(self) -> bool:
        return self.outcome is not None

    @property
    def assessment_id(self) -> str:
        return make_assessment_id(self.topic_id, self.mode)

    @property
    def total(self) -> int:
        return len(self.order)

    @property
    def finished(self) -> bool:
        return self.position == len(self.order)

    def to_dict(self) -> dict:
        return {
            'topic_id': self.topic_id,
            'mode': self.mode,
            'position': self.position,
            'total': self.total,
            'correct_count': self.correct_count,
            'mistakes': [dict(m) for m in self.mistakes],
            'finished': self.finished
        }


class UserProgress:
    """The persisted progress ledger, one per installation."""

    def __init__(self):
        self.total_points = 0
        self.completed_assessments = set()
        self.learned_words_count = 0
        self.streak = 0
        self.last_active_date = None

    def to_dict(self) -> dict:
        return {
            'totalPoints': self.total_points,
            'completedQuizzes': sorted(self.completed_assessments),
            'learnedWordsCount': self.learned_words_count,
            'streak': self.streak,
            'lastActiveDate': self.last_active_date.isoformat() if self.last_active_date else None
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'UserProgress':
        """Build a record from its JSON form. Raises ValueError if malformed."""
        if not isinstance(data, dict):
            raise ValueError(f"Progress record must be an object, got {type(data).__name__}")
        progress = cls()
        progress.total_points = _non_negative_int(data, 'totalPoints')
        progress.learned_words_count = _non_negative_int(data, 'learnedWordsCount')
        progress.streak = _non_negative_int(data, 'streak')

        completed = data.get('completedQuizzes', [])
        if not isinstance(completed, list) or not all(isinstance(c, str) for c in completed):
            raise ValueError("completedQuizzes must be a list of strings")
        progress.completed_assessments = set(completed)

        last_active = data.get('lastActiveDate')
        if last_active is not None:
            if not isinstance(last_active, str):
                raise ValueError("lastActiveDate must be an ISO date string")
            # Older records stored full timestamps
            progress.last_active_date = date.fromisoformat(last_active[:10])
        return progress

    def level_progress(self, goal: int = WORDS_GOAL) -> int:
        """Percentage of the learned-words goal reached, capped at 100."""
        if goal <= 0:
            return 100
        return min(round(self.learned_words_count * 100 / goal), 100)

    def __eq__(self, other) -> bool:
        if not isinstance(other, UserProgress):
            return NotImplemented
        return self.to_dict() == other.to_dict()


def _non_negative_int(data: dict, key: str) -> int:
    value = data.get(key, 0)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
    return value
