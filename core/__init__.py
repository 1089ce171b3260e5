from .models import WordItem, Question, AssessmentTopic, SessionState, UserProgress, make_assessment_id
from .interfaces import Storage
from .errors import (
    AuralingoError, UnknownTopic, InvalidTopic, SessionFinished,
    InvalidTransition, UnknownWord, StorageUnavailable
)
from .engine import AssessmentEngine, score_of
from .progress import ProgressStore, FavoritesRegistry, ProgressReconciler
from .sessions import QuizSession, VocabularyTrainer
from .config import (
    AWARD_THRESHOLD, BASE_AWARD, PER_CORRECT_BONUS,
    MASTERY_PREFIX, PROGRESS_KEY, FAVORITES_KEY
)

__all__ = [
    'WordItem', 'Question', 'AssessmentTopic', 'SessionState', 'UserProgress',
    'make_assessment_id',
    'Storage',
    'AuralingoError', 'UnknownTopic', 'InvalidTopic', 'SessionFinished',
    'InvalidTransition', 'UnknownWord', 'StorageUnavailable',
    'AssessmentEngine', 'score_of',
    'ProgressStore', 'FavoritesRegistry', 'ProgressReconciler',
    'QuizSession', 'VocabularyTrainer',
    'AWARD_THRESHOLD', 'BASE_AWARD', 'PER_CORRECT_BONUS',
    'MASTERY_PREFIX', 'PROGRESS_KEY', 'FAVORITES_KEY'
]
