"""Progress ledger, favorites and the award rule.

ProgressStore and FavoritesRegistry own the only mutable shared state.
Every read-modify-write on a storage key runs under that key's lock, so
two concurrent awards can never lose each other's update. Blocking
storage calls run in the default executor.
"""

import asyncio
import json
import logging
from datetime import date, timedelta

from .config import (
    AWARD_THRESHOLD, BASE_AWARD, PER_CORRECT_BONUS, REPEAT_AWARDS,
    PROGRESS_KEY, FAVORITES_KEY
)
from .engine import score_of
from .errors import InvalidTransition, StorageUnavailable, UnknownWord
from .interfaces import Storage
from .models import SessionState, UserProgress, WordItem
from .vocabulary import get_word

logger = logging.getLogger(__name__)


async def _run_blocking(func, *args):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func, *args)


class ProgressStore:
    """Single owner of the persisted UserProgress record.

    Use one instance per storage key; the lock lives on the instance.
    """

    def __init__(self, storage: Storage, key: str = PROGRESS_KEY,
                 repeat_awards: bool = REPEAT_AWARDS):
        self.storage = storage
        self.key = key
        self.repeat_awards = repeat_awards
        self._lock = asyncio.Lock()

    async def _load(self, strict: bool) -> UserProgress:
        """Load the record. Missing or malformed data yields the default.

        With strict=False an unreadable store also yields the default;
        with strict=True StorageUnavailable propagates so a
        read-modify-write never overwrites data it could not see.
        """
        try:
            raw = await _run_blocking(self.storage.get, self.key)
        except StorageUnavailable as e:
            if strict:
                raise
            logger.warning(f"Progress unreadable, using defaults: {e}")
            return UserProgress()
        except UnicodeDecodeError as e:
            logger.warning(f"Progress record under '{self.key}' is not valid text, using defaults: {e}")
            return UserProgress()
        if raw is None:
            return UserProgress()
        try:
            return UserProgress.from_dict(json.loads(raw))
        except ValueError as e:
            logger.warning(f"Malformed progress record under '{self.key}', using defaults: {e}")
            return UserProgress()

    async def _save(self, progress: UserProgress) -> None:
        try:
            await _run_blocking(self.storage.set, self.key, json.dumps(progress.to_dict()))
        except StorageUnavailable as e:
            logger.error(f"Failed to write progress under '{self.key}': {e}")
            raise

    async def read(self) -> UserProgress:
        return await self._load(strict=False)

    async def award(self, assessment_id: str, points: int,
                    today: date = None) -> tuple[UserProgress, int]:
        """Credit an assessment. Returns (progress, points actually added).

        An id already in completed_assessments earns nothing unless
        repeat_awards is set. When today is given the streak is updated
        in the same write.
        """
        if points < 0:
            raise ValueError(f"Award points must be non-negative, got {points}")
        async with self._lock:
            progress = await self._load(strict=True)
            first_time = assessment_id not in progress.completed_assessments
            if first_time:
                progress.completed_assessments.add(assessment_id)
            added = points if (first_time or self.repeat_awards) else 0
            progress.total_points += added
            if today is not None:
                _touch_streak(progress, today)
            await self._save(progress)
        logger.info(f"Award for '{assessment_id}': +{added} XP (total {progress.total_points})")
        return progress, added

    async def merge_award(self, assessment_id: str, points: int,
                          today: date = None) -> UserProgress:
        progress, _ = await self.award(assessment_id, points, today)
        return progress

    async def set_learned_words_count(self, count: int) -> UserProgress:
        """Overwrite the learned-word count. Pass the full current count."""
        if count < 0:
            raise ValueError(f"Learned words count must be non-negative, got {count}")
        async with self._lock:
            progress = await self._load(strict=True)
            progress.learned_words_count = count
            await self._save(progress)
        return progress

    async def record_activity(self, today: date = None) -> UserProgress:
        """Mark today as active and update the day streak."""
        async with self._lock:
            progress = await self._load(strict=True)
            _touch_streak(progress, today or date.today())
            await self._save(progress)
        return progress

    async def reset(self) -> UserProgress:
        """Destructive reset to the zero record."""
        async with self._lock:
            progress = UserProgress()
            await self._save(progress)
        logger.info(f"Progress under '{self.key}' was reset")
        return progress


def _touch_streak(progress: UserProgress, today: date) -> None:
    last = progress.last_active_date
    if last == today:
        return
    if last is not None and last + timedelta(days=1) == today:
        progress.streak += 1
    else:
        progress.streak = 1
    progress.last_active_date = today


class FavoritesRegistry:
    """User-saved words, persisted as a JSON array of word objects."""

    def __init__(self, storage: Storage, key: str = FAVORITES_KEY, lookup=get_word):
        self.storage = storage
        self.key = key
        self.lookup = lookup
        self._lock = asyncio.Lock()

    async def _load(self, strict: bool) -> list[WordItem]:
        try:
            raw = await _run_blocking(self.storage.get, self.key)
        except StorageUnavailable as e:
            if strict:
                raise
            logger.warning(f"Favorites unreadable, using empty set: {e}")
            return []
        except UnicodeDecodeError as e:
            logger.warning(f"Favorites under '{self.key}' are not valid text, using empty set: {e}")
            return []
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("favorites must be a list")
            return [WordItem.from_dict(item) for item in data]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Malformed favorites under '{self.key}', using empty set: {e}")
            return []

    async def _save(self, words: list[WordItem]) -> None:
        try:
            await _run_blocking(self.storage.set, self.key,
                                json.dumps([w.to_dict() for w in words], ensure_ascii=False))
        except StorageUnavailable as e:
            logger.error(f"Failed to write favorites under '{self.key}': {e}")
            raise

    async def words(self) -> list[WordItem]:
        """Saved words in the order they were saved."""
        return await self._load(strict=False)

    async def load(self) -> set[int]:
        return {w.id for w in await self._load(strict=False)}

    async def toggle(self, word_id: int) -> set[int]:
        """Add the word if absent, remove it if present."""
        async with self._lock:
            words = await self._load(strict=True)
            if any(w.id == word_id for w in words):
                words = [w for w in words if w.id != word_id]
            else:
                word = self.lookup(word_id)
                if word is None:
                    raise UnknownWord(f"Unknown word id: {word_id}")
                words.append(word)
            await self._save(words)
        return {w.id for w in words}

    async def remove(self, word_id: int) -> set[int]:
        async with self._lock:
            words = await self._load(strict=True)
            remaining = [w for w in words if w.id != word_id]
            if len(remaining) != len(words):
                await self._save(remaining)
        return {w.id for w in remaining}

    @staticmethod
    def is_favorite(word_id: int, favorites: set[int]) -> bool:
        return word_id in favorites


class ProgressReconciler:
    """Decides whether a finished session earns XP and applies it once."""

    def __init__(self, store: ProgressStore, threshold: int = AWARD_THRESHOLD,
                 base_award: int = BASE_AWARD, per_correct_bonus: int = PER_CORRECT_BONUS):
        self.store = store
        self.threshold = threshold
        self.base_award = base_award
        self.per_correct_bonus = per_correct_bonus
        self._evaluate_lock = asyncio.Lock()
        self._favorites_lock = asyncio.Lock()

    def award_for(self, score: dict) -> int:
        """XP a score earns, 0 below the threshold."""
        if score['percentage'] < self.threshold:
            return 0
        return self.base_award + score['correct'] * self.per_correct_bonus

    async def evaluate(self, state: SessionState, today: date = None) -> dict:
        """Reconcile a finished session with the ledger.

        Runs at most once per session: the outcome is cached on the state
        and returned unchanged on later calls. If the write fails the
        state stays unreconciled and the call may be retried.
        """
        if not state.finished:
            raise InvalidTransition(f"Session for '{state.topic_id}' is not finished")
        if state.outcome is not None:
            return state.outcome

        async with self._evaluate_lock:
            # A concurrent call may have finished while we waited
            if state.outcome is not None:
                return state.outcome

            score = score_of(state.correct_count, state.total)
            qualified = score['percentage'] >= self.threshold
            awarded = 0
            progress = None
            if qualified:
                progress, awarded = await self.store.award(
                    state.assessment_id, self.award_for(score), today or date.today())

            state.outcome = {
                'assessment_id': state.assessment_id,
                'score': score,
                'mistakes': [dict(m) for m in state.mistakes],
                'qualified': qualified,
                'awarded': awarded,
                'total_points': progress.total_points if progress else None
            }
        return state.outcome

    async def sync_learned_words(self, favorites: set[int]) -> UserProgress:
        return await self.store.set_learned_words_count(len(favorites))

    async def toggle_favorite(self, registry: FavoritesRegistry,
                              word_id: int) -> tuple[set[int], UserProgress]:
        """Toggle a favorite and sync the learned-word count in one step."""
        async with self._favorites_lock:
            favorites = await registry.toggle(word_id)
            progress = await self.sync_learned_words(favorites)
        return favorites, progress

    async def remove_favorite(self, registry: FavoritesRegistry,
                              word_id: int) -> tuple[set[int], UserProgress]:
        async with self._favorites_lock:
            favorites = await registry.remove(word_id)
            progress = await self.sync_learned_words(favorites)
        return favorites, progress
