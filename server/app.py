"""FastAPI server for auralingo application."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Optional

from core.config import MASTERY_PREFIX, PROGRESS_KEY, FAVORITES_KEY, WORDS_GOAL
from core.errors import (
    AuralingoError, InvalidTopic, InvalidTransition, SessionFinished,
    StorageUnavailable, UnknownTopic, UnknownWord
)
from core.interfaces import Storage
from core.models import Question
from core.progress import FavoritesRegistry, ProgressReconciler, ProgressStore
from core.sessions import QuizSession, VocabularyTrainer
from core.vocabulary import get_levels, get_topics, get_words

from server.file_storage import FileStorage

logger = logging.getLogger(__name__)

VALID_MODES = ['', MASTERY_PREFIX]

ERROR_STATUS = {
    UnknownTopic: 404,
    UnknownWord: 404,
    InvalidTopic: 422,
    SessionFinished: 409,
    InvalidTransition: 409,
    StorageUnavailable: 503,
}


# Pydantic models for API
class UserRequest(BaseModel):
    user_id: str = "default"


class StartQuizRequest(BaseModel):
    topic_id: str
    mode: str = ""
    user_id: str = "default"


class AnswerRequest(BaseModel):
    option: str
    user_id: str = "default"


class LevelRequest(BaseModel):
    level: str
    user_id: str = "default"


class VocabTestRequest(BaseModel):
    size: Optional[int] = None
    user_id: str = "default"


class QuestionResponse(BaseModel):
    prompt: str
    options: list[str]
    position: int
    total: int


class AnswerResponse(BaseModel):
    is_correct: bool
    correct_answer: str
    finished: bool
    result: Optional[dict] = None


class ProgressResponse(BaseModel):
    total_points: int
    completed_assessments: list[str]
    learned_words_count: int
    streak: int
    last_active_date: Optional[str]
    level_progress: int
    words_goal: int


class UserContext:
    """Per-user services and live sessions."""

    def __init__(self, storage: Storage, user_id: str):
        prefix = '' if user_id == 'default' else f'{user_id}:'
        self.store = ProgressStore(storage, key=prefix + PROGRESS_KEY)
        self.favorites = FavoritesRegistry(storage, key=prefix + FAVORITES_KEY)
        self.reconciler = ProgressReconciler(self.store)
        self.quiz = QuizSession(self.reconciler)
        self.trainer = VocabularyTrainer(self.reconciler)


# Global state
storage: Storage = None
user_contexts: dict[str, UserContext] = {}


def create_storage() -> Storage:
    """Pick the storage backend from AURALINGO_STORAGE (file or postgres)."""
    storage_type = os.environ.get('AURALINGO_STORAGE', 'file')
    if storage_type == 'postgres':
        from server.postgres_storage import PostgresStorage
        logger.info("Using PostgreSQL storage")
        return PostgresStorage()
    logger.info("Using file storage")
    return FileStorage(os.environ.get('AURALINGO_STATE_DIR'))


@asynccontextmanager
async def lifespan(app: FastAPI):
    global storage
    if storage is None:
        storage = create_storage()
    yield
    user_contexts.clear()


app = FastAPI(title="Auralingo API", description="Vocabulary and grammar practice API",
              lifespan=lifespan)


@app.exception_handler(AuralingoError)
async def auralingo_error_handler(request: Request, exc: AuralingoError):
    status_code = ERROR_STATUS.get(type(exc), 400)
    if status_code >= 500:
        logger.error(f"{request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def get_context(user_id: str = "default") -> UserContext:
    """Get or create services for a user."""
    if user_id not in user_contexts:
        user_contexts[user_id] = UserContext(storage, user_id)
    return user_contexts[user_id]


def question_response(question: Question, state) -> QuestionResponse:
    return QuestionResponse(
        prompt=question.prompt,
        options=list(question.options),
        position=state.position,
        total=state.total
    )


def progress_response(progress) -> ProgressResponse:
    data = progress.to_dict()
    return ProgressResponse(
        total_points=data['totalPoints'],
        completed_assessments=data['completedQuizzes'],
        learned_words_count=data['learnedWordsCount'],
        streak=data['streak'],
        last_active_date=data['lastActiveDate'],
        level_progress=progress.level_progress(),
        words_goal=WORDS_GOAL
    )


@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "auralingo"}


# Catalog Endpoints
@app.get("/api/topics")
async def list_topics():
    return {"topics": get_topics()}


@app.get("/api/levels")
async def list_levels():
    return {"levels": get_levels()}


@app.get("/api/levels/{level}/words")
async def list_level_words(level: str):
    if level not in get_levels():
        raise HTTPException(status_code=404, detail=f"Unknown level: {level}")
    return {"level": level, "words": [w.to_dict() for w in get_words(level)]}


# Quiz Endpoints
@app.post("/api/quiz/start", response_model=QuestionResponse)
async def start_quiz(request: StartQuizRequest):
    if request.mode not in VALID_MODES:
        raise HTTPException(status_code=400, detail=f"Invalid mode: {request.mode}")
    quiz = get_context(request.user_id).quiz
    # Picking a topic always starts over
    quiz.abandon()
    state = quiz.select(request.topic_id, request.mode)
    return question_response(quiz.question(), state)


@app.get("/api/quiz/question", response_model=QuestionResponse)
async def get_quiz_question(user_id: str = "default"):
    quiz = get_context(user_id).quiz
    return question_response(quiz.question(), quiz.state)


@app.post("/api/quiz/answer", response_model=AnswerResponse)
async def answer_quiz(request: AnswerRequest):
    quiz = get_context(request.user_id).quiz
    return AnswerResponse(**await quiz.answer(request.option))


@app.get("/api/quiz/result")
async def get_quiz_result(user_id: str = "default"):
    return await get_context(user_id).quiz.settle()


@app.post("/api/quiz/restart", response_model=QuestionResponse)
async def restart_quiz(request: UserRequest):
    quiz = get_context(request.user_id).quiz
    state = quiz.restart()
    return question_response(quiz.question(), state)


@app.post("/api/quiz/abandon")
async def abandon_quiz(request: UserRequest):
    quiz = get_context(request.user_id).quiz
    quiz.abandon()
    return {"phase": quiz.phase}


# Vocabulary Endpoints
def card_response(trainer: VocabularyTrainer) -> dict:
    word = trainer.current_word()
    return {
        "level": trainer.level,
        "index": trainer.index,
        "total": len(trainer.words),
        "finished": trainer.finished,
        "word": word.to_dict() if word else None
    }


@app.post("/api/vocab/level")
async def select_vocab_level(request: LevelRequest):
    trainer = get_context(request.user_id).trainer
    trainer.select_level(request.level)
    return card_response(trainer)


@app.get("/api/vocab/card")
async def get_vocab_card(user_id: str = "default"):
    return card_response(get_context(user_id).trainer)


@app.post("/api/vocab/next")
async def next_vocab_card(request: UserRequest):
    trainer = get_context(request.user_id).trainer
    trainer.next_word()
    return card_response(trainer)


@app.post("/api/vocab/previous")
async def previous_vocab_card(request: UserRequest):
    trainer = get_context(request.user_id).trainer
    trainer.previous_word()
    return card_response(trainer)


@app.post("/api/vocab/test", response_model=QuestionResponse)
async def start_vocab_test(request: VocabTestRequest):
    trainer = get_context(request.user_id).trainer
    state = trainer.start_test(request.size)
    return question_response(trainer.question(), state)


@app.get("/api/vocab/question", response_model=QuestionResponse)
async def get_vocab_question(user_id: str = "default"):
    trainer = get_context(user_id).trainer
    return question_response(trainer.question(), trainer.state)


@app.post("/api/vocab/answer", response_model=AnswerResponse)
async def answer_vocab(request: AnswerRequest):
    trainer = get_context(request.user_id).trainer
    return AnswerResponse(**await trainer.answer(request.option))


@app.post("/api/vocab/browse")
async def back_to_browsing(request: UserRequest):
    trainer = get_context(request.user_id).trainer
    trainer.back_to_browsing()
    return card_response(trainer)


# Progress Endpoints
@app.get("/api/progress", response_model=ProgressResponse)
async def get_progress(user_id: str = "default"):
    return progress_response(await get_context(user_id).store.read())


@app.post("/api/progress/reset", response_model=ProgressResponse)
async def reset_progress(request: UserRequest):
    return progress_response(await get_context(request.user_id).store.reset())


# Favorites Endpoints
@app.get("/api/favorites")
async def list_favorites(user_id: str = "default"):
    words = await get_context(user_id).favorites.words()
    return {"words": [w.to_dict() for w in words]}


@app.post("/api/favorites/{word_id}/toggle")
async def toggle_favorite(word_id: int, request: UserRequest):
    context = get_context(request.user_id)
    favorites, progress = await context.reconciler.toggle_favorite(context.favorites, word_id)
    return {
        "word_id": word_id,
        "is_favorite": FavoritesRegistry.is_favorite(word_id, favorites),
        "favorites": sorted(favorites),
        "learned_words_count": progress.learned_words_count
    }


@app.delete("/api/favorites/{word_id}")
async def remove_favorite(word_id: int, user_id: str = "default"):
    context = get_context(user_id)
    favorites, progress = await context.reconciler.remove_favorite(context.favorites, word_id)
    return {
        "word_id": word_id,
        "favorites": sorted(favorites),
        "learned_words_count": progress.learned_words_count
    }
