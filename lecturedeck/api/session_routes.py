"""
API Routes for study sessions (Quizzes, Flashcards, Summaries)
"""
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from lecturedeck.api.views import flashcard_view, quiz_view
from lecturedeck.exceptions import ApiError, MaterialNotFoundError, SessionNotFoundError
from lecturedeck.models.schemas import (
    AssessCardRequest, CreateSessionRequest, CreateSessionResponse,
    FlashcardResponse, NotificationsResponse, QuizResponse,
    SelectAnswerRequest, StartFlashcardsRequest, StartQuizRequest, SummaryResponse
)
from lecturedeck.sessions.registry import SessionEntry, SessionRegistry, get_session_registry
from lecturedeck.utils.api_client import StudyApiClient, get_api_client
from lecturedeck.utils.logger import get_logger

logger = get_logger(__name__)

# Create router
router = APIRouter(prefix=f"/api/{settings.API_VERSION}/study", tags=["Study Sessions"])

# Rate limiter
limiter = Limiter(key_func=get_remote_address)


def get_content_provider(authorization: Optional[str] = Header(default=None)) -> StudyApiClient:
    """Content backend client, carrying the caller's bearer token when present"""
    if authorization and authorization.lower().startswith("bearer "):
        return StudyApiClient(access_token=authorization[7:].strip())
    return get_api_client()


def _entry(registry: SessionRegistry, session_id: str) -> SessionEntry:
    try:
        return registry.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Study session not found")


def _quiz_response(entry: SessionEntry, accepted: bool = True) -> QuizResponse:
    controller = entry.controller
    if controller.quiz is None:
        raise HTTPException(status_code=409, detail="No quiz is open in this session")
    return QuizResponse(success=True, accepted=accepted, quiz=quiz_view(controller.quiz, controller.quiz_scope))


def _flashcard_response(entry: SessionEntry, accepted: bool = True) -> FlashcardResponse:
    controller = entry.controller
    if controller.flashcards is None:
        raise HTTPException(status_code=409, detail="No flashcards are open in this session")
    return FlashcardResponse(
        success=True,
        accepted=accepted,
        flashcards=flashcard_view(controller.flashcards, controller.flashcards_material_id),
    )


def _quiz_action(entry: SessionEntry, action: Callable[[], bool]) -> QuizResponse:
    if entry.controller.quiz is None:
        raise HTTPException(status_code=409, detail="No quiz is open in this session")
    return _quiz_response(entry, accepted=action())


def _flashcard_action(entry: SessionEntry, action: Callable[[], bool]) -> FlashcardResponse:
    if entry.controller.flashcards is None:
        raise HTTPException(status_code=409, detail="No flashcards are open in this session")
    return _flashcard_response(entry, accepted=action())


# =============================================================================
# SESSION ENDPOINTS
# =============================================================================

@router.post("/sessions", response_model=CreateSessionResponse)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
def create_session(
    request: Request,
    body: CreateSessionRequest,
    provider: StudyApiClient = Depends(get_content_provider),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Load a module and open a study session on it"""
    try:
        module = provider.fetch_module(body.module_id)
    except ApiError as e:
        logger.error(f"Error loading module {body.module_id}: {e}")
        status_code = 404 if e.status_code == 404 else 502
        raise HTTPException(status_code=status_code, detail=f"Failed to load module: {e.message}")

    entry = registry.create(module)
    controller = entry.controller
    return CreateSessionResponse(
        success=True,
        session_id=entry.session_id,
        module_id=module.id,
        module_title=module.title,
        materials=[controller.material_actions(m.id) for m in module.materials],
    )


@router.delete("/sessions/{session_id}")
async def close_session(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    """Close a study session and discard its state"""
    closed = registry.close(session_id)
    return {
        "success": closed,
        "message": "Session closed" if closed else "Session not found"
    }


@router.get("/sessions/{session_id}/notifications", response_model=NotificationsResponse)
async def drain_notifications(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    """Collect notifications produced since the last call"""
    entry = _entry(registry, session_id)
    return NotificationsResponse(
        success=True,
        notifications=[n.model_dump(mode="json") for n in entry.notifications.drain()],
    )


# =============================================================================
# SUMMARY ENDPOINTS
# =============================================================================

@router.get("/sessions/{session_id}/summary", response_model=SummaryResponse)
async def get_module_summary(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    """Summaries of every analyzed material in the module"""
    entry = _entry(registry, session_id)
    controller = entry.controller
    return SummaryResponse(
        success=True,
        title=f"{controller.module.title} - Module Summary",
        summaries=controller.module_summary(),
    )


@router.get("/sessions/{session_id}/materials/{material_id}/summary", response_model=SummaryResponse)
async def get_material_summary(
    session_id: str, material_id: str, registry: SessionRegistry = Depends(get_session_registry)
):
    """Summary of one material"""
    entry = _entry(registry, session_id)
    try:
        summary = entry.controller.material_summary(material_id)
    except MaterialNotFoundError:
        raise HTTPException(status_code=404, detail="Material not found")

    if summary is None:
        raise HTTPException(status_code=404, detail="Material has no summary yet")
    return SummaryResponse(success=True, title=f"{summary.material_title} - Summary", summaries=[summary])


# =============================================================================
# QUIZ ENDPOINTS
# =============================================================================

@router.post("/sessions/{session_id}/quiz", response_model=QuizResponse)
async def start_quiz(
    session_id: str, body: StartQuizRequest, registry: SessionRegistry = Depends(get_session_registry)
):
    """Start a quiz for one material, or the module quiz when no material is given"""
    entry = _entry(registry, session_id)
    try:
        if body.material_id:
            entry.controller.open_material_quiz(body.material_id)
        else:
            entry.controller.open_module_quiz()
    except MaterialNotFoundError:
        raise HTTPException(status_code=404, detail="Material not found")
    return _quiz_response(entry)


@router.get("/sessions/{session_id}/quiz", response_model=QuizResponse)
async def get_quiz(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    return _quiz_response(_entry(registry, session_id))


@router.delete("/sessions/{session_id}/quiz")
async def close_quiz(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    _entry(registry, session_id).controller.close_quiz()
    return {"success": True, "message": "Quiz closed"}


@router.post("/sessions/{session_id}/quiz/answer", response_model=QuizResponse)
async def select_answer(
    session_id: str, body: SelectAnswerRequest, registry: SessionRegistry = Depends(get_session_registry)
):
    """Answer the current question; ignored once the answer is revealed"""
    entry = _entry(registry, session_id)
    return _quiz_action(entry, lambda: entry.controller.quiz.select_answer(body.option_index))


@router.post("/sessions/{session_id}/quiz/next", response_model=QuizResponse)
async def next_question(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    entry = _entry(registry, session_id)
    return _quiz_action(entry, lambda: entry.controller.quiz.next())


@router.post("/sessions/{session_id}/quiz/previous", response_model=QuizResponse)
async def previous_question(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    entry = _entry(registry, session_id)
    return _quiz_action(entry, lambda: entry.controller.quiz.previous())


@router.post("/sessions/{session_id}/quiz/reset", response_model=QuizResponse)
async def reset_quiz(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    """Try again: clear every answer"""
    entry = _entry(registry, session_id)
    return _quiz_action(entry, lambda: entry.controller.quiz.reset())


# =============================================================================
# FLASHCARD ENDPOINTS
# =============================================================================

@router.post("/sessions/{session_id}/flashcards", response_model=FlashcardResponse)
async def start_flashcards(
    session_id: str, body: StartFlashcardsRequest, registry: SessionRegistry = Depends(get_session_registry)
):
    """Start a primary pass over a material's flashcards"""
    entry = _entry(registry, session_id)
    try:
        entry.controller.open_flashcards(body.material_id)
    except MaterialNotFoundError:
        raise HTTPException(status_code=404, detail="Material not found")
    return _flashcard_response(entry)


@router.get("/sessions/{session_id}/flashcards", response_model=FlashcardResponse)
async def get_flashcards(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    return _flashcard_response(_entry(registry, session_id))


@router.delete("/sessions/{session_id}/flashcards")
async def close_flashcards(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    _entry(registry, session_id).controller.close_flashcards()
    return {"success": True, "message": "Flashcards closed"}


@router.post("/sessions/{session_id}/flashcards/flip", response_model=FlashcardResponse)
async def flip_card(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    entry = _entry(registry, session_id)
    return _flashcard_action(entry, lambda: entry.controller.flashcards.flip())


@router.post("/sessions/{session_id}/flashcards/assess", response_model=FlashcardResponse)
async def assess_card(
    session_id: str, body: AssessCardRequest, registry: SessionRegistry = Depends(get_session_registry)
):
    """Record "got it right" / "got it wrong" for the current card"""
    entry = _entry(registry, session_id)
    return _flashcard_action(entry, lambda: entry.controller.flashcards.assess(body.is_correct))


@router.post("/sessions/{session_id}/flashcards/review", response_model=FlashcardResponse)
async def start_review(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    """Review the cards marked incorrect in the finished pass"""
    entry = _entry(registry, session_id)
    return _flashcard_action(entry, lambda: entry.controller.flashcards.start_review())


@router.post("/sessions/{session_id}/flashcards/reset", response_model=FlashcardResponse)
async def reset_flashcards(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    """Start over from the first card"""
    entry = _entry(registry, session_id)
    return _flashcard_action(entry, lambda: entry.controller.flashcards.reset_deck())
