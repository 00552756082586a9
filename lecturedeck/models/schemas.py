"""
Pydantic schemas for API requests and responses
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

from lecturedeck.models.content import Module, Summary
from lecturedeck.models.session import (
    AnswerFeedback, ContentDefect, FlashcardSummary, QuizResult, SessionKind
)


class MaterialSummaryEntry(BaseModel):
    """Summary of one material, labelled for the module summary view"""
    material_id: str
    material_title: str
    summary: Summary


class MaterialActions(BaseModel):
    """Study actions available for a material"""
    material_id: str
    summary: bool
    quiz: bool
    flashcards: bool
    analyze: bool
    file_url: Optional[str] = None


# =============================================================================
# Session views
# =============================================================================

class QuestionView(BaseModel):
    """Question as shown to the user (the correct answer stays hidden)"""
    question: str
    options: List[str]
    material_title: Optional[str] = None
    question_index: int
    material_index: int


class QuizView(BaseModel):
    """Snapshot of a quiz session"""
    scope: str
    state: str
    current_index: Optional[int] = None
    total_questions: int
    answered_count: int
    question: Optional[QuestionView] = None
    selected_answer: Optional[int] = None
    feedback: Optional[AnswerFeedback] = None
    feedback_message: Optional[str] = None
    can_go_previous: bool = False
    can_go_next: bool = False
    is_last_question: bool = False
    result: Optional[QuizResult] = None
    defects: List[ContentDefect] = Field(default_factory=list)
    message: Optional[str] = None


class CardView(BaseModel):
    """Flashcard as shown to the user; the back is only sent once flipped"""
    front: Optional[str] = None
    back: Optional[str] = None


class FlashcardView(BaseModel):
    """Snapshot of a flashcard session"""
    material_id: str
    kind: SessionKind
    state: str
    current_index: Optional[int] = None
    flipped: bool = False
    revealed: bool = False
    position: Optional[int] = None
    pass_length: int
    total_cards: int
    card: Optional[CardView] = None
    correct: int
    attempted: int
    summary: Optional[FlashcardSummary] = None
    defects: List[ContentDefect] = Field(default_factory=list)
    message: Optional[str] = None


# =============================================================================
# Session requests / responses
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to open a study session on a module"""
    module_id: str = Field(..., description="Module to study")


class CreateSessionResponse(BaseModel):
    """Response after opening a study session"""
    success: bool
    session_id: str
    module_id: str
    module_title: str
    materials: List[MaterialActions]


class StartQuizRequest(BaseModel):
    """Start a quiz for one material, or for the whole module when omitted"""
    material_id: Optional[str] = Field(default=None, description="Material scope; module scope if empty")


class SelectAnswerRequest(BaseModel):
    option_index: int = Field(..., description="0-based option index")


class QuizResponse(BaseModel):
    success: bool
    accepted: bool = Field(default=True, description="False when the action was ignored")
    quiz: QuizView


class StartFlashcardsRequest(BaseModel):
    material_id: str = Field(..., description="Material whose deck to study")


class AssessCardRequest(BaseModel):
    is_correct: bool = Field(..., description="Whether the user knew the answer")


class FlashcardResponse(BaseModel):
    success: bool
    accepted: bool = Field(default=True, description="False when the action was ignored")
    flashcards: FlashcardView


class SummaryResponse(BaseModel):
    success: bool
    title: str
    summaries: List[MaterialSummaryEntry]


class NotificationsResponse(BaseModel):
    success: bool
    notifications: List[Dict[str, Any]]


# =============================================================================
# Library requests / responses
# =============================================================================

class CreateModuleRequest(BaseModel):
    title: str = Field(..., description="Module title")
    description: str = Field(default="", description="Module description")


class ModuleListResponse(BaseModel):
    """Every module of the current user"""
    success: bool
    modules: List[Module]


class LibraryResponse(BaseModel):
    """Outcome of a module/material mutation"""
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Response model for health check"""
    status: str
    timestamp: datetime
    version: str
    active_sessions: int
