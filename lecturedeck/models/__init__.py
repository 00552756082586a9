"""Data models for LectureDeck"""

from lecturedeck.models.content import (
    Module, Material, Summary, QuizQuestion, Flashcard
)

from lecturedeck.models.session import (
    SessionKind, DefectKind, ContentDefect,
    QuizResult, AnswerFeedback,
    FlashcardOutcome, FlashcardSummary
)

from lecturedeck.models.schemas import (
    MaterialSummaryEntry, MaterialActions,
    QuizView, FlashcardView, QuestionView, CardView,
    CreateSessionRequest, CreateSessionResponse,
    StartQuizRequest, SelectAnswerRequest, QuizResponse,
    StartFlashcardsRequest, AssessCardRequest, FlashcardResponse,
    SummaryResponse, NotificationsResponse,
    CreateModuleRequest, LibraryResponse, ModuleListResponse, HealthResponse
)
