"""
Session result models for LectureDeck Study Features
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class SessionKind(str, Enum):
    """Flashcard pass kinds"""
    PRIMARY = "primary"
    REVIEW = "review"


class DefectKind(str, Enum):
    """Content integrity problems coming from the analysis backend"""
    CORRECT_ANSWER_OUT_OF_RANGE = "correct_answer_out_of_range"
    INCOMPLETE_FLASHCARD = "incomplete_flashcard"


class ContentDefect(BaseModel):
    """A question or card the session cannot grade"""
    model_config = ConfigDict(frozen=True)

    kind: DefectKind
    index: int = Field(..., description="Position in the session's question list or deck")
    detail: str


class QuizResult(BaseModel):
    """Final score of a quiz session"""
    model_config = ConfigDict(frozen=True)

    correct_count: int
    total_questions: int
    score: float = Field(..., description="Percentage, one decimal place")


class AnswerFeedback(BaseModel):
    """Feedback shown once a question's answer is revealed"""
    model_config = ConfigDict(frozen=True)

    question_index: int
    selected: int
    correct_answer: Optional[int] = None
    correct_option: Optional[str] = None
    is_correct: bool

    def to_message(self) -> str:
        """Get the human-readable feedback line"""
        if self.is_correct:
            return "Great job! Click Next to continue."
        if self.correct_option is None:
            return "This question has no valid answer."
        return f"The correct answer was: {self.correct_option}"


class FlashcardOutcome(BaseModel):
    """One self-assessment entry in the outcome log"""
    model_config = ConfigDict(frozen=True)

    card_index: int
    is_correct: bool


class FlashcardSummary(BaseModel):
    """Completion summary of a flashcard pass"""
    model_config = ConfigDict(frozen=True)

    kind: SessionKind
    correct: int
    attempted: int
    remaining_to_review: Optional[int] = Field(default=None, description="Primary passes only")
    review_available: bool = False
