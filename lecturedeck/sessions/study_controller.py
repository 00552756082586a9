"""
Study controller: one module snapshot and the sessions built on it
"""
from typing import List, Optional

from lecturedeck.exceptions import MaterialNotFoundError
from lecturedeck.models.content import Material, Module
from lecturedeck.models.schemas import MaterialActions, MaterialSummaryEntry
from lecturedeck.models.session import FlashcardSummary, QuizResult
from lecturedeck.sessions.flashcard_session import FlashcardSession
from lecturedeck.sessions.questions import flatten_material_questions, flatten_module_questions
from lecturedeck.sessions.quiz_session import QuizSession
from lecturedeck.utils.logger import get_logger
from lecturedeck.utils.notifications import (
    LoggingNotificationSink, NotificationSink, flashcards_completed, quiz_completed
)

logger = get_logger(__name__)


class StudyController:
    """
    Builds quiz and flashcard sessions over an immutable module snapshot.

    Opening a quiz or a deck always creates a fresh session and discards the
    previous one of the same type, so answers never carry over between
    scopes.
    """

    def __init__(self, module: Module, notifier: Optional[NotificationSink] = None):
        self.module = module
        self.notifier = notifier if notifier is not None else LoggingNotificationSink()
        self.quiz: Optional[QuizSession] = None
        self.quiz_scope: Optional[str] = None
        self.flashcards: Optional[FlashcardSession] = None
        self.flashcards_material_id: Optional[str] = None

    def _material(self, material_id: str) -> Material:
        material = self.module.get_material(material_id)
        if material is None:
            raise MaterialNotFoundError(material_id)
        return material

    def _on_quiz_complete(self, result: QuizResult):
        self.notifier.notify(quiz_completed(result))

    def _on_flashcards_complete(self, summary: FlashcardSummary):
        self.notifier.notify(flashcards_completed(summary))

    # =========================================================================
    # Sessions
    # =========================================================================

    def open_material_quiz(self, material_id: str) -> QuizSession:
        """Start a quiz over one material's questions"""
        material = self._material(material_id)
        index = self.module.materials.index(material)
        self.quiz_scope = f"material:{material.id}"
        self.quiz = QuizSession(
            flatten_material_questions(material, index),
            on_complete=self._on_quiz_complete,
            label=self.quiz_scope,
        )
        logger.info(f"Opened quiz for material '{material.title}' ({self.quiz.total} questions)")
        return self.quiz

    def open_module_quiz(self) -> QuizSession:
        """Start a quiz over every material of the module"""
        self.quiz_scope = f"module:{self.module.id}"
        self.quiz = QuizSession(
            flatten_module_questions(self.module),
            on_complete=self._on_quiz_complete,
            label=self.quiz_scope,
        )
        logger.info(f"Opened module quiz for '{self.module.title}' ({self.quiz.total} questions)")
        return self.quiz

    def open_flashcards(self, material_id: str) -> FlashcardSession:
        """Start a primary flashcard pass over one material's deck"""
        material = self._material(material_id)
        self.flashcards_material_id = material.id
        self.flashcards = FlashcardSession(
            material.cards,
            on_complete=self._on_flashcards_complete,
            label=f"flashcards:{material.id}",
        )
        logger.info(f"Opened flashcards for material '{material.title}' ({self.flashcards.total} cards)")
        return self.flashcards

    def close_quiz(self):
        self.quiz = None
        self.quiz_scope = None

    def close_flashcards(self):
        self.flashcards = None
        self.flashcards_material_id = None

    def reload(self, module: Module):
        """Swap in a fresh snapshot; sessions built on the old one are dropped"""
        self.module = module
        self.close_quiz()
        self.close_flashcards()
        logger.debug(f"Reloaded module {module.id}")

    # =========================================================================
    # Summaries
    # =========================================================================

    def material_summary(self, material_id: str) -> Optional[MaterialSummaryEntry]:
        material = self._material(material_id)
        if material.summary is None:
            return None
        return MaterialSummaryEntry(
            material_id=material.id,
            material_title=material.title,
            summary=material.summary,
        )

    def module_summary(self) -> List[MaterialSummaryEntry]:
        """Summaries of every analyzed material, in material order"""
        return [
            MaterialSummaryEntry(
                material_id=material.id,
                material_title=material.title,
                summary=material.summary,
            )
            for material in self.module.materials
            if material.summary is not None
        ]

    def material_actions(self, material_id: str) -> MaterialActions:
        """Which study actions a material currently supports"""
        material = self._material(material_id)
        return MaterialActions(
            material_id=material.id,
            summary=material.summary is not None,
            quiz=bool(material.quiz),
            flashcards=bool(material.flashcards),
            analyze=bool(material.file_url),
            file_url=material.file_url,
        )
