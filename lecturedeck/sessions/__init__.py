"""Quiz and flashcard study sessions"""

from lecturedeck.sessions.quiz_session import QuizSession
from lecturedeck.sessions.flashcard_session import FlashcardSession
from lecturedeck.sessions.study_controller import StudyController
from lecturedeck.sessions.questions import (
    FlatQuestion, flatten_material_questions, flatten_module_questions, calculate_score
)
