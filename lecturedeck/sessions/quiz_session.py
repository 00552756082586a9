"""
Quiz session state machine

Walks a user through an ordered question list one question at a time.
The same session serves a single material and a whole module; only the
flattened question list differs.

States:
    NoQuestions   - empty list, accepts no transitions
    Answering(i)  - question i shown, no answer yet
    Revealed(i)   - question i answered; the answer is locked
    Completed     - last question passed, result computed
"""
from pydantic import BaseModel, ConfigDict
from typing import Callable, List, Literal, Optional, Sequence, Union

from lecturedeck.models.session import AnswerFeedback, ContentDefect, QuizResult
from lecturedeck.sessions.questions import (
    FlatQuestion, QuestionLike, as_flat_questions, calculate_score, find_question_defects
)
from lecturedeck.utils.logger import get_logger

logger = get_logger(__name__)


class QuizState(BaseModel):
    model_config = ConfigDict(frozen=True)


class NoQuestions(QuizState):
    kind: Literal["no_questions"] = "no_questions"


class Answering(QuizState):
    kind: Literal["answering"] = "answering"
    index: int


class Revealed(QuizState):
    kind: Literal["revealed"] = "revealed"
    index: int


class Completed(QuizState):
    kind: Literal["completed"] = "completed"


AnyQuizState = Union[NoQuestions, Answering, Revealed, Completed]


class QuizSession:
    """
    Linear quiz traversal with answer locking and scoring.

    Invalid calls (answering twice, moving past either end) are ignored and
    return False so that duplicate UI events cannot corrupt the session.
    """

    def __init__(
        self,
        questions: Sequence[QuestionLike],
        on_complete: Optional[Callable[[QuizResult], None]] = None,
        label: str = "quiz",
    ):
        """
        Args:
            questions: Ordered question list for this scope
            on_complete: Called once with the result when the quiz completes
            label: Scope name used in log lines
        """
        self.questions: List[FlatQuestion] = as_flat_questions(questions)
        self.answers: List[Optional[int]] = [None] * len(self.questions)
        self.on_complete = on_complete
        self.label = label
        self.result: Optional[QuizResult] = None
        self.defects: List[ContentDefect] = find_question_defects(self.questions)

        for defect in self.defects:
            logger.warning(f"[{self.label}] question {defect.index}: {defect.detail}")

        self.state: AnyQuizState = Answering(index=0) if self.questions else NoQuestions()

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def is_empty(self) -> bool:
        return not self.questions

    @property
    def is_completed(self) -> bool:
        return isinstance(self.state, Completed)

    @property
    def current_index(self) -> Optional[int]:
        """Index of the question on screen, None when empty or completed"""
        if isinstance(self.state, (Answering, Revealed)):
            return self.state.index
        return None

    @property
    def current_question(self) -> Optional[FlatQuestion]:
        index = self.current_index
        return None if index is None else self.questions[index]

    @property
    def can_go_previous(self) -> bool:
        index = self.current_index
        return index is not None and index > 0

    @property
    def can_go_next(self) -> bool:
        return isinstance(self.state, Revealed)

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.total - 1

    def _state_for(self, index: int) -> AnyQuizState:
        """Answered questions stay revealed so their answer cannot change"""
        if self.answers[index] is None:
            return Answering(index=index)
        return Revealed(index=index)

    def select_answer(self, option_index: int) -> bool:
        """Record and reveal the answer for the current question"""
        if not isinstance(self.state, Answering):
            return False
        index = self.state.index
        if not 0 <= option_index < len(self.questions[index].options):
            logger.debug(f"[{self.label}] ignoring option {option_index} for question {index}")
            return False

        self.answers[index] = option_index
        self.state = Revealed(index=index)
        logger.debug(f"[{self.label}] question {index} answered with option {option_index}")
        return True

    def next(self) -> bool:
        """Advance from a revealed question, completing the quiz after the last one"""
        if not isinstance(self.state, Revealed):
            return False
        index = self.state.index

        if index < self.total - 1:
            self.state = self._state_for(index + 1)
            return True

        self.state = Completed()
        self.result = calculate_score(self.answers, self.questions)
        logger.info(
            f"[{self.label}] quiz completed: {self.result.correct_count}/"
            f"{self.result.total_questions} ({self.result.score:.1f}%)"
        )
        if self.on_complete is not None:
            self.on_complete(self.result)
        return True

    def previous(self) -> bool:
        """Go back one question; disabled on the first question"""
        if not self.can_go_previous:
            return False
        self.state = self._state_for(self.current_index - 1)
        return True

    def reset(self) -> bool:
        """Clear every answer and start again from the first question"""
        if self.is_empty:
            return False
        self.answers = [None] * self.total
        self.result = None
        self.state = Answering(index=0)
        logger.debug(f"[{self.label}] quiz reset")
        return True

    def feedback(self) -> Optional[AnswerFeedback]:
        """Feedback for the current question once its answer is revealed"""
        if not isinstance(self.state, Revealed):
            return None
        index = self.state.index
        question = self.questions[index].question
        selected = self.answers[index]
        return AnswerFeedback(
            question_index=index,
            selected=selected,
            correct_answer=question.correct_answer if question.has_valid_answer() else None,
            correct_option=question.correct_option,
            is_correct=question.is_correct(selected),
        )

    def score(self) -> QuizResult:
        """Score of the answers recorded so far"""
        return calculate_score(self.answers, self.questions)
