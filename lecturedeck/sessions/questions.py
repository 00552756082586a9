"""
Question flattening and scoring shared by material and module quizzes
"""
from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Sequence, Union

from lecturedeck.models.content import Material, Module, QuizQuestion
from lecturedeck.models.session import ContentDefect, DefectKind, QuizResult


class FlatQuestion(BaseModel):
    """A quiz question together with where it came from"""
    model_config = ConfigDict(frozen=True)

    question: QuizQuestion
    material_id: Optional[str] = None
    material_title: Optional[str] = None
    material_index: int = 0
    question_index: int = 0

    @property
    def options(self) -> List[str]:
        return self.question.options

    def is_correct(self, option_index: Optional[int]) -> bool:
        return self.question.is_correct(option_index)


QuestionLike = Union[QuizQuestion, FlatQuestion]


def flatten_material_questions(material: Material, material_index: int = 0) -> List[FlatQuestion]:
    """Questions of a single material, in quiz order"""
    return [
        FlatQuestion(
            question=question,
            material_id=material.id,
            material_title=material.title,
            material_index=material_index,
            question_index=q_index,
        )
        for q_index, question in enumerate(material.questions)
    ]


def flatten_module_questions(module: Module) -> List[FlatQuestion]:
    """Concatenate every material's questions: material order, then question order"""
    flat = []
    for m_index, material in enumerate(module.materials):
        flat.extend(flatten_material_questions(material, m_index))
    return flat


def as_flat_questions(questions: Sequence[QuestionLike]) -> List[FlatQuestion]:
    """Wrap bare QuizQuestions so a session can treat every scope the same way"""
    flat = []
    for position, item in enumerate(questions):
        if isinstance(item, FlatQuestion):
            flat.append(item)
        else:
            flat.append(FlatQuestion(question=item, question_index=position))
    return flat


def calculate_score(answers: Sequence[Optional[int]], questions: Sequence[QuestionLike]) -> QuizResult:
    """
    Score a list of answers against its questions.

    Unanswered questions and questions with an out-of-range correct answer
    count as incorrect. An empty question list scores 0.
    """
    total = len(questions)
    if total == 0:
        return QuizResult(correct_count=0, total_questions=0, score=0.0)

    correct = 0
    for index, question in enumerate(questions):
        answer = answers[index] if index < len(answers) else None
        if question.is_correct(answer):
            correct += 1

    return QuizResult(
        correct_count=correct,
        total_questions=total,
        score=round(correct / total * 100, 1),
    )


def find_question_defects(questions: Sequence[QuestionLike]) -> List[ContentDefect]:
    """Questions whose correct answer does not index into their options"""
    defects = []
    for index, item in enumerate(questions):
        question = item.question if isinstance(item, FlatQuestion) else item
        if not question.has_valid_answer():
            defects.append(ContentDefect(
                kind=DefectKind.CORRECT_ANSWER_OUT_OF_RANGE,
                index=index,
                detail=(
                    f"correct answer {question.correct_answer} is outside "
                    f"{len(question.options)} options"
                ),
            ))
    return defects
