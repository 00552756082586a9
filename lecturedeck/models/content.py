"""
Study content models for LectureDeck

A Module owns an ordered list of Materials; each Material may carry the
summary, quiz and flashcards produced by the analysis backend. The backend
speaks camelCase, so every field also accepts its wire alias.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class ContentModel(BaseModel):
    """Base for content models: accept wire aliases and Python names"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Summary(ContentModel):
    """Generated summary of a material"""
    main_points: List[str] = Field(default_factory=list, alias="mainPoints")
    topics: List[str] = Field(default_factory=list)
    key_terms: List[str] = Field(default_factory=list, alias="keyTerms")


class QuizQuestion(ContentModel):
    """Multiple choice question with the index of its correct option"""
    question: str = Field(..., description="The question text")
    options: List[str] = Field(default_factory=list, description="Answer options")
    correct_answer: int = Field(..., alias="correctAnswer", description="0-based index of the correct option")

    def has_valid_answer(self) -> bool:
        """Check that correct_answer points at one of the options"""
        return 0 <= self.correct_answer < len(self.options)

    def is_correct(self, option_index: Optional[int]) -> bool:
        """A defective question never counts as answered correctly"""
        if option_index is None or not self.has_valid_answer():
            return False
        return option_index == self.correct_answer

    @property
    def correct_option(self) -> Optional[str]:
        """Text of the correct option, None when the index is out of range"""
        if not self.has_valid_answer():
            return None
        return self.options[self.correct_answer]


class Flashcard(ContentModel):
    """Single flashcard"""
    front: Optional[str] = Field(default=None, description="Question or term (front of card)")
    back: Optional[str] = Field(default=None, description="Answer or definition (back of card)")

    def is_complete(self) -> bool:
        """Both faces carry text"""
        return bool((self.front or "").strip()) and bool((self.back or "").strip())


class Material(ContentModel):
    """An uploaded document plus its generated study content"""
    id: str
    title: str
    type: str = Field(default="PDF")
    date: Optional[str] = None
    module_id: Optional[str] = Field(default=None, alias="moduleId")
    file_path: Optional[str] = None
    file_url: Optional[str] = None
    summary: Optional[Summary] = None
    quiz: Optional[List[QuizQuestion]] = None
    flashcards: Optional[List[Flashcard]] = None

    @property
    def questions(self) -> List[QuizQuestion]:
        return list(self.quiz or [])

    @property
    def cards(self) -> List[Flashcard]:
        return list(self.flashcards or [])

    def has_generated_content(self) -> bool:
        """True once analysis produced at least one kind of content"""
        return self.summary is not None or bool(self.quiz) or bool(self.flashcards)


class Module(ContentModel):
    """User-defined collection of materials, in presentation order"""
    id: str
    title: str
    description: str = Field(default="")
    materials: List[Material] = Field(default_factory=list)

    def get_material(self, material_id: str) -> Optional[Material]:
        """Get a material by ID"""
        for material in self.materials:
            if material.id == material_id:
                return material
        return None
