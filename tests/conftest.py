import os

import pytest

# Keep test runs off the filesystem: no rotating log file
os.environ["LOG_FILE"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

from lecturedeck.models.content import Flashcard, Material, Module, QuizQuestion, Summary


def make_question(text: str, correct: int = 0, options=None) -> QuizQuestion:
    return QuizQuestion(
        question=text,
        options=options if options is not None else ["a", "b", "c", "d"],
        correct_answer=correct,
    )


@pytest.fixture
def four_questions():
    return [make_question(f"Q{i}", correct=i % 4) for i in range(4)]


@pytest.fixture
def deck():
    return [
        Flashcard(front="mitochondria", back="powerhouse of the cell"),
        Flashcard(front="ribosome", back="protein synthesis"),
        Flashcard(front="nucleus", back="holds DNA"),
    ]


@pytest.fixture
def module_payload():
    """Module as the content backend returns it (camelCase wire format)"""
    return {
        "id": "mod-1",
        "title": "Cell Biology",
        "description": "Week 1-3 lectures",
        "materials": [
            {
                "id": "mat-a",
                "title": "Lecture A",
                "date": "2024-02-01T10:00:00Z",
                "type": "PDF",
                "moduleId": "mod-1",
                "file_path": "modules/mod-1/abc.pdf",
                "file_url": "https://files.example/abc.pdf",
                "summary": {
                    "mainPoints": ["Cells are the unit of life"],
                    "topics": ["cells"],
                    "keyTerms": ["organelle"],
                },
                "quiz": [
                    {"question": "A0", "options": ["x", "y"], "correctAnswer": 0},
                    {"question": "A1", "options": ["x", "y", "z"], "correctAnswer": 2},
                ],
                "flashcards": [
                    {"front": "cell", "back": "unit of life"},
                    {"front": "organelle", "back": "cell part"},
                    {"front": "membrane", "back": "boundary"},
                ],
            },
            {
                "id": "mat-b",
                "title": "Lecture B",
                "type": "PPTX",
                "moduleId": "mod-1",
                "quiz": [
                    {"question": "B0", "options": ["p", "q"], "correctAnswer": 1},
                ],
            },
            {
                "id": "mat-c",
                "title": "Lecture C (not analyzed)",
                "type": "DOCX",
                "moduleId": "mod-1",
            },
        ],
    }


@pytest.fixture
def module(module_payload):
    return Module.model_validate(module_payload)


@pytest.fixture
def simple_module():
    return Module(
        id="m",
        title="Module",
        materials=[
            Material(id="a", title="A", quiz=[make_question("A0", 0), make_question("A1", 1)],
                     summary=Summary(main_points=["point"])),
            Material(id="b", title="B", quiz=[make_question("B0", 2)]),
        ],
    )
