"""
Build API views from live session objects
"""
from lecturedeck.models.schemas import CardView, FlashcardView, QuestionView, QuizView
from lecturedeck.sessions.flashcard_session import FlashcardSession, Showing
from lecturedeck.sessions.quiz_session import QuizSession


def quiz_view(session: QuizSession, scope: str) -> QuizView:
    question = session.current_question
    index = session.current_index
    feedback = session.feedback()

    return QuizView(
        scope=scope,
        state=session.state.kind,
        current_index=index,
        total_questions=session.total,
        answered_count=sum(1 for answer in session.answers if answer is not None),
        question=QuestionView(
            question=question.question.question,
            options=question.options,
            material_title=question.material_title,
            question_index=question.question_index,
            material_index=question.material_index,
        ) if question else None,
        selected_answer=session.answers[index] if index is not None else None,
        feedback=feedback,
        feedback_message=feedback.to_message() if feedback else None,
        can_go_previous=session.can_go_previous,
        can_go_next=session.can_go_next,
        is_last_question=session.is_last_question,
        result=session.result,
        defects=session.defects,
        message="No questions available" if session.is_empty else None,
    )


def flashcard_view(session: FlashcardSession, material_id: str) -> FlashcardView:
    state = session.state
    card = session.current_card
    showing = isinstance(state, Showing)

    return FlashcardView(
        material_id=material_id,
        kind=session.kind,
        state=state.kind,
        current_index=session.current_index,
        flipped=state.flipped if showing else False,
        revealed=state.revealed if showing else False,
        position=session.position,
        pass_length=session.pass_length,
        total_cards=session.total,
        card=CardView(
            front=card.front,
            back=card.back if state.flipped else None,
        ) if card is not None else None,
        correct=session.correct_count,
        attempted=len(session.outcomes),
        summary=session.summary() if session.is_completed else None,
        defects=session.defects,
        message="No flashcards available" if session.total == 0 else None,
    )
