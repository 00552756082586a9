from lecturedeck.models.content import Flashcard
from lecturedeck.models.session import DefectKind, SessionKind
from lecturedeck.sessions.flashcard_session import Completed, FlashcardSession, NoCards, Showing


def flip_and_assess(session: FlashcardSession, is_correct: bool):
    assert session.flip()
    assert session.assess(is_correct)


def test_starts_on_first_card_face_up(deck):
    session = FlashcardSession(deck)
    assert session.state == Showing(index=0, flipped=False, revealed=False)
    assert session.kind == SessionKind.PRIMARY
    assert session.position == 1
    assert session.pass_length == 3


def test_empty_deck_has_no_transitions():
    session = FlashcardSession([])
    assert isinstance(session.state, NoCards)
    assert session.flip() is False
    assert session.assess(True) is False
    assert session.start_review() is False
    assert session.reset_deck() is False


def test_flip_reveals_and_reveal_survives_flipping_back(deck):
    session = FlashcardSession(deck)
    session.flip()
    assert session.state == Showing(index=0, flipped=True, revealed=True)
    session.flip()
    assert session.state == Showing(index=0, flipped=False, revealed=True)


def test_assess_before_reveal_is_ignored(deck):
    session = FlashcardSession(deck)
    assert session.assess(True) is False
    assert session.outcomes == []
    assert session.state == Showing(index=0)


def test_assess_moves_to_next_card_face_up(deck):
    session = FlashcardSession(deck)
    flip_and_assess(session, True)
    assert session.state == Showing(index=1, flipped=False, revealed=False)


def test_primary_pass_summary_and_review_scenario(deck):
    summaries = []
    session = FlashcardSession(deck, on_complete=summaries.append)
    flip_and_assess(session, True)
    flip_and_assess(session, False)
    flip_and_assess(session, True)

    assert isinstance(session.state, Completed)
    summary = session.summary()
    assert summary.attempted == 3
    assert summary.correct == 2
    assert summary.remaining_to_review == 1
    assert summary.review_available is True
    assert summaries == [summary]

    assert session.start_review() is True
    assert session.kind == SessionKind.REVIEW
    assert session.review_cards == [1]
    assert session.outcomes == []
    assert session.state == Showing(index=1)

    flip_and_assess(session, True)
    assert isinstance(session.state, Completed)
    assert len(session.outcomes) == 1
    review_summary = session.summary()
    assert review_summary.kind == SessionKind.REVIEW
    assert review_summary.remaining_to_review is None
    assert review_summary.review_available is False
    assert len(summaries) == 2


def test_review_not_offered_after_perfect_pass(deck):
    session = FlashcardSession(deck)
    for _ in deck:
        flip_and_assess(session, True)

    assert session.summary().review_available is False
    assert session.start_review() is False
    assert isinstance(session.state, Completed)


def test_start_review_only_from_completed(deck):
    session = FlashcardSession(deck)
    flip_and_assess(session, False)
    assert session.start_review() is False
    assert session.kind == SessionKind.PRIMARY


def test_review_cycles_until_every_card_marked_correct():
    cards = [Flashcard(front=f"f{i}", back=f"b{i}") for i in range(4)]
    session = FlashcardSession(cards)
    for is_correct in (False, True, False, False):
        flip_and_assess(session, is_correct)

    session.start_review()
    assert session.review_cards == [0, 2, 3]

    visited = []
    # card 0 right, card 2 wrong, card 3 wrong, card 2 right, card 3 wrong, card 3 right
    for is_correct in (True, False, False, True, False, True):
        visited.append(session.current_index)
        flip_and_assess(session, is_correct)

    assert visited == [0, 2, 3, 2, 3, 3]
    assert isinstance(session.state, Completed)
    assert len(session.outcomes) == 6
    assert session.review_cards == []


def test_wrong_answer_on_last_review_card_keeps_it_in_rotation():
    cards = [Flashcard(front="f", back="b"), Flashcard(front="g", back="c")]
    session = FlashcardSession(cards)
    flip_and_assess(session, True)
    flip_and_assess(session, False)
    session.start_review()

    flip_and_assess(session, False)
    assert session.state == Showing(index=1)
    flip_and_assess(session, True)
    assert isinstance(session.state, Completed)


def test_review_log_keeps_every_assessment():
    cards = [Flashcard(front=f"f{i}", back=f"b{i}") for i in range(3)]
    session = FlashcardSession(cards)
    for is_correct in (False, False, True):
        flip_and_assess(session, is_correct)
    session.start_review()
    # card 0 right, card 1 wrong, card 1 right: two entries for card 1
    flip_and_assess(session, True)
    flip_and_assess(session, False)
    flip_and_assess(session, True)

    assert [o.card_index for o in session.outcomes] == [0, 1, 1]
    assert session.start_review() is False


def test_reset_deck_from_review(deck):
    session = FlashcardSession(deck)
    for _ in deck:
        flip_and_assess(session, False)
    session.start_review()
    flip_and_assess(session, True)

    assert session.reset_deck() is True
    assert session.kind == SessionKind.PRIMARY
    assert session.outcomes == []
    assert session.review_cards == []
    assert session.state == Showing(index=0)


def test_review_position_counts_within_subset():
    cards = [Flashcard(front=f"f{i}", back=f"b{i}") for i in range(3)]
    session = FlashcardSession(cards)
    for is_correct in (True, False, False):
        flip_and_assess(session, is_correct)
    session.start_review()
    assert session.position == 1
    assert session.pass_length == 2
    flip_and_assess(session, False)
    assert session.current_index == 2
    assert session.position == 2


def test_incomplete_card_is_reported_and_never_marked_right():
    cards = [Flashcard(front="f", back=""), Flashcard(front="g", back="h")]
    session = FlashcardSession(cards)

    assert [d.index for d in session.defects] == [0]
    assert session.defects[0].kind == DefectKind.INCOMPLETE_FLASHCARD

    flip_and_assess(session, True)
    assert session.outcomes[0].is_correct is False
    flip_and_assess(session, True)

    assert session.start_review() is True
    assert session.review_cards == [0]
    # the incomplete card cannot be mastered, so the review ends after one visit
    flip_and_assess(session, True)
    assert isinstance(session.state, Completed)
    assert session.outcomes[-1].is_correct is False
