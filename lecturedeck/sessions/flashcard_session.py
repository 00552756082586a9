"""
Flashcard session state machine

A primary pass shows every card in deck order. After it completes, a review
pass can cycle through the cards marked incorrect until each one has been
marked correct once.

States:
    NoCards                            - empty deck
    Showing(index, flipped, revealed)  - a card is on screen
    Completed                          - the pass is over
"""
from pydantic import BaseModel, ConfigDict
from typing import Callable, List, Literal, Optional, Sequence, Union

from lecturedeck.models.content import Flashcard
from lecturedeck.models.session import (
    ContentDefect, DefectKind, FlashcardOutcome, FlashcardSummary, SessionKind
)
from lecturedeck.utils.logger import get_logger

logger = get_logger(__name__)


class DeckState(BaseModel):
    model_config = ConfigDict(frozen=True)


class NoCards(DeckState):
    kind: Literal["no_cards"] = "no_cards"


class Showing(DeckState):
    kind: Literal["showing"] = "showing"
    index: int
    flipped: bool = False
    revealed: bool = False


class Completed(DeckState):
    kind: Literal["completed"] = "completed"


AnyDeckState = Union[NoCards, Showing, Completed]


def find_card_defects(cards: Sequence[Flashcard]) -> List[ContentDefect]:
    """Cards missing their front or back text"""
    return [
        ContentDefect(
            kind=DefectKind.INCOMPLETE_FLASHCARD,
            index=index,
            detail="flashcard is missing its front or back text",
        )
        for index, card in enumerate(cards)
        if not card.is_complete()
    ]


class FlashcardSession:
    """
    Self-assessment over a flashcard deck.

    The outcome log is append-only; a card assessed several times during a
    review pass appears once per assessment.
    """

    def __init__(
        self,
        cards: Sequence[Flashcard],
        on_complete: Optional[Callable[[FlashcardSummary], None]] = None,
        label: str = "flashcards",
    ):
        self.cards: List[Flashcard] = list(cards)
        self.on_complete = on_complete
        self.label = label
        self.kind = SessionKind.PRIMARY
        self.outcomes: List[FlashcardOutcome] = []
        self.review_cards: List[int] = []
        self.defects: List[ContentDefect] = find_card_defects(self.cards)
        self._defective = {defect.index for defect in self.defects}

        for defect in self.defects:
            logger.warning(f"[{self.label}] card {defect.index}: {defect.detail}")

        self.state: AnyDeckState = Showing(index=0) if self.cards else NoCards()

    @property
    def total(self) -> int:
        return len(self.cards)

    @property
    def is_review(self) -> bool:
        return self.kind == SessionKind.REVIEW

    @property
    def is_completed(self) -> bool:
        return isinstance(self.state, Completed)

    @property
    def current_index(self) -> Optional[int]:
        return self.state.index if isinstance(self.state, Showing) else None

    @property
    def current_card(self) -> Optional[Flashcard]:
        index = self.current_index
        return None if index is None else self.cards[index]

    @property
    def position(self) -> Optional[int]:
        """1-based position in the current pass ("Card 2 of 5")"""
        index = self.current_index
        if index is None:
            return None
        if self.is_review:
            return self.review_cards.index(index) + 1
        return index + 1

    @property
    def pass_length(self) -> int:
        return len(self.review_cards) if self.is_review else self.total

    @property
    def correct_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_correct)

    @property
    def incorrect_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.is_correct)

    @property
    def can_start_review(self) -> bool:
        return self.is_completed and not self.is_review and self.incorrect_count > 0

    def flip(self) -> bool:
        """Turn the card over; seeing the back unlocks assessment for this visit"""
        if not isinstance(self.state, Showing):
            return False
        flipped = not self.state.flipped
        self.state = Showing(
            index=self.state.index,
            flipped=flipped,
            revealed=self.state.revealed or flipped,
        )
        return True

    def assess(self, is_correct: bool) -> bool:
        """Record the user's self-assessment and move to the next card"""
        if not isinstance(self.state, Showing) or not self.state.revealed:
            return False
        current = self.state.index

        if current in self._defective and is_correct:
            logger.warning(f"[{self.label}] card {current} is incomplete, recording it as incorrect")
            is_correct = False
        self.outcomes.append(FlashcardOutcome(card_index=current, is_correct=is_correct))

        if self.is_review:
            self._advance_review(current, is_correct)
        elif current < self.total - 1:
            self.state = Showing(index=current + 1)
        else:
            self._complete()
        return True

    def _advance_review(self, current: int, is_correct: bool):
        prior = list(self.review_cards)
        # incomplete cards leave the rotation after one visit
        if is_correct or current in self._defective:
            self.review_cards = [i for i in self.review_cards if i != current]

        if not self.review_cards:
            self._complete()
            return

        position = prior.index(current)
        self.state = Showing(index=prior[(position + 1) % len(prior)])

    def _complete(self):
        self.state = Completed()
        summary = self.summary()
        logger.info(
            f"[{self.label}] {self.kind.value} pass completed: "
            f"{summary.correct}/{summary.attempted} correct"
        )
        if self.on_complete is not None:
            self.on_complete(summary)

    def start_review(self) -> bool:
        """Review every card that has any incorrect entry in the log"""
        if not self.can_start_review:
            return False

        review_cards = []
        for outcome in self.outcomes:
            if not outcome.is_correct and outcome.card_index not in review_cards:
                review_cards.append(outcome.card_index)

        self.review_cards = review_cards
        self.outcomes = []
        self.kind = SessionKind.REVIEW
        self.state = Showing(index=review_cards[0])
        logger.debug(f"[{self.label}] review started with cards {review_cards}")
        return True

    def reset_deck(self) -> bool:
        """Start over with a primary pass from the first card"""
        if not self.cards:
            return False
        self.outcomes = []
        self.review_cards = []
        self.kind = SessionKind.PRIMARY
        self.state = Showing(index=0)
        logger.debug(f"[{self.label}] deck reset")
        return True

    def summary(self) -> FlashcardSummary:
        """Counts for the completion view"""
        return FlashcardSummary(
            kind=self.kind,
            correct=self.correct_count,
            attempted=len(self.outcomes),
            remaining_to_review=None if self.is_review else self.incorrect_count,
            review_available=self.can_start_review,
        )
