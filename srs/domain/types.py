from dataclasses import dataclass
from typing import Optional

from .enums import CardStatus, Rating
from ..utils.time import now_ms


@dataclass(frozen=True)
class Card:
    """
    Read-only view of a flashcard as the scheduler sees it.
    ``next_review_date`` is epoch ms; 0 means "unscheduled, due now".
    """

    id: str
    set_id: str
    front: str = ""
    back: str = ""
    learning_step: int = 0
    status: Optional[CardStatus] = None  # derived from learning_step when omitted
    next_review_date: int = 0
    last_review_date: int = 0

    def __post_init__(self):
        if self.learning_step < 0:
            raise ValueError(f"learning_step must be >= 0, got {self.learning_step}")
        if self.status is None:
            from .logic import status_for_step

            object.__setattr__(self, "status", status_for_step(self.learning_step))
        else:
            # accept plain strings from storage ("young") as well as enum members
            object.__setattr__(self, "status", CardStatus(self.status))

    @classmethod
    def new(cls, id, set_id, front="", back="", now: Optional[int] = None):
        return cls(
            id=id,
            set_id=set_id,
            front=front,
            back=back,
            learning_step=0,
            status=CardStatus.NEW,
            next_review_date=now_ms() if now is None else now,
            last_review_date=0,
        )


@dataclass(frozen=True)
class ReviewResult:
    card_id: str
    rating: Rating
    next_review_date: int
    new_status: CardStatus
    new_learning_step: int
