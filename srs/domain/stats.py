from dataclasses import asdict, dataclass

from .enums import CardStatus
from .logic import DUE, OVERDUE, classify_card
from ..config import DEFAULT_CONFIG
from ..utils.time import now_ms


@dataclass(frozen=True)
class SetStats:
    total: int = 0
    new: int = 0
    learning: int = 0
    young: int = 0
    mature: int = 0
    due: int = 0  # cards the study queue would offer as reviews

    def to_dict(self):
        return asdict(self)


def summarize(cards, now=None, config=DEFAULT_CONFIG) -> SetStats:
    now = now_ms() if now is None else now
    counts = {status: 0 for status in CardStatus}
    due = 0
    total = 0
    for card in cards:
        total += 1
        counts[card.status] += 1
        if classify_card(card, now, config) in (OVERDUE, DUE):
            due += 1
    return SetStats(
        total=total,
        new=counts[CardStatus.NEW],
        learning=counts[CardStatus.LEARNING],
        young=counts[CardStatus.YOUNG],
        mature=counts[CardStatus.MATURE],
        due=due,
    )
