from dataclasses import replace
from typing import List, Optional

from .enums import CardStatus, Rating, STEP_DELTA
from .types import Card, ReviewResult
from ..config import DEFAULT_CONFIG, SchedulerConfig
from ..utils.time import UNSCHEDULED, now_ms

NEW = "new"
OVERDUE = "overdue"
DUE = "due"


def to_rating(value) -> Rating:
    # bool is an int subclass; True must not pass as Rating.FORGOT
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"rating must be an integer in 1..4, got {value!r}")
    try:
        return Rating(value)
    except ValueError:
        raise ValueError(f"rating must be an integer in 1..4, got {value!r}") from None


def status_for_step(step: int, config: SchedulerConfig = DEFAULT_CONFIG) -> CardStatus:
    if step <= 0:
        return CardStatus.NEW
    if step <= config.learning_threshold:
        return CardStatus.LEARNING
    if step <= config.young_threshold:
        return CardStatus.YOUNG
    return CardStatus.MATURE


def interval_days(step: int, config: SchedulerConfig = DEFAULT_CONFIG) -> int:
    ladder = config.interval_ladder_days
    index = min(max(step, 0), len(ladder) - 1)
    return ladder[index]


def calculate_next_review(
    card: Card,
    rating,
    now: Optional[int] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> ReviewResult:
    rating = to_rating(rating)
    now = now_ms() if now is None else now

    delta = STEP_DELTA[rating]
    if delta is None:
        new_step = 0
    else:
        new_step = card.learning_step + delta

    if rating in (Rating.FORGOT, Rating.UNSURE):
        next_review = UNSCHEDULED
    else:
        next_review = now + interval_days(new_step, config) * config.day_ms

    return ReviewResult(
        card_id=card.id,
        rating=rating,
        next_review_date=next_review,
        new_status=status_for_step(new_step, config),
        new_learning_step=new_step,
    )


def apply_review(card: Card, result: ReviewResult, reviewed_at: Optional[int] = None) -> Card:
    if result.card_id != card.id:
        raise ValueError(f"review result for {result.card_id} applied to card {card.id}")
    return replace(
        card,
        learning_step=result.new_learning_step,
        status=result.new_status,
        next_review_date=result.next_review_date,
        last_review_date=now_ms() if reviewed_at is None else reviewed_at,
    )


def classify_card(card: Card, now: int, config: SchedulerConfig = DEFAULT_CONFIG) -> Optional[str]:
    if card.status == CardStatus.NEW or card.learning_step == 0:
        return NEW
    if card.next_review_date <= now:
        if card.next_review_date < now - config.overdue_after_ms:
            return OVERDUE
        return DUE
    return None


def _check_limit(name, value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


def build_study_queue(
    cards,
    new_limit: int,
    review_limit: int,
    now: Optional[int] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> List[Card]:
    _check_limit("new_limit", new_limit)
    _check_limit("review_limit", review_limit)
    if cards is None:
        raise TypeError("cards must be an iterable of Card, got None")
    now = now_ms() if now is None else now

    buckets = {NEW: [], OVERDUE: [], DUE: []}
    for card in cards:
        if not isinstance(card, Card):
            raise TypeError(f"expected Card, got {type(card).__name__}")
        bucket = classify_card(card, now, config)
        if bucket is not None:
            buckets[bucket].append(card)

    # Oldest overdue first; sorted() is stable so ties keep input order
    overdue = sorted(buckets[OVERDUE], key=lambda c: c.next_review_date)

    queue = overdue[:review_limit]
    remaining = review_limit - len(queue)
    if remaining > 0:
        queue.extend(buckets[DUE][:remaining])
    queue.extend(buckets[NEW][:new_limit])
    return queue
