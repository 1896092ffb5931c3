import structlog
from django.db import transaction

from ..config import load_config
from ..data.repos import (
    create_card,
    get_card,
    get_card_for_update,
    list_cards_for_set,
    reset_card_progress,
)
from ..domain.formatting import preview_intervals
from ..domain.logic import build_study_queue
from ..domain.stats import summarize
from ..utils.time import now_ms
from .errors import CardNotFound

logger = structlog.get_logger()


def study_queue_for_set(set_id, new_limit=None, review_limit=None, now=None):
    """
    Load every card of a set and pick the session queue.
    Limits default to the configured daily limits.
    """
    config = load_config()
    now = now_ms() if now is None else now
    new_limit = config.new_limit if new_limit is None else new_limit
    review_limit = config.review_limit if review_limit is None else review_limit

    cards = list_cards_for_set(set_id)
    queue = build_study_queue(cards, new_limit, review_limit, now=now, config=config)

    logger.info(
        "study_queue_built",
        set_id=str(set_id),
        card_count=len(cards),
        queue_length=len(queue),
        new_limit=new_limit,
        review_limit=review_limit,
    )
    return queue


def set_stats(set_id, now=None):
    stats = summarize(list_cards_for_set(set_id), now=now)
    logger.info("set_stats", set_id=str(set_id), **stats.to_dict())
    return stats


def interval_preview(card_id, language=None, now=None):
    config = load_config()
    row = get_card(card_id)
    if row is None:
        raise CardNotFound(card_id)
    return preview_intervals(
        row.to_domain(), now=now, language=language or config.language, config=config
    )


def reset_progress(card_id, now=None):
    now = now_ms() if now is None else now
    with transaction.atomic():
        row = get_card_for_update(card_id)
        if row is None:
            raise CardNotFound(card_id)
        previous_step = row.learning_step
        row = reset_card_progress(row, now)

    logger.info("card_progress_reset", card_id=str(card_id), previous_learning_step=previous_step)
    return row.to_domain()


def add_card(set_id, front, back, now=None):
    row = create_card(set_id, front, back, now=now)
    logger.info("card_created", card_id=str(row.id), set_id=str(set_id))
    return row.to_domain()
