from django.db import transaction
import structlog
from ..config import load_config
from ..data.repos import (
    get_card_for_update,
    get_existing_idempotent,
    persist_review,
    save_review_result,
)
from ..domain.logic import calculate_next_review
from ..utils.time import now_ms, to_utc_iso
from .errors import CardNotFound

logger = structlog.get_logger()

def record_review(card_id, rating: int, idempotency_key: str, now=None):
    logger.info("review_received",
        card_id=str(card_id),
        rating=rating,
        idempotency_key=idempotency_key,
    )

    # Fast path: return previous result if same idempotency_key
    existing = get_existing_idempotent(card_id, idempotency_key)
    if existing:
        logger.info("idempotent_reuse",
            card_id=str(card_id),
            next_review_date=existing.next_review_date,
            next_review_utc=to_utc_iso(existing.next_review_date),
        )
        return existing, True

    config = load_config()
    reviewed_at = now_ms() if now is None else now

    with transaction.atomic():
        # Serialize updates per card
        row = get_card_for_update(card_id)
        if row is None:
            logger.warning("review_unknown_card", card_id=str(card_id))
            raise CardNotFound(card_id)

        # A concurrent request with the same key may have committed while we waited
        existing = get_existing_idempotent(card_id, idempotency_key)
        if existing:
            logger.info("idempotent_reuse_after_lock", card_id=str(card_id))
            return existing, True

        previous_step = row.learning_step
        result = calculate_next_review(row.to_domain(), rating, now=reviewed_at, config=config)

        log, was_idempotent = persist_review(
            row, previous_step, result, idempotency_key, reviewed_at
        )
        if not was_idempotent:
            save_review_result(row, result, reviewed_at)

    logger.info("review_scheduled",
        card_id=str(card_id),
        previous_learning_step=previous_step,
        new_learning_step=log.new_learning_step,
        new_status=log.new_status,
        next_review_date=log.next_review_date,
        next_review_utc=to_utc_iso(log.next_review_date),
    )

    return log, was_idempotent
