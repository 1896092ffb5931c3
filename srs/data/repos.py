from django.db import IntegrityError, transaction

from ..domain.logic import apply_review
from ..domain.types import Card
from .models import FlashCard, ReviewLog

def create_card(set_id, front, back, now=None):
    card = Card.new(id=None, set_id=set_id, front=front, back=back, now=now)
    return FlashCard.objects.create(
        set_id=set_id,
        front=front,
        back=back,
        learning_step=card.learning_step,
        status=card.status.value,
        next_review_date=card.next_review_date,
        last_review_date=card.last_review_date,
    )

def list_cards_for_set(set_id):
    return [row.to_domain() for row in FlashCard.objects.filter(set_id=set_id)]

def get_card(card_id):
    return FlashCard.objects.filter(pk=card_id).first()

def get_card_for_update(card_id):
    """
    Fetch the card row and lock it until the surrounding transaction ends.
    Must be called inside transaction.atomic().
    """
    return FlashCard.objects.select_for_update().filter(pk=card_id).first()

def get_existing_idempotent(card_id, idem_key):
    return ReviewLog.objects.filter(card_id=card_id, idempotency_key=idem_key).first()

def save_review_result(row, result, reviewed_at):
    updated = apply_review(row.to_domain(), result, reviewed_at)
    row.learning_step = updated.learning_step
    row.status = updated.status.value
    row.next_review_date = updated.next_review_date
    row.last_review_date = updated.last_review_date
    row.save(update_fields=[
        "learning_step", "status", "next_review_date", "last_review_date", "updated_at",
    ])
    return row

def persist_review(row, previous_step, result, idem_key, reviewed_at):
    """
    Insert ReviewLog; if a concurrent duplicate slips in, return the existing one.
    """
    try:
        with transaction.atomic():
            return ReviewLog.objects.create(
                card_id=row.id, set_id=row.set_id, rating=int(result.rating),
                idempotency_key=idem_key, reviewed_at=reviewed_at,
                previous_learning_step=previous_step,
                new_learning_step=result.new_learning_step,
                new_status=result.new_status.value,
                next_review_date=result.next_review_date,
            ), False
    except IntegrityError:
        # Duplicate idempotency key safeguard
        existing = get_existing_idempotent(row.id, idem_key)
        return existing, True

def reset_card_progress(row, now):
    fresh = Card.new(id=str(row.id), set_id=str(row.set_id), now=now)
    row.learning_step = fresh.learning_step
    row.status = fresh.status.value
    row.next_review_date = fresh.next_review_date
    row.last_review_date = fresh.last_review_date
    row.save(update_fields=[
        "learning_step", "status", "next_review_date", "last_review_date", "updated_at",
    ])
    return row
