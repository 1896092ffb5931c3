import uuid

from django.db import models
from django.utils import timezone

from ..domain.enums import CardStatus
from ..domain.types import Card
from ..utils.time import now_ms

STATUS_CHOICES = [(s.value, s.value) for s in CardStatus]

class FlashCard(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    set_id = models.UUIDField()
    front = models.TextField()
    back = models.TextField()
    learning_step = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=CardStatus.NEW.value)
    next_review_date = models.BigIntegerField(default=now_ms)  # epoch ms, 0 = unscheduled
    last_review_date = models.BigIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["set_id", "next_review_date"]),
        ]
        ordering = ["created_at"]

    def to_domain(self):
        return Card(
            id=str(self.id),
            set_id=str(self.set_id),
            front=self.front,
            back=self.back,
            learning_step=self.learning_step,
            status=self.status,
            next_review_date=self.next_review_date,
            last_review_date=self.last_review_date,
        )

class ReviewLog(models.Model):
    card_id = models.UUIDField()
    set_id = models.UUIDField()
    rating = models.SmallIntegerField()
    idempotency_key = models.CharField(max_length=64)
    reviewed_at = models.BigIntegerField()  # epoch ms
    previous_learning_step = models.PositiveIntegerField()
    new_learning_step = models.PositiveIntegerField()
    new_status = models.CharField(max_length=16, choices=STATUS_CHOICES)
    next_review_date = models.BigIntegerField()

    class Meta:
        unique_together = (("card_id", "idempotency_key"),)
        indexes = [
            models.Index(fields=["card_id", "reviewed_at"]),
        ]
