# Django discovers models through <app>.models
from .data.models import FlashCard, ReviewLog  # noqa: F401
