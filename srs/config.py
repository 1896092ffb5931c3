from dataclasses import dataclass
from typing import Tuple

DAY_MS = 24 * 3600 * 1000
OVERDUE_AFTER_MS = DAY_MS  # due becomes overdue once a full day has passed

INTERVAL_LADDER_DAYS = (0, 1, 3, 7, 14, 30, 60)
LEARNING_THRESHOLD = 2     # step 1..2 -> learning
YOUNG_THRESHOLD = 4        # step 3..4 -> young, above -> mature

DEFAULT_NEW_LIMIT = 20
DEFAULT_REVIEW_LIMIT = 100

DEFAULT_LANGUAGE = "ru"
SUPPORTED_LANGUAGES = ("ru", "en")


@dataclass(frozen=True)
class SchedulerConfig:
    interval_ladder_days: Tuple[int, ...] = INTERVAL_LADDER_DAYS
    day_ms: int = DAY_MS
    overdue_after_ms: int = OVERDUE_AFTER_MS
    learning_threshold: int = LEARNING_THRESHOLD
    young_threshold: int = YOUNG_THRESHOLD
    new_limit: int = DEFAULT_NEW_LIMIT
    review_limit: int = DEFAULT_REVIEW_LIMIT
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self):
        ladder = tuple(self.interval_ladder_days)
        if not ladder:
            raise ValueError("interval ladder must not be empty")
        if any(isinstance(d, bool) or not isinstance(d, int) for d in ladder):
            raise ValueError(f"interval ladder entries must be integers, got {ladder!r}")
        if any(d < 0 for d in ladder) or list(ladder) != sorted(ladder):
            raise ValueError("interval ladder must be non-negative and non-decreasing")
        object.__setattr__(self, "interval_ladder_days", ladder)

        if not 0 < self.learning_threshold < self.young_threshold:
            raise ValueError("thresholds must satisfy 0 < learning_threshold < young_threshold")
        if self.new_limit < 0 or self.review_limit < 0:
            raise ValueError("daily limits must be >= 0")
        if self.language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"language must be one of {SUPPORTED_LANGUAGES}")


DEFAULT_CONFIG = SchedulerConfig()


def load_config():
    """
    Build a SchedulerConfig from ``settings.SRS``.
    Missing keys fall back to the module defaults.
    """
    from django.conf import settings
    from django.core.exceptions import ImproperlyConfigured

    overrides = getattr(settings, "SRS", {}) or {}
    try:
        return SchedulerConfig(
            interval_ladder_days=tuple(overrides.get("INTERVAL_LADDER_DAYS", INTERVAL_LADDER_DAYS)),
            day_ms=DAY_MS,
            overdue_after_ms=overrides.get("OVERDUE_AFTER_MS", OVERDUE_AFTER_MS),
            learning_threshold=overrides.get("LEARNING_THRESHOLD", LEARNING_THRESHOLD),
            young_threshold=overrides.get("YOUNG_THRESHOLD", YOUNG_THRESHOLD),
            new_limit=overrides.get("DAILY_NEW_CARDS", DEFAULT_NEW_LIMIT),
            review_limit=overrides.get("DAILY_REVIEWS", DEFAULT_REVIEW_LIMIT),
            language=overrides.get("LANGUAGE", DEFAULT_LANGUAGE),
        )
    except (TypeError, ValueError) as e:
        raise ImproperlyConfigured(f"invalid SRS settings: {e}") from e
