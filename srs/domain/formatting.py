"""Human-readable review intervals ("3 дня", "2 weeks")."""

import math
from typing import Dict, Optional

from .enums import Rating
from .logic import calculate_next_review
from .types import Card
from ..config import DEFAULT_CONFIG, SUPPORTED_LANGUAGES, SchedulerConfig
from ..utils.time import UNSCHEDULED, now_ms

TODAY = {"ru": "сегодня", "en": "today"}

UNITS = {
    "ru": {
        "day": ("день", "дня", "дней"),
        "week": ("неделя", "недели", "недель"),
        "month": ("месяц", "месяца", "месяцев"),
        "year": ("год", "года", "лет"),
    },
    "en": {
        "day": ("day", "days"),
        "week": ("week", "weeks"),
        "month": ("month", "months"),
        "year": ("year", "years"),
    },
}


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def pluralize_ru(n, one, few, many):
    mod10 = n % 10
    mod100 = n % 100
    if 11 <= mod100 <= 19:
        return many
    if mod10 == 1:
        return one
    if 2 <= mod10 <= 4:
        return few
    return many


def pluralize_en(n, one, other):
    return one if n == 1 else other


def _unit(n, unit, language):
    forms = UNITS[language][unit]
    if language == "ru":
        return f"{n} {pluralize_ru(n, *forms)}"
    return f"{n} {pluralize_en(n, *forms)}"


def format_interval(days, language="ru"):
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"unsupported language {language!r}, expected one of {SUPPORTED_LANGUAGES}")

    if days < 1:
        return TODAY[language]
    if days < 7:
        return _unit(_round_half_up(days), "day", language)
    if days < 30:
        return _unit(_round_half_up(days / 7), "week", language)
    if days < 365:
        return _unit(_round_half_up(days / 30), "month", language)
    return _unit(_round_half_up(days / 365), "year", language)


def preview_intervals(
    card: Card,
    now: Optional[int] = None,
    language: str = "ru",
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Dict[Rating, str]:
    """
    Label the wait each rating would produce for ``card``, e.g. for hints
    under the answer buttons. Ratings that clear the schedule read as today.
    """
    now = now_ms() if now is None else now
    labels = {}
    for rating in Rating:
        result = calculate_next_review(card, rating, now=now, config=config)
        if result.next_review_date == UNSCHEDULED:
            days = 0
        else:
            days = (result.next_review_date - now) / config.day_ms
        labels[rating] = format_interval(days, language)
    return labels
