import pytest
import logging

from srs.config import DAY_MS, SchedulerConfig
from srs.domain.enums import CardStatus, Rating
from srs.domain.logic import (
    apply_review,
    build_study_queue,
    calculate_next_review,
    classify_card,
    interval_days,
    status_for_step,
)
from srs.domain.types import Card

logger = logging.getLogger(__name__)

NOW = 1_700_000_000_000
MINUTE_MS = 60 * 1000

# Helpers

def make_card(card_id="c1", step=0, next_review=NOW, status=None):
    return Card(
        id=card_id,
        set_id="set-1",
        front="front",
        back="back",
        learning_step=step,
        status=status if status is not None else status_for_step(step),
        next_review_date=next_review,
    )


# Scheduler

@pytest.mark.parametrize(
    "step, expected",
    [
        (0, CardStatus.NEW),
        (1, CardStatus.LEARNING),
        (2, CardStatus.LEARNING),
        (3, CardStatus.YOUNG),
        (4, CardStatus.YOUNG),
        (5, CardStatus.MATURE),
        (42, CardStatus.MATURE),
    ],
)
def test_status_for_step(step, expected):
    assert status_for_step(step) == expected


def test_interval_ladder_clamps_both_ends():
    assert [interval_days(s) for s in range(7)] == [0, 1, 3, 7, 14, 30, 60]
    assert interval_days(6) == interval_days(7) == interval_days(100) == 60
    assert interval_days(-3) == 0


@pytest.mark.parametrize("step", [0, 1, 4, 9])
def test_forgot_resets_step_and_clears_schedule(step):
    card = make_card(step=step, next_review=NOW + 5 * DAY_MS)
    result = calculate_next_review(card, Rating.FORGOT, now=NOW)

    assert result.new_learning_step == 0
    assert result.next_review_date == 0
    assert result.new_status == CardStatus.NEW
    assert result.card_id == card.id
    assert result.rating == Rating.FORGOT


@pytest.mark.parametrize("step", [0, 2, 3, 8])
def test_unsure_keeps_step_and_clears_schedule(step):
    card = make_card(step=step)
    result = calculate_next_review(card, 2, now=NOW)

    assert result.new_learning_step == step
    assert result.next_review_date == 0
    assert result.new_status == status_for_step(step)


@pytest.mark.parametrize(
    "rating, delta",
    [(Rating.ALMOST, 1), (Rating.CONFIDENT, 2)],
)
@pytest.mark.parametrize("step", [0, 1, 3, 5, 6, 20])
def test_positive_ratings_advance_along_ladder(rating, delta, step):
    card = make_card(step=step)
    result = calculate_next_review(card, rating, now=NOW)

    new_step = step + delta
    assert result.new_learning_step == new_step
    assert result.next_review_date == NOW + interval_days(new_step) * DAY_MS
    assert result.new_status == status_for_step(new_step)


def test_step_two_rated_almost_becomes_young_in_seven_days():
    result = calculate_next_review(make_card(step=2), Rating.ALMOST, now=NOW)

    assert result.new_learning_step == 3
    assert result.next_review_date == NOW + 7 * 86400000
    assert result.new_status == CardStatus.YOUNG
    logger.info("✓ Passed: step 2 + Almost -> step 3, 7 days, young")


def test_new_card_rated_confident_skips_to_step_two():
    result = calculate_next_review(make_card(step=0), Rating.CONFIDENT, now=NOW)

    assert result.new_learning_step == 2
    assert result.next_review_date == NOW + 3 * DAY_MS
    assert result.new_status == CardStatus.LEARNING


def test_interval_capped_at_sixty_days():
    card = make_card(step=6)
    for _ in range(10):
        result = calculate_next_review(card, Rating.CONFIDENT, now=NOW)
        assert result.next_review_date == NOW + 60 * DAY_MS
        card = apply_review(card, result, reviewed_at=NOW)
    # the step counter itself keeps growing
    assert card.learning_step == 26
    assert card.status == CardStatus.MATURE


@pytest.mark.parametrize("bad", [0, 5, -1, True, 3.0, "3", None])
def test_invalid_rating_rejected(bad):
    with pytest.raises(ValueError):
        calculate_next_review(make_card(), bad, now=NOW)


def test_negative_learning_step_rejected():
    with pytest.raises(ValueError):
        make_card(step=-1, status=CardStatus.NEW)


def test_custom_ladder_from_config():
    config = SchedulerConfig(interval_ladder_days=(0, 2, 5))
    result = calculate_next_review(make_card(step=1), Rating.CONFIDENT, now=NOW, config=config)
    assert result.next_review_date == NOW + 5 * DAY_MS


def test_apply_review_updates_card_without_mutating():
    card = make_card(step=1)
    result = calculate_next_review(card, Rating.ALMOST, now=NOW)
    updated = apply_review(card, result, reviewed_at=NOW)

    assert card.learning_step == 1
    assert updated.learning_step == 2
    assert updated.next_review_date == result.next_review_date
    assert updated.last_review_date == NOW
    assert updated.status == CardStatus.LEARNING


def test_apply_review_rejects_foreign_result():
    result = calculate_next_review(make_card("a"), Rating.ALMOST, now=NOW)
    with pytest.raises(ValueError):
        apply_review(make_card("b"), result)


def test_card_status_accepts_stored_string():
    card = Card(id="x", set_id="s", learning_step=3, status="young")
    assert card.status is CardStatus.YOUNG


# Queue builder

def test_classification_boundaries():
    assert classify_card(make_card(step=2, next_review=NOW - 2 * DAY_MS), NOW) == "overdue"
    assert classify_card(make_card(step=2, next_review=NOW - 30 * MINUTE_MS), NOW) == "due"
    assert classify_card(make_card(step=2, next_review=NOW - DAY_MS), NOW) == "due"
    assert classify_card(make_card(step=2, next_review=NOW), NOW) == "due"
    assert classify_card(make_card(step=2, next_review=NOW + 1), NOW) is None
    # the sentinel is always ready
    assert classify_card(make_card(step=2, next_review=0), NOW) == "overdue"


def test_new_bucket_uses_status_or_step():
    stale_status = make_card(step=0, status=CardStatus.LEARNING, next_review=NOW + DAY_MS)
    assert classify_card(stale_status, NOW) == "new"
    assert classify_card(make_card(step=0, next_review=NOW + 9 * DAY_MS), NOW) == "new"


def test_queue_example_scenario():
    overdue = [
        make_card("o1", step=3, next_review=NOW - 3 * DAY_MS),
        make_card("o2", step=3, next_review=NOW - 10 * DAY_MS),
        make_card("o3", step=1, next_review=NOW - 2 * DAY_MS),
    ]
    due = [
        make_card("d1", step=2, next_review=NOW - 30 * MINUTE_MS),
        make_card("d2", step=5, next_review=NOW - 60 * MINUTE_MS),
    ]
    new = [make_card(f"n{i}") for i in range(10)]
    future = [make_card("f1", step=4, next_review=NOW + DAY_MS)]

    cards = [new[0], due[0], overdue[0], future[0], *new[1:5], overdue[1], due[1], *new[5:], overdue[2]]
    queue = build_study_queue(cards, new_limit=5, review_limit=4, now=NOW)
    ids = [c.id for c in queue]

    assert ids == ["o2", "o1", "o3", "d1", "n0", "n1", "n2", "n3", "n4"]
    logger.info("✓ Passed: overdue oldest-first, then due, then new %s", ids)


def test_overdue_fills_review_budget_before_due():
    cards = [
        make_card("d1", step=2, next_review=NOW - MINUTE_MS),
        make_card("o1", step=2, next_review=NOW - 5 * DAY_MS),
        make_card("o2", step=2, next_review=0),
    ]
    queue = build_study_queue(cards, new_limit=10, review_limit=2, now=NOW)
    assert [c.id for c in queue] == ["o2", "o1"]


def test_limits_are_independent():
    cards = [make_card(f"n{i}") for i in range(3)] + [
        make_card(f"d{i}", step=1, next_review=NOW) for i in range(3)
    ]
    queue = build_study_queue(cards, new_limit=0, review_limit=10, now=NOW)
    assert [c.id for c in queue] == ["d0", "d1", "d2"]

    queue = build_study_queue(cards, new_limit=2, review_limit=0, now=NOW)
    assert [c.id for c in queue] == ["n0", "n1"]


def test_overdue_ties_keep_input_order():
    cards = [make_card(f"o{i}", step=3, next_review=NOW - 4 * DAY_MS) for i in range(4)]
    queue = build_study_queue(cards, new_limit=0, review_limit=10, now=NOW)
    assert [c.id for c in queue] == ["o0", "o1", "o2", "o3"]


def test_empty_input_yields_empty_queue():
    assert build_study_queue([], new_limit=5, review_limit=5, now=NOW) == []


@pytest.mark.parametrize("new_limit, review_limit", [(-1, 5), (5, -1), (1.5, 5), (5, None)])
def test_bad_limits_rejected(new_limit, review_limit):
    with pytest.raises(ValueError):
        build_study_queue([make_card()], new_limit, review_limit, now=NOW)


def test_malformed_card_list_rejected():
    with pytest.raises(TypeError):
        build_study_queue([make_card(), {"id": "x"}], 5, 5, now=NOW)
    with pytest.raises(TypeError):
        build_study_queue(None, 5, 5, now=NOW)


def test_status_derived_when_omitted():
    card = Card(id="x", set_id="s", learning_step=5, next_review_date=NOW - 2 * DAY_MS)

    assert card.status == CardStatus.MATURE
    assert classify_card(card, NOW) == "overdue"

    queue = build_study_queue([card, make_card("n1")], new_limit=0, review_limit=1, now=NOW)
    assert [c.id for c in queue] == ["x"]


@pytest.mark.parametrize(
    "ladder",
    [(), (0, 5, 3), (-1, 2), (0, "3", 7), (0, 1.5), (True, 2)],
)
def test_config_rejects_bad_ladder(ladder):
    with pytest.raises(ValueError):
        SchedulerConfig(interval_ladder_days=ladder)


@pytest.mark.parametrize(
    "overrides",
    [
        {"learning_threshold": 4, "young_threshold": 2},
        {"learning_threshold": 0},
        {"new_limit": -1},
        {"language": "fr"},
    ],
)
def test_config_rejects_bad_values(overrides):
    with pytest.raises(ValueError):
        SchedulerConfig(**overrides)


def test_config_normalizes_ladder_to_tuple():
    assert SchedulerConfig(interval_ladder_days=[0, 2, 4]).interval_ladder_days == (0, 2, 4)
