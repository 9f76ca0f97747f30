import numpy as np

from confsched.schemas.generator import ObjectiveWeights
from confsched.services.rating import MinisymposiumRater

# Sessions 0..5 from the conftest catalogue; 6..8 are empty cells.


def _penalty_row(sessions):
    return np.zeros(len(sessions.themes), dtype=np.int64)


def test_clean_schedule_rates_perfect(sessions, rooms):
    rater = MinisymposiumRater(sessions, rooms)
    grid = np.array(
        [
            [0, 2, 4],
            [1, 3, 6],
            [5, 7, 8],
        ]
    )
    result = rater.rate(grid, _penalty_row(sessions))
    assert result.rating == 1.0
    assert (
        result.order_penalty,
        result.oversubscribed_penalty,
        result.theme_penalty,
        result.priority_penalty,
    ) == (0, 0, 0, 0)


def test_penalties_are_counted(sessions, rooms):
    rater = MinisymposiumRater(sessions, rooms, ObjectiveWeights(order=1, oversubscribed=1, theme=1, priority=1))
    theme_penalties = _penalty_row(sessions)
    grid = np.array(
        [
            [1, 2, 3],  # part 2 ahead of part 1, Ada booked twice
            [0, 5, 6],  # two linear algebra sessions together
            [4, 7, 8],
        ]
    )
    result = rater.rate(grid, theme_penalties)
    assert result.order_penalty == 1
    assert result.oversubscribed_penalty == 1
    assert result.theme_penalty == 1
    assert theme_penalties[sessions.themes.index("Linear Algebra")] == 1
    assert result.priority_penalty == 0
    assert result.rating == 1.0 / (1.0 + 3)


def test_priority_penalty_and_concurrent_parts(sessions, rooms):
    rater = MinisymposiumRater(sessions, rooms)
    grid = np.array(
        [
            [4, 6, 0],  # priority 3 session in the priority 1 room
            [7, 8, 1],
            [2, 3, 5],
        ]
    )
    result = rater.rate(grid, _penalty_row(sessions))
    assert result.priority_penalty == 2
    assert result.order_penalty == 0

    concurrent = np.array(
        [
            [0, 1, 4],
            [2, 6, 7],
            [3, 5, 8],
        ]
    )
    result = rater.rate(concurrent, _penalty_row(sessions))
    assert result.order_penalty == 1
    assert result.rating < 1.0


def test_rating_is_deterministic_and_resets_theme_counters(sessions, rooms):
    rater = MinisymposiumRater(sessions, rooms)
    grid = np.array([[0, 5, 6], [1, 2, 7], [3, 4, 8]])
    theme_penalties = np.full(len(sessions.themes), 9, dtype=np.int64)
    first = rater.rate(grid, theme_penalties)
    second = rater.rate(grid, theme_penalties)
    assert first == second
    assert theme_penalties.max() <= 1
