from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from confsched.schemas.generator import ObjectiveWeights
from confsched.services.catalogue import RoomCatalogue, SessionCatalogue


@dataclass
class RatingResult:
    rating: float
    order_penalty: int = 0
    oversubscribed_penalty: int = 0
    theme_penalty: int = 0
    priority_penalty: int = 0


class ScheduleRater(Protocol):
    """Scores one ``(timeslot, room)`` grid.

    Implementations must be deterministic for a given grid and must not keep
    mutable state between calls: the scheduler invokes ``rate`` concurrently
    from worker threads. ``theme_penalties`` is the schedule's own counter
    row and may be overwritten.
    """

    def rate(self, schedule: np.ndarray, theme_penalties: np.ndarray) -> RatingResult: ...


class MinisymposiumRater:
    def __init__(
        self,
        sessions: SessionCatalogue,
        rooms: RoomCatalogue,
        weights: ObjectiveWeights | None = None,
    ) -> None:
        self.sessions = sessions
        self.rooms = rooms
        self.weights = weights or ObjectiveWeights()

    def rate(self, schedule: np.ndarray, theme_penalties: np.ndarray) -> RatingResult:
        nmini = len(self.sessions)
        placed = [
            [(room, int(cell)) for room, cell in enumerate(row) if cell < nmini]
            for row in schedule
        ]

        theme_penalties[:] = 0
        order_penalty = self._order_penalty(placed)
        oversubscribed_penalty = 0
        theme_penalty = 0
        priority_penalty = 0
        for row in placed:
            participants = Counter(
                name for _, session_id in row for name in self.sessions[session_id].participants
            )
            oversubscribed_penalty += sum(count - 1 for count in participants.values() if count > 1)

            themes = Counter(self.sessions.theme_index(session_id) for _, session_id in row)
            for theme_index, count in themes.items():
                if count > 1:
                    theme_penalties[theme_index] += count - 1
                    theme_penalty += count - 1

            for room, session_id in row:
                if self.sessions[session_id].priority > self.rooms.priority(room):
                    priority_penalty += 1

        weighted = (
            self.weights.order * order_penalty
            + self.weights.oversubscribed * oversubscribed_penalty
            + self.weights.theme * theme_penalty
            + self.weights.priority * priority_penalty
        )
        return RatingResult(
            rating=1.0 / (1.0 + weighted),
            order_penalty=order_penalty,
            oversubscribed_penalty=oversubscribed_penalty,
            theme_penalty=theme_penalty,
            priority_penalty=priority_penalty,
        )

    def _order_penalty(self, placed: list[list[tuple[int, int]]]) -> int:
        penalty = 0
        for slot, row in enumerate(placed):
            for index, (_, first) in enumerate(row):
                # Related sessions running concurrently cannot be in order either.
                for _, other in row[index + 1 :]:
                    if self.sessions.must_precede(first, other) or self.sessions.must_precede(other, first):
                        penalty += 1
                for later_row in placed[slot + 1 :]:
                    for _, later in later_row:
                        if self.sessions.breaks_ordering(first, later):
                            penalty += 1
        return penalty
