from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence

from confsched.core.exceptions import SchedulerError
from confsched.schemas.catalogue import Minisymposium, RoomSpec


class SessionCatalogue:
    """Ordered, read-only collection of minisymposia.

    A session's id is its position in the catalogue. Ordering constraints come
    from explicit ``(before, after)`` pairs and from multi-part series, where
    part n of a series has to be held before part n + 1.
    """

    def __init__(
        self,
        sessions: Sequence[Minisymposium],
        precedence: Iterable[tuple[int, int]] = (),
    ) -> None:
        self._sessions: tuple[Minisymposium, ...] = tuple(sessions)
        self._themes: tuple[str, ...] = tuple(sorted({item.theme for item in self._sessions}))
        theme_positions = {theme: index for index, theme in enumerate(self._themes)}
        self._theme_indices: tuple[int, ...] = tuple(theme_positions[item.theme] for item in self._sessions)
        self._must_precede: frozenset[tuple[int, int]] = frozenset(
            self._explicit_precedence(precedence) | self._series_precedence()
        )

    def _explicit_precedence(self, pairs: Iterable[tuple[int, int]]) -> set[tuple[int, int]]:
        resolved: set[tuple[int, int]] = set()
        for before, after in pairs:
            if before == after:
                raise SchedulerError(
                    message="A session cannot be required to precede itself",
                    details={"session": before},
                )
            for session_id in (before, after):
                if not 0 <= session_id < len(self._sessions):
                    raise SchedulerError(
                        message="Precedence refers to an unknown session",
                        details={"session": session_id, "session_count": len(self._sessions)},
                    )
            resolved.add((before, after))
        return resolved

    def _series_precedence(self) -> set[tuple[int, int]]:
        parts_by_series: dict[str, list[tuple[int, int]]] = defaultdict(list)
        for session_id, item in enumerate(self._sessions):
            if item.series is not None and item.part is not None:
                parts_by_series[item.series].append((item.part, session_id))

        resolved: set[tuple[int, int]] = set()
        for parts in parts_by_series.values():
            parts.sort()
            for index, (part_a, id_a) in enumerate(parts):
                for part_b, id_b in parts[index + 1 :]:
                    if part_a < part_b:
                        resolved.add((id_a, id_b))
        return resolved

    def __len__(self) -> int:
        return len(self._sessions)

    def __getitem__(self, session_id: int) -> Minisymposium:
        return self._sessions[session_id]

    def __iter__(self):
        return iter(self._sessions)

    @property
    def themes(self) -> tuple[str, ...]:
        return self._themes

    def theme_index(self, session_id: int) -> int:
        return self._theme_indices[session_id]

    def get_theme(self, session_id: int) -> str:
        return self._sessions[session_id].theme

    def must_precede(self, first: int, second: int) -> bool:
        return (first, second) in self._must_precede

    def breaks_ordering(self, earlier: int, later: int) -> bool:
        """True when ``earlier`` sits before ``later`` although ``later`` must come first."""
        return (later, earlier) in self._must_precede

    def higher_priority(self, first: int, second: int) -> bool:
        return self._sessions[first].priority > self._sessions[second].priority


class RoomCatalogue:
    def __init__(self, rooms: Sequence[RoomSpec]) -> None:
        self._rooms: tuple[RoomSpec, ...] = tuple(rooms)

    def __len__(self) -> int:
        return len(self._rooms)

    def __getitem__(self, room_index: int) -> RoomSpec:
        return self._rooms[room_index]

    def __iter__(self):
        return iter(self._rooms)

    def name(self, room_index: int) -> str:
        return self._rooms[room_index].name

    def priority(self, room_index: int) -> int:
        return self._rooms[room_index].priority
