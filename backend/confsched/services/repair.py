from __future__ import annotations

import numpy as np

from confsched.services.catalogue import SessionCatalogue


class ScheduleRepairer:
    """Local legalization of one schedule grid, applied in place.

    Both passes only swap cell values, so a valid permutation stays valid.
    """

    def __init__(self, sessions: SessionCatalogue) -> None:
        self.sessions = sessions

    def repair(self, schedule: np.ndarray) -> None:
        self.fix_ordering(schedule)
        self.sort_by_priority(schedule)

    def fix_ordering(self, schedule: np.ndarray) -> None:
        # One sweep over all slot-ordered cell pairs; chains of constraints
        # may need further generations to settle.
        nmini = len(self.sessions)
        nslots, nrooms = schedule.shape
        for sl1 in range(nslots):
            for r1 in range(nrooms):
                for sl2 in range(sl1 + 1, nslots):
                    for r2 in range(nrooms):
                        first = schedule[sl1, r1]
                        second = schedule[sl2, r2]
                        if first >= nmini or second >= nmini:
                            continue
                        if self.sessions.breaks_ordering(int(first), int(second)):
                            schedule[sl1, r1] = second
                            schedule[sl2, r2] = first

    def sort_by_priority(self, schedule: np.ndarray) -> None:
        nmini = len(self.sessions)
        nslots, nrooms = schedule.shape
        for sl in range(nslots):
            row = schedule[sl]
            for i in range(1, nrooms):
                for j in range(nrooms - i):
                    m1 = row[j]
                    m2 = row[j + 1]
                    if m2 >= nmini:
                        continue
                    if m1 >= nmini or self.sessions.higher_priority(int(m2), int(m1)):
                        row[j] = m2
                        row[j + 1] = m1
