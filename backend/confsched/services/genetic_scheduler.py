from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
import logging
from pathlib import Path
import random
from time import perf_counter
from typing import TypeVar

import numpy as np

from confsched.core.config import Settings, get_settings
from confsched.core.exceptions import SchedulerError
from confsched.schemas.generator import ObjectiveWeights
from confsched.services.breeding import breed
from confsched.services.catalogue import RoomCatalogue, SessionCatalogue
from confsched.services.mutation import mutate_schedule
from confsched.services.population import PopulationStore
from confsched.services.random_pool import RandomPool
from confsched.services.rating import MinisymposiumRater, RatingResult, ScheduleRater
from confsched.services.repair import ScheduleRepairer
from confsched.services.report import write_report
from confsched.services.selection import WeightedSelector, rank_by_rating

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RunStatus(str, Enum):
    CONVERGED = "converged"
    MAX_GENERATIONS_REACHED = "max_generations_reached"


class GeneticScheduler:
    """Genetic search assigning minisymposia to a timeslot x room grid.

    Every phase of a generation (rate, breed, mutate, repair) maps one task
    per schedule onto a thread pool and waits for all of them before the
    next phase starts. Runs are reproducible for a fixed seed when a single
    worker is used; with several workers the order in which tasks draw from
    the random pool depends on thread scheduling.
    """

    def __init__(
        self,
        sessions: SessionCatalogue,
        rooms: RoomCatalogue,
        ntimeslots: int,
        *,
        rater: ScheduleRater | None = None,
        settings: Settings | None = None,
        seed: int | None = None,
        worker_count: int | None = None,
        objective_weights: ObjectiveWeights | None = None,
    ) -> None:
        if len(rooms) < 1:
            raise SchedulerError(message="At least one room is required for scheduling")
        if ntimeslots < 1:
            raise SchedulerError(message="At least one timeslot is required for scheduling")
        ncells = ntimeslots * len(rooms)
        if len(sessions) > ncells:
            raise SchedulerError(
                message="There are more minisymposia than timeslot/room cells",
                details={"sessions": len(sessions), "cells": ncells},
            )

        self.sessions = sessions
        self.rooms = rooms
        self.ntimeslots = ntimeslots
        self.settings = settings or get_settings()
        self.seed = seed if seed is not None else self.settings.random_seed
        self.worker_count = worker_count if worker_count is not None else self.settings.worker_count
        if self.worker_count < 1:
            raise SchedulerError(
                message="worker_count must be at least 1",
                details={"worker_count": self.worker_count},
            )
        self.rater = rater or MinisymposiumRater(sessions, rooms, objective_weights)
        self.repairer = ScheduleRepairer(sessions)
        self.selector = WeightedSelector(normalize=self.settings.normalize_weights)

        self.pool: RandomPool | None = None
        self.population: PopulationStore | None = None
        self.results: list[RatingResult] = []
        self.status: RunStatus | None = None
        self.generations_run = 0
        self.runtime_ms = 0
        self._executor: ThreadPoolExecutor | None = None

    def run(self, population_size: int, elite_size: int, mutation_rate: float, generations: int) -> RunStatus:
        if population_size < 2:
            raise SchedulerError(message="population_size must be at least 2")
        if not 0 <= elite_size < population_size:
            raise SchedulerError(
                message="elite_size must be non-negative and less than population_size",
                details={"elite_size": elite_size, "population_size": population_size},
            )
        if not 0.0 <= mutation_rate <= 1.0:
            raise SchedulerError(message="mutation_rate must lie in [0, 1]", details={"mutation_rate": mutation_rate})
        if generations < 0:
            raise SchedulerError(message="generations cannot be negative")

        start = perf_counter()
        logger.info(
            "Scheduling %d minisymposia into %d timeslots x %d rooms (population=%d, elite=%d, mutation=%.4f, generations=%d)",
            len(self.sessions),
            self.ntimeslots,
            len(self.rooms),
            population_size,
            elite_size,
            mutation_rate,
            generations,
        )
        self.status = None
        self.generations_run = 0
        with ThreadPoolExecutor(max_workers=self.worker_count, thread_name_prefix="confsched") as executor:
            self._executor = executor
            try:
                self.initialize_schedules(population_size)
                self.fix_schedules()
                for generation in range(generations):
                    logger.info("generation %d:", generation)
                    best_rating = self.rate_schedules()
                    if best_rating == 1.0:
                        self.status = RunStatus.CONVERGED
                        break
                    self.print_best_schedule()
                    self.compute_weights()
                    self.breed_population(elite_size)
                    self.mutate_population(mutation_rate)
                    if self.settings.validate_generations:
                        self.validate_population(self.population.next)
                    self.population.swap()
                    self.fix_schedules()
                    self.generations_run += 1
                else:
                    # Ratings have to describe the repaired final buffer.
                    if self.rate_schedules() == 1.0:
                        self.status = RunStatus.CONVERGED
                    else:
                        self.status = RunStatus.MAX_GENERATIONS_REACHED
            finally:
                self._executor = None

        self.runtime_ms = int((perf_counter() - start) * 1000)
        logger.info(
            "Scheduling finished: %s after %d generations, best score %s (%d ms)",
            self.status.value,
            self.generations_run,
            self.best_rating,
            self.runtime_ms,
        )
        return self.status

    def _parallel(self, func: Callable[[int], T], indices: Iterable[int]) -> list[T]:
        # Collecting every result is the barrier between phases.
        if self._executor is None:
            with ThreadPoolExecutor(max_workers=self.worker_count, thread_name_prefix="confsched") as executor:
                return list(executor.map(func, indices))
        return list(self._executor.map(func, indices))

    def _require_population(self) -> PopulationStore:
        if self.population is None:
            raise SchedulerError(message="The scheduler has no population yet; call run() first")
        return self.population

    def initialize_schedules(self, nschedules: int) -> None:
        seeder = random.Random(self.seed)
        shuffler = random.Random(seeder.getrandbits(64))
        self.pool = RandomPool(seeder.getrandbits(64), size=self.worker_count)
        self.population = PopulationStore(nschedules, self.ntimeslots, len(self.rooms), len(self.sessions.themes))
        self.results = []

        numbers = list(range(self.population.ncells))
        for sc in range(nschedules):
            shuffler.shuffle(numbers)
            self.population.current[sc] = np.asarray(numbers, dtype=np.int64).reshape(self.ntimeslots, len(self.rooms))

    def fix_schedules(self) -> None:
        population = self._require_population()

        def repair_one(sc: int) -> None:
            self.repairer.repair(population.current[sc])

        self._parallel(repair_one, range(population.nschedules))

    def rate_schedules(self) -> float:
        population = self._require_population()

        def rate_one(sc: int) -> RatingResult:
            result = self.rater.rate(population.current[sc], population.theme_penalties[sc])
            population.ratings[sc] = result.rating
            return result

        self.results = self._parallel(rate_one, range(population.nschedules))
        head = self.results[0]
        logger.info(
            "Order penalty: %d, Oversubscribed penalty: %d, Theme penalty: %d, Priority penalty: %d",
            head.order_penalty,
            head.oversubscribed_penalty,
            head.theme_penalty,
            head.priority_penalty,
        )
        population.ranks[:] = rank_by_rating(population.ratings)
        return float(population.ratings[population.ranks[0]])

    def compute_weights(self) -> float:
        population = self._require_population()
        return self.selector.compute_weights(population.ratings, population.weights)

    def get_parent(self) -> int:
        population = self._require_population()
        with self.pool.handle() as rng:
            return self.selector.get_parent(population.weights, rng)

    def breed_population(self, elite_size: int) -> None:
        population = self._require_population()
        for i in range(elite_size):
            population.copy_to_next(int(population.ranks[i]), i)

        def breed_one(child: int) -> None:
            with self.pool.handle() as rng:
                mom, dad = self.selector.get_parents(
                    population.weights, rng, max_attempts=self.settings.parent_draw_attempts
                )
                breed(population.current[mom], population.current[dad], population.next[child], rng)

        self._parallel(breed_one, range(elite_size, population.nschedules))

    def mutate_population(self, mutation_rate: float) -> None:
        population = self._require_population()

        def mutate_one(sc: int) -> int:
            with self.pool.handle() as rng:
                return mutate_schedule(population.next[sc], mutation_rate, rng)

        # Schedule 0 holds the best elite and is never mutated.
        self._parallel(mutate_one, range(1, population.nschedules))

    def validate_population(self, schedules: np.ndarray | None = None) -> list[int]:
        population = self._require_population()
        buffer = population.current if schedules is None else schedules
        nmini = len(self.sessions)
        invalid: list[int] = []
        for sc in range(buffer.shape[0]):
            values = buffer[sc].ravel()
            placed = values[values < nmini]
            if placed.size != nmini or np.unique(placed).size != nmini:
                missing = sorted(set(range(nmini)) - set(int(item) for item in placed))
                logger.error("Schedule %d does not contain minisymposia %s", sc, missing or "(duplicates)")
                invalid.append(sc)
        return invalid

    @property
    def best_index(self) -> int:
        population = self._require_population()
        return int(np.argmax(population.ratings))

    @property
    def best_rating(self) -> float:
        population = self._require_population()
        return float(population.ratings[self.best_index])

    @property
    def best_result(self) -> RatingResult | None:
        if not self.results:
            return None
        return self.results[self.best_index]

    def print_best_schedule(self) -> None:
        logger.info("The best schedule has score %s", self.best_rating)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", self.describe_schedule(self.best_index))

    def describe_schedule(self, sc: int) -> str:
        population = self._require_population()
        nmini = len(self.sessions)
        lines: list[str] = []
        for slot in range(population.nslots):
            lines.append(f"Slot {slot}:")
            for room in range(population.nrooms):
                session_id = int(population.current[sc, slot, room])
                if session_id < nmini:
                    lines.append(f"{self.sessions[session_id].full_title} ({self.sessions.get_theme(session_id)})")
        return "\n".join(lines)

    def get_best_schedule(self) -> np.ndarray:
        population = self._require_population()
        view = population.current[self.best_index].view()
        view.flags.writeable = False
        return view

    def write_report(self, path: str | Path | None = None) -> Path:
        target = path if path is not None else self.settings.report_path
        return write_report(target, self.get_best_schedule(), self.best_rating, self.sessions, self.rooms)
