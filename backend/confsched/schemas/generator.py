from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from confsched.schemas.catalogue import Minisymposium, PrecedencePair, RoomSpec


class ObjectiveWeights(BaseModel):
    order: float = Field(default=10.0, ge=0.0, le=1000.0)
    oversubscribed: float = Field(default=5.0, ge=0.0, le=1000.0)
    theme: float = Field(default=1.0, ge=0.0, le=1000.0)
    priority: float = Field(default=0.5, ge=0.0, le=1000.0)


class GenerationSettings(BaseModel):
    population_size: int = Field(default=100, ge=2, le=5000)
    elite_count: int = Field(default=5, ge=0, le=500)
    mutation_rate: float = Field(default=0.01, ge=0.0, le=1.0)
    generations: int = Field(default=100, ge=0, le=100_000)
    random_seed: int | None = Field(default=None, ge=0, le=2**63 - 1)
    worker_count: int | None = Field(default=None, ge=1, le=256)
    objective_weights: ObjectiveWeights = Field(default_factory=ObjectiveWeights)

    @model_validator(mode="after")
    def validate_relationships(self) -> "GenerationSettings":
        if self.elite_count >= self.population_size:
            raise ValueError("elite_count must be less than population_size")
        return self


RunStatusValue = Literal["converged", "max_generations_reached"]


class GenerateScheduleRequest(BaseModel):
    sessions: list[Minisymposium] = Field(min_length=1, max_length=5000)
    rooms: list[RoomSpec] = Field(min_length=1, max_length=500)
    timeslot_count: int = Field(ge=1, le=1000)
    precedence: list[PrecedencePair] = Field(default_factory=list)
    settings: GenerationSettings = Field(default_factory=GenerationSettings)

    @model_validator(mode="after")
    def validate_capacity(self) -> "GenerateScheduleRequest":
        if len(self.sessions) > self.timeslot_count * len(self.rooms):
            raise ValueError("There are more sessions than timeslot/room cells")
        for pair in self.precedence:
            if pair.before >= len(self.sessions) or pair.after >= len(self.sessions):
                raise ValueError("precedence refers to an unknown session")
        return self


class ScheduledSession(BaseModel):
    timeslot: int
    room: str
    session_id: int
    title: str
    theme: str
    priority: int


class PenaltyBreakdown(BaseModel):
    order: int
    oversubscribed: int
    theme: int
    priority: int


class GenerateScheduleResponse(BaseModel):
    status: RunStatusValue
    score: float
    generations_run: int
    penalties: PenaltyBreakdown
    sessions: list[ScheduledSession]
    runtime_ms: int
