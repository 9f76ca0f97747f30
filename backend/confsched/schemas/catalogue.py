from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator


class Minisymposium(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    theme: str = Field(min_length=1, max_length=200)
    priority: int = Field(default=0, ge=0, le=100)
    series: str | None = Field(default=None, min_length=1, max_length=300)
    part: int | None = Field(default=None, ge=1, le=50)
    participants: list[str] = Field(default_factory=list, max_length=200)

    @field_validator("participants")
    @classmethod
    def normalize_participants(cls, value: list[str]) -> list[str]:
        names: list[str] = []
        for item in value:
            name = item.strip()
            if name and name not in names:
                names.append(name)
        return names

    @model_validator(mode="after")
    def validate_series(self) -> "Minisymposium":
        if (self.series is None) != (self.part is None):
            raise ValueError("series and part must be given together")
        return self

    @property
    def full_title(self) -> str:
        if self.series is not None and self.part is not None:
            return f"{self.title} (Part {self.part})"
        return self.title


class RoomSpec(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    priority: int = Field(default=0, ge=0, le=100)


class PrecedencePair(BaseModel):
    before: int = Field(ge=0)
    after: int = Field(ge=0)

    @model_validator(mode="after")
    def validate_distinct(self) -> "PrecedencePair":
        if self.before == self.after:
            raise ValueError("a session cannot precede itself")
        return self
