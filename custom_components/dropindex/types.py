import datetime
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, Field


class TimerState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class FixtureEfficiency(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FixtureProfile(BaseModel):
    fixture_id: str = Field(min_length=1)
    display_name: str
    flow_rate: float = Field(ge=0.0)  # L/min
    description: str = ""
    efficiency: FixtureEfficiency = FixtureEfficiency.MEDIUM

    model_config = {"frozen": True}


@dataclass(frozen=True)
class NoFixture:
    """No fixture selected, or the requested id did not resolve."""

    requested_id: str | None = None


@dataclass(frozen=True)
class SelectedFixture:
    profile: FixtureProfile


FixtureSelection = NoFixture | SelectedFixture


class CompletedSession(BaseModel):
    fixture_id: str
    fixture_name: str
    duration_seconds: int = Field(gt=0)
    volume_liters: float = Field(ge=0.0)
    estimated_cost: float = Field(ge=0.0)
    co2_equivalent_kg: float = Field(ge=0.0)
    ended_at_utc: datetime.datetime

    model_config = {"frozen": True}


class TimerSnapshot(BaseModel):
    state: TimerState
    fixture_id: str | None = None
    elapsed_seconds: int = 0
    accumulated_volume: float = 0.0
    estimated_cost: float = 0.0
    co2_equivalent: float = 0.0

    model_config = {"frozen": True}
