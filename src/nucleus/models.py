"""
nucleus.models

Domain models.

Responsibilities:
- Define the authenticated `Identity` returned to callers.
- Define the tagged outcome of a single authentication attempt.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from nucleus.errors import NucleusError


class Identity(BaseModel):
    """
    Information about an authenticated user, as served by `/api/v1/user`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Wire keys differ from attribute names; aliases keep the JSON contract intact.
    name: str = Field(default="", alias="username")
    info: dict[str, Any] = Field(default_factory=dict, alias="userinfo")
    create_date: int = 0


@dataclass(frozen=True, slots=True)
class Success:
    identity: Identity


@dataclass(frozen=True, slots=True)
class RetryableFailure:
    error: NucleusError


@dataclass(frozen=True, slots=True)
class FatalFailure:
    error: NucleusError


AttemptOutcome = Success | RetryableFailure | FatalFailure


# --- Module Notes -----------------------------------------------------------
# Outcomes never leave the library: callers receive an `Identity` or an exception.
