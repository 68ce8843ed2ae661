"""Profile resolution states handed to the presentation layer."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from wayfinder.models.person import PersonExtended


class FallbackReason(str, Enum):
    OFFLINE = "offline"
    ERROR = "error"
    EMPTY = "empty"


class LoadingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"


class LiveResult(BaseModel):
    """Remote fields merged over the fallback record."""

    model_config = ConfigDict(frozen=True)

    status: Literal["live"] = "live"
    data: PersonExtended


class FallbackResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["fallback"] = "fallback"
    data: PersonExtended
    reason: FallbackReason


ResolutionResult = Annotated[Union[LoadingResult, LiveResult, FallbackResult], Field(discriminator="status")]
