"""Shared type aliases used across the planner modules."""
from __future__ import annotations

from typing import Annotated

from pydantic import Field, StringConstraints

Lat = Annotated[float, Field(ge=-90, le=90, allow_inf_nan=False)]
Lon = Annotated[float, Field(ge=-180, le=180, allow_inf_nan=False)]
Rating = Annotated[float, Field(ge=0, le=5)]
StopNumber = Annotated[int, Field(gt=0)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
