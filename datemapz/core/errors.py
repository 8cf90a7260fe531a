"""Exceptions surfaced by the planning workflow.

Each error carries the HTTP status the API layer answers with. Failures that
are contained (nearby search, reverse geocoding, a single unparseable stop)
never raise one of these.
"""
from __future__ import annotations


class PlannerError(Exception):
    """Base class for failures that abort a planning request."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingFieldsError(PlannerError):
    """The request does not carry enough input to pick a planning mode."""

    status_code = 400


class LocationNotFound(PlannerError):
    """Forward geocoding returned no match for the requested place name."""

    status_code = 404


class InsufficientCandidates(PlannerError):
    """The nearby search produced too few places to curate a plan from."""

    status_code = 422


class PlanGenerationError(PlannerError):
    """The model call failed or returned too few usable stops."""

    status_code = 500


class PlanParseError(PlannerError):
    """The model's JSON-style answer holds no parseable object."""

    status_code = 500


class ConfigurationError(PlannerError):
    """A collaborator required by the chosen mode is not configured."""

    status_code = 500
