"""Run lifecycle states."""

from __future__ import annotations

from enum import Enum


class RunState(str, Enum):
    IDLE = "idle"
    RESOLVING_INPUTS = "resolving_inputs"
    TEMPLATING = "templating"
    SCHEMA_PREPARING = "schema_preparing"
    GENERATING = "generating"
    RESPONSE_VALIDATING = "response_validating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

