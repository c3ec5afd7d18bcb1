"""Pydantic model for schema validation results."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, model_validator


class ValidationOutcome(BaseModel):
    valid: bool
    errors: Optional[list[str]] = None

    @model_validator(mode="after")
    def _errors_required_when_invalid(self) -> "ValidationOutcome":
        if not self.valid and not self.errors:
            raise ValueError("An invalid outcome must carry at least one error.")
        return self

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(valid=True)

    @classmethod
    def failed(cls, errors: list[str]) -> "ValidationOutcome":
        return cls(valid=False, errors=errors)
