"""Pydantic model for the terminal result of a run."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from inference_action.errors import ErrorKind


class RunResult(BaseModel):
    status: Literal["succeeded", "failed"]
    text: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    warnings: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _exactly_one_of_text_or_error(self) -> "RunResult":
        if self.status == "succeeded" and (self.text is None or self.error is not None):
            raise ValueError("A succeeded result carries text and no error.")
        if self.status == "failed" and (self.error is None or self.text is not None):
            raise ValueError("A failed result carries an error and no text.")
        return self

    @property
    def ok(self) -> bool:
        return self.status == "succeeded"

    @classmethod
    def succeeded(cls, text: str, warnings: list[str] | None = None) -> "RunResult":
        return cls(status="succeeded", text=text, warnings=list(warnings or []))

    @classmethod
    def failed(cls, error: str, kind: ErrorKind, warnings: list[str] | None = None) -> "RunResult":
        return cls(status="failed", error=error, error_kind=kind, warnings=list(warnings or []))
