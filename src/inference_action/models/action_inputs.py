"""Pydantic model for the recognized action inputs."""

from __future__ import annotations

from typing import Mapping, Protocol

from pydantic import BaseModel, Field

from inference_action.errors import MissingInputError

DEFAULT_ENDPOINT = "https://models.github.ai/inference"
DEFAULT_MAX_TOKENS = 200

INPUT_NAMES = (
    "prompt",
    "prompt-file",
    "system-prompt",
    "system-prompt-file",
    "model",
    "token",
    "response-schema",
    "response-schema-file",
    "vars",
    "endpoint",
    "max-tokens",
)
REQUIRED_INPUTS = ("model", "token")


class InputSource(Protocol):
    def get_input(self, name: str, required: bool = False) -> str: ...


class ActionInputs(BaseModel):
    prompt: str = ""
    prompt_file: str = ""
    system_prompt: str = ""
    system_prompt_file: str = ""
    model: str
    token: str
    response_schema: str = ""
    response_schema_file: str = ""
    vars: str = ""
    endpoint: str = Field(default=DEFAULT_ENDPOINT)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)

    @classmethod
    def from_host(cls, host: InputSource, overrides: Mapping[str, str | None] | None = None) -> "ActionInputs":
        """
        Reads every recognized input by its hyphenated name.
        A non-None override replaces the host value; blank values keep the field default.
        """
        overrides = overrides or {}
        values: dict[str, str] = {}
        for name in INPUT_NAMES:
            value = overrides.get(name)
            if value is None:
                value = host.get_input(name)
            if value:
                values[name.replace("-", "_")] = value
        for name in REQUIRED_INPUTS:
            if name not in values:
                raise MissingInputError(f"Input required and not supplied: {name}")
        return cls.model_validate(values)
