"""Input adaptors for prompt and system prompt text."""

from __future__ import annotations

from pathlib import Path

from inference_action.errors import InputFileNotFoundError, MissingInputError
from inference_action.io_utils import file_exists, read_text
from inference_action.models.action_inputs import ActionInputs

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."
MISSING_PROMPT_MESSAGE = "Either 'prompt' or 'prompt-file' input must be provided"


class InputAdaptor:
    def load(self) -> str:
        raise NotImplementedError("InputAdaptor.load must be implemented by subclasses.")


class FileInput(InputAdaptor):
    def __init__(self, path: str | Path, field: str) -> None:
        if not file_exists(path):
            raise InputFileNotFoundError(f"{field} file not found: {path}")
        self._path = Path(path)
        self._field = field

    def load(self) -> str:
        return read_text(self._path, self._field)


class TextInput(InputAdaptor):
    def __init__(self, text: str) -> None:
        self._text = text

    def load(self) -> str:
        return self._text


def select_adaptor(file_path: str, text: str, *, field: str) -> InputAdaptor | None:
    if file_path:
        return FileInput(file_path, field)
    if text:
        return TextInput(text)
    return None


def resolve_text(
    file_path: str,
    text: str,
    *,
    field: str,
    default: str | None = None,
    missing_message: str | None = None,
) -> str:
    """
    File path wins over literal text, literal text wins over the default.
    Without a default, a field with neither source is a missing input.
    """
    adaptor = select_adaptor(file_path, text, field=field)
    if adaptor is not None:
        return adaptor.load()
    if default is None:
        raise MissingInputError(missing_message or f"{field} input must be provided")
    return default


def resolve_prompt(inputs: ActionInputs) -> str:
    return resolve_text(
        inputs.prompt_file,
        inputs.prompt,
        field="Prompt",
        missing_message=MISSING_PROMPT_MESSAGE,
    )


def resolve_system_prompt(inputs: ActionInputs) -> str:
    return resolve_text(
        inputs.system_prompt_file,
        inputs.system_prompt,
        field="System prompt",
        default=DEFAULT_SYSTEM_PROMPT,
    )
