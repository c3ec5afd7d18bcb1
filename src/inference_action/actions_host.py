"""GitHub Actions runner protocol: inputs, outputs, failures and log grouping."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator, Mapping, TextIO

from inference_action.errors import MissingInputError


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class ActionsHost:
    def __init__(self, env: Mapping[str, str] | None = None, stream: TextIO | None = None) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env
        self._stream: TextIO = stream or sys.stdout
        self.exit_code: int = 0

    @property
    def environ(self) -> Mapping[str, str]:
        return self._env

    def get_input(self, name: str, required: bool = False) -> str:
        key = f"INPUT_{name.replace(' ', '_').upper()}"
        value = self._env.get(key, "").strip()
        if required and not value:
            raise MissingInputError(f"Input required and not supplied: {name}")
        return value

    def issue_command(self, command: str, message: str = "", properties: Mapping[str, str] | None = None) -> None:
        props = ""
        if properties:
            props = " " + ",".join(f"{key}={escape_property(val)}" for key, val in properties.items())
        self._stream.write(f"::{command}{props}::{escape_data(message)}\n")
        self._stream.flush()

    def set_output(self, name: str, value: str) -> None:
        output_path = self._env.get("GITHUB_OUTPUT", "")
        if not output_path:
            self._stream.write("\n")
            self.issue_command("set-output", value, {"name": name})
            return
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in value:
            raise ValueError(f"Unexpected input: value should not contain the delimiter {delimiter!r}")
        with open(output_path, "a", encoding="utf-8") as handle:
            handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def info(self, message: str) -> None:
        self._stream.write(f"{message}\n")
        self._stream.flush()

    def warning(self, message: str) -> None:
        self.issue_command("warning", message)

    def error(self, message: str) -> None:
        self.issue_command("error", message)

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self.error(message)

    @contextmanager
    def group(self, name: str) -> Iterator[None]:
        self.issue_command("group", name)
        try:
            yield
        finally:
            self.issue_command("endgroup")


class ActionsLogHandler(logging.Handler):
    """Forward log records to the runner: warnings as annotations, the rest as plain lines."""

    def __init__(self, host: ActionsHost, level: int = logging.INFO) -> None:
        super().__init__(level)
        self._host = host

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                self._host.error(message)
            elif record.levelno >= logging.WARNING:
                self._host.warning(message)
            else:
                self._host.info(message)
        except Exception:
            self.handleError(record)
