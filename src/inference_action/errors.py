"""Errors raised by the request pipeline."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MISSING_INPUT = "missing_input"
    FILE_NOT_FOUND = "file_not_found"
    FILE_READ = "file_read"
    PARSE = "parse"
    STRUCTURE = "structure"
    TEMPLATE = "template"
    SCHEMA = "schema"
    GENERATION = "generation"
    UNEXPECTED = "unexpected"


class ActionError(Exception):
    """Base for every failure that ends a run; the message is user-facing."""

    kind: ErrorKind = ErrorKind.GENERATION

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingInputError(ActionError):
    kind = ErrorKind.MISSING_INPUT


class InputFileNotFoundError(ActionError):
    kind = ErrorKind.FILE_NOT_FOUND


class SchemaFileNotFoundError(ActionError):
    kind = ErrorKind.FILE_NOT_FOUND


class FileReadError(ActionError):
    kind = ErrorKind.FILE_READ


class VarsParseError(ActionError):
    kind = ErrorKind.PARSE


class SchemaParseError(ActionError):
    kind = ErrorKind.PARSE


class VarsStructureError(ActionError):
    kind = ErrorKind.STRUCTURE


class TemplateRenderError(ActionError):
    kind = ErrorKind.TEMPLATE


class SchemaStructureError(ActionError):
    kind = ErrorKind.SCHEMA


class GenerationError(ActionError):
    kind = ErrorKind.GENERATION
