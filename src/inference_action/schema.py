"""JSON schema loading, prompt instructions and response validation."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from inference_action.errors import SchemaFileNotFoundError, SchemaParseError, SchemaStructureError
from inference_action.io_utils import file_exists, read_text
from inference_action.json_utils import JsonValue, dump_pretty, json_pointer, parse_json
from inference_action.models.validation_outcome import ValidationOutcome


logger = logging.getLogger(__name__)

SCHEMA_INSTRUCTIONS_HEADER = "Please respond with valid JSON that matches the following schema:"
SCHEMA_DIRECTIVES = (
    "- Return only valid JSON, no additional text",
    "- Ensure all required fields are included",
    "- Follow the exact property names and types specified",
    "- Use null for optional fields that cannot be determined",
)


def load_schema_from_file(path: str) -> JsonValue:
    if not file_exists(path):
        raise SchemaFileNotFoundError(f"Schema file not found: {path}")
    content = read_text(path, "Schema")
    try:
        return parse_json(content)
    except json.JSONDecodeError as exc:
        raise SchemaParseError(f"Invalid JSON in schema file {path}: {exc}") from exc


def parse_inline_schema(text: str) -> JsonValue:
    try:
        return parse_json(text)
    except json.JSONDecodeError as exc:
        raise SchemaParseError(f"Invalid JSON in inline schema: {exc}") from exc


def _compile(schema: Any) -> Validator:
    """
    Select the validator class from `$schema` (2020-12 when absent) and check the
    schema against its metaschema. Raises SchemaError when it does not compile.
    """
    if isinstance(schema, (Mapping, bool)):
        cls = validator_for(schema, default=Draft202012Validator)
    else:
        cls = Draft202012Validator
    cls.check_schema(schema)
    return cls(schema, format_checker=cls.FORMAT_CHECKER)


def validate_schema(schema: Any) -> ValidationOutcome:
    try:
        _compile(schema)
    except SchemaError as exc:
        return ValidationOutcome.failed([exc.message])
    except Exception as exc:
        return ValidationOutcome.failed([str(exc) or type(exc).__name__])
    return ValidationOutcome.ok()


def validate_data_against_schema(data: Any, schema: Any) -> ValidationOutcome:
    try:
        validator = _compile(schema)
        errors = [f"{json_pointer(err.absolute_path) or 'root'}: {err.message}" for err in validator.iter_errors(data)]
    except SchemaError as exc:
        return ValidationOutcome.failed([exc.message])
    except Exception as exc:
        return ValidationOutcome.failed([str(exc) or type(exc).__name__])
    if errors:
        return ValidationOutcome.failed(errors)
    return ValidationOutcome.ok()


def resolve_response_schema(schema_file: str, inline_schema: str) -> JsonValue | None:
    """
    Load the response schema from a file or inline text and check that it compiles.
    A schema file always wins; the inline text is then never parsed.
    """
    if schema_file:
        schema = load_schema_from_file(schema_file)
    elif inline_schema:
        schema = parse_inline_schema(inline_schema)
    else:
        return None

    outcome = validate_schema(schema)
    if not outcome.valid:
        raise SchemaStructureError(f"Invalid JSON schema: {', '.join(outcome.errors or [])}")
    return schema


def generate_schema_instructions(schema: Any) -> str:
    lines = [
        SCHEMA_INSTRUCTIONS_HEADER,
        "",
        dump_pretty(schema),
        "",
        "Important:",
        *SCHEMA_DIRECTIVES,
    ]
    return "\n".join(lines)


def append_schema_instructions(prompt: str, schema: Any) -> str:
    return f"{prompt}\n\n{generate_schema_instructions(schema)}"


def check_response(text: str, schema: Any) -> str | None:
    """
    Validate a model response against the schema.
    Returns the warning that was logged, or None when the response conforms.
    """
    try:
        data = parse_json(text)
    except (ValueError, RecursionError) as exc:
        warning = f"AI response is not valid JSON: {exc}"
        logger.warning(warning)
        return warning

    outcome = validate_data_against_schema(data, schema)
    if outcome.valid:
        return None
    warning = f"AI response does not match schema: {', '.join(outcome.errors or [])}"
    logger.warning(warning)
    return warning
