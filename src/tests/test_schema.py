import json
import logging
from pathlib import Path
from typing import Any

import pytest

from inference_action import schema as schema_module
from inference_action.errors import FileReadError, SchemaFileNotFoundError, SchemaParseError, SchemaStructureError
from inference_action.schema import append_schema_instructions
from inference_action.schema import check_response
from inference_action.schema import generate_schema_instructions
from inference_action.schema import load_schema_from_file
from inference_action.schema import parse_inline_schema
from inference_action.schema import resolve_response_schema
from inference_action.schema import validate_data_against_schema
from inference_action.schema import validate_schema


VALID_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "age": {"type": "number"},
        "email": {"type": "string", "format": "email"},
    },
    "required": ["name", "age"],
}

INVALID_SCHEMA: dict[str, Any] = {
    "type": "invalid-type",
    "properties": "not-an-object",
}


def test_validate_schema_accepts_valid_and_empty() -> None:
    outcome = validate_schema(VALID_SCHEMA)
    assert outcome.valid is True
    assert outcome.errors is None

    assert validate_schema({}).valid is True
    assert validate_schema(True).valid is True


def test_validate_schema_rejects_invalid() -> None:
    outcome = validate_schema(INVALID_SCHEMA)

    assert outcome.valid is False
    assert outcome.errors is not None
    assert len(outcome.errors) == 1


@pytest.mark.parametrize("document", [42, "string", [1, 2]])
def test_validate_schema_rejects_non_schema_values(document: Any) -> None:
    assert validate_schema(document).valid is False


def test_validate_data_matching_schema() -> None:
    outcome = validate_data_against_schema({"name": "John Doe", "age": 30, "email": "john@example.com"}, VALID_SCHEMA)

    assert outcome.valid is True
    assert outcome.errors is None


def test_validate_data_wrong_type_reports_instance_path() -> None:
    outcome = validate_data_against_schema({"name": "John Doe", "age": "thirty"}, VALID_SCHEMA)

    assert outcome.valid is False
    assert outcome.errors == ["/age: 'thirty' is not of type 'number'"]


def test_validate_data_missing_required_field_mentions_it() -> None:
    outcome = validate_data_against_schema({"name": "John Doe"}, VALID_SCHEMA)

    assert outcome.valid is False
    assert outcome.errors is not None
    assert any("age" in err for err in outcome.errors)
    assert all(err.startswith("root: ") for err in outcome.errors)


def test_validate_data_reports_every_violation() -> None:
    outcome = validate_data_against_schema({"age": "thirty"}, VALID_SCHEMA)

    assert outcome.errors is not None
    assert len(outcome.errors) == 2


def test_validate_data_checks_formats() -> None:
    outcome = validate_data_against_schema({"name": "a", "age": 1, "email": "not-an-email"}, VALID_SCHEMA)

    assert outcome.valid is False


def test_validate_data_nested_path() -> None:
    nested = {
        "type": "object",
        "properties": {"items": {"type": "array", "items": {"type": "object", "required": ["id"]}}},
    }

    outcome = validate_data_against_schema({"items": [{"id": 1}, {}]}, nested)

    assert outcome.errors == ["/items/1: 'id' is a required property"]


def test_validate_data_with_invalid_schema_is_an_outcome() -> None:
    outcome = validate_data_against_schema({"name": "test"}, INVALID_SCHEMA)

    assert outcome.valid is False
    assert outcome.errors


def test_parse_inline_schema_round_trip() -> None:
    assert parse_inline_schema(json.dumps(VALID_SCHEMA)) == VALID_SCHEMA


@pytest.mark.parametrize("text", ["{ name: 'invalid' }", ""])
def test_parse_inline_schema_invalid(text: str) -> None:
    with pytest.raises(SchemaParseError, match="Invalid JSON in inline schema"):
        parse_inline_schema(text)


def test_load_schema_from_file(tmp_path: Path) -> None:
    schema_path = tmp_path / "schema.json"
    schema_path.write_text(json.dumps(VALID_SCHEMA, indent=2), encoding="utf-8")

    assert load_schema_from_file(str(schema_path)) == VALID_SCHEMA


def test_load_schema_from_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "non-existent.json"

    with pytest.raises(SchemaFileNotFoundError) as excinfo:
        load_schema_from_file(str(missing))

    assert str(excinfo.value) == f"Schema file not found: {missing}"


def test_load_schema_from_invalid_file(tmp_path: Path) -> None:
    schema_path = tmp_path / "invalid.json"
    schema_path.write_text("{ invalid json }", encoding="utf-8")

    with pytest.raises(SchemaParseError) as excinfo:
        load_schema_from_file(str(schema_path))

    assert str(excinfo.value).startswith(f"Invalid JSON in schema file {schema_path}: ")


def test_resolve_schema_file_wins_and_inline_is_not_parsed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    schema_path = tmp_path / "schema.json"
    schema_path.write_text(json.dumps(VALID_SCHEMA), encoding="utf-8")

    def fail_parse(text: str) -> Any:
        raise AssertionError("inline schema must not be parsed")

    monkeypatch.setattr(schema_module, "parse_inline_schema", fail_parse)

    assert resolve_response_schema(str(schema_path), "{ not json") == VALID_SCHEMA


def test_resolve_schema_inline_and_absent() -> None:
    assert resolve_response_schema("", json.dumps(VALID_SCHEMA)) == VALID_SCHEMA
    assert resolve_response_schema("", "") is None


def test_resolve_schema_rejects_uncompilable_schema() -> None:
    with pytest.raises(SchemaStructureError, match="Invalid JSON schema"):
        resolve_response_schema("", json.dumps(INVALID_SCHEMA))


def test_generate_schema_instructions() -> None:
    instructions = generate_schema_instructions(VALID_SCHEMA)

    assert instructions.startswith("Please respond with valid JSON that matches the following schema:\n\n")
    assert json.dumps(VALID_SCHEMA, indent=2) in instructions
    assert instructions.endswith(
        "Important:\n"
        "- Return only valid JSON, no additional text\n"
        "- Ensure all required fields are included\n"
        "- Follow the exact property names and types specified\n"
        "- Use null for optional fields that cannot be determined"
    )


def test_generate_schema_instructions_empty_schema() -> None:
    assert "\n\n{}\n\n" in generate_schema_instructions({})


def test_append_schema_instructions_separates_with_blank_line() -> None:
    prompt = append_schema_instructions("Describe a person", VALID_SCHEMA)

    assert prompt.startswith("Describe a person\n\nPlease respond with valid JSON")


def test_check_response_not_json(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="inference_action.schema"):
        warning = check_response("This is not JSON", VALID_SCHEMA)

    assert warning is not None
    assert warning.startswith("AI response is not valid JSON: ")
    assert warning in caplog.messages


def test_check_response_schema_mismatch(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="inference_action.schema"):
        warning = check_response(json.dumps({"name": "John", "age": "thirty"}), VALID_SCHEMA)

    assert warning == "AI response does not match schema: /age: 'thirty' is not of type 'number'"
    assert warning in caplog.messages


def test_check_response_match(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="inference_action.schema"):
        warning = check_response(json.dumps({"name": "John", "age": 30}), VALID_SCHEMA)

    assert warning is None
    assert caplog.records == []


@pytest.mark.parametrize("document", [{"$schema": []}, {"$schema": {"nested": True}}])
def test_validate_schema_malformed_dialect_is_an_outcome(document: Any) -> None:
    outcome = validate_schema(document)

    assert outcome.valid is False
    assert outcome.errors is not None
    assert len(outcome.errors) == 1


def test_resolve_schema_malformed_dialect_fails_as_structure_error() -> None:
    with pytest.raises(SchemaStructureError, match="Invalid JSON schema"):
        resolve_response_schema("", '{"$schema": []}')


@pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity", "[1, NaN]"])
def test_check_response_rejects_non_standard_constants(text: str) -> None:
    warning = check_response(text, {})

    assert warning is not None
    assert warning.startswith("AI response is not valid JSON: ")


def test_parse_inline_schema_rejects_nan() -> None:
    with pytest.raises(SchemaParseError, match="Invalid JSON in inline schema"):
        parse_inline_schema('{"maximum": NaN}')


def test_load_schema_from_undecodable_file(tmp_path: Path) -> None:
    schema_path = tmp_path / "schema.json"
    schema_path.write_bytes(b"\xff\xfe{}")

    with pytest.raises(FileReadError) as excinfo:
        load_schema_from_file(str(schema_path))

    assert str(excinfo.value).startswith(f"Schema file could not be read: {schema_path}: ")
