"""Prompt composition helpers."""

from __future__ import annotations

from typing import Any, Mapping

import yaml
from jinja2 import Environment, StrictUndefined

from inference_action.errors import TemplateRenderError, VarsParseError, VarsStructureError


def _finalize(value: Any) -> Any:
    # Render YAML scalars the way they were written, not as Python reprs.
    if value is None:
        return ""
    if value is True:
        return "true"
    if value is False:
        return "false"
    return value


# Prompts are plain text: no HTML escaping, and undefined names fail instead of rendering empty.
PROMPT_TEMPLATE_ENVIRONMENT = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    finalize=_finalize,
)


def parse_template_vars(vars_document: str) -> dict[str, Any]:
    try:
        parsed = yaml.safe_load(vars_document)
    except yaml.YAMLError as exc:
        raise VarsParseError(f"Invalid YAML in vars parameter: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise VarsStructureError("Variables must be a YAML object")
    return dict(parsed)


def render_template_text(template_text: str, template_variables: Mapping[str, Any]) -> str:
    try:
        template = PROMPT_TEMPLATE_ENVIRONMENT.from_string(template_text)
        return template.render(**{str(key): value for key, value in template_variables.items()})
    except Exception as exc:
        raise TemplateRenderError(f"Template rendering error: {exc}") from exc


def render_template(template: str, vars_document: str) -> str:
    """
    Render a prompt template against the variables in a YAML document.
    Blank documents leave the template untouched; it is not even parsed.
    """
    if not vars_document or not vars_document.strip():
        return template
    variables = parse_template_vars(vars_document)
    return render_template_text(template, variables)
