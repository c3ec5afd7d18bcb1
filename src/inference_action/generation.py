"""Chat completion call against an OpenAI-compatible inference endpoint."""

from __future__ import annotations

from typing import Any, Awaitable, Protocol

from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings

from inference_action.errors import GenerationError
from inference_action.models.action_inputs import DEFAULT_ENDPOINT, DEFAULT_MAX_TOKENS

RESPONSE_SCHEMA_NAME = "response_schema"


class GenerateFn(Protocol):
    def __call__(
        self,
        prompt: str,
        system_prompt: str,
        model: str,
        token: str,
        response_schema: Any | None = None,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> Awaitable[str]: ...


def build_model(model_name: str, token: str, endpoint: str = DEFAULT_ENDPOINT) -> OpenAIChatModel:
    provider = OpenAIProvider(base_url=endpoint, api_key=token)
    return OpenAIChatModel(model_name, provider=provider)


def build_model_settings(max_tokens: int, response_schema: Any | None = None) -> ModelSettings:
    model_settings: ModelSettings = {"max_tokens": max_tokens}
    if response_schema is not None:
        model_settings["extra_body"] = {
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": RESPONSE_SCHEMA_NAME,
                    "schema": response_schema,
                },
            },
        }
    return model_settings


async def generate_ai_response(
    prompt: str,
    system_prompt: str,
    model: str,
    token: str,
    response_schema: Any | None = None,
    *,
    endpoint: str = DEFAULT_ENDPOINT,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> str:
    agent = Agent(
        build_model(model, token, endpoint),
        system_prompt=system_prompt,
        output_type=str,
        model_settings=build_model_settings(max_tokens, response_schema),
    )
    result = await agent.run(prompt)
    if not result.output:
        raise GenerationError("No response content received from the model")
    return result.output
