"""Single-run execution logic."""

from __future__ import annotations

import logging
from typing import Any

from inference_action.errors import ActionError, ErrorKind, GenerationError
from inference_action.generation import GenerateFn, generate_ai_response
from inference_action.input_adaptors import resolve_prompt, resolve_system_prompt
from inference_action.models.action_inputs import ActionInputs
from inference_action.models.run_result import RunResult
from inference_action.models.run_state import RunState
from inference_action.prompting import render_template
from inference_action.schema import append_schema_instructions, check_response, resolve_response_schema


logger = logging.getLogger(__name__)


class ActionRun:
    """
    One pass from inputs to a single result:
    resolving_inputs -> templating -> schema_preparing -> generating -> response_validating -> succeeded.
    A failure at any step moves straight to `failed`; nothing is retried.
    """

    def __init__(self, inputs: ActionInputs, generate: GenerateFn = generate_ai_response) -> None:
        self._inputs: ActionInputs = inputs
        self._generate: GenerateFn = generate
        self.state: RunState = RunState.IDLE
        self.history: list[RunState] = [RunState.IDLE]
        self.warnings: list[str] = []
        self.prompt: str | None = None
        self.system_prompt: str | None = None
        self.response_schema: Any | None = None

    async def run(self) -> RunResult:
        if self.state is not RunState.IDLE:
            raise RuntimeError("An ActionRun can only be run once.")
        try:
            text = await self._run_pipeline()
        except ActionError as exc:
            return self._fail(exc.message, exc.kind)
        except Exception as exc:
            logger.debug("Unexpected error during %s", self.state.value, exc_info=True)
            return self._fail(str(exc) or type(exc).__name__, ErrorKind.UNEXPECTED)
        self._transition(RunState.SUCCEEDED)
        return RunResult.succeeded(text, self.warnings)

    async def _run_pipeline(self) -> str:
        self._transition(RunState.RESOLVING_INPUTS)
        prompt = resolve_prompt(self._inputs)
        system_prompt = resolve_system_prompt(self._inputs)

        self._transition(RunState.TEMPLATING)
        prompt = render_template(prompt, self._inputs.vars)
        system_prompt = render_template(system_prompt, self._inputs.vars)

        self._transition(RunState.SCHEMA_PREPARING)
        self.response_schema = resolve_response_schema(
            self._inputs.response_schema_file,
            self._inputs.response_schema,
        )
        if self.response_schema is not None:
            prompt = append_schema_instructions(prompt, self.response_schema)
        self.prompt = prompt
        self.system_prompt = system_prompt

        self._transition(RunState.GENERATING)
        response = await self._call_model()

        self._transition(RunState.RESPONSE_VALIDATING)
        if self.response_schema is not None:
            warning = check_response(response, self.response_schema)
            if warning is not None:
                self.warnings.append(warning)
        return response

    async def _call_model(self) -> str:
        logger.info("Prompting %s AI model", self._inputs.model)
        try:
            response = await self._generate(
                self.prompt or "",
                self.system_prompt or "",
                self._inputs.model,
                self._inputs.token,
                self.response_schema,
                endpoint=self._inputs.endpoint,
                max_tokens=self._inputs.max_tokens,
            )
            if not isinstance(response, str):
                raise GenerationError("No response content received from the model")
            return response
        except ActionError:
            raise
        except Exception as exc:
            raise GenerationError(str(exc) or type(exc).__name__) from exc

    def _transition(self, state: RunState) -> None:
        logger.debug("Run state %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _fail(self, message: str, kind: ErrorKind) -> RunResult:
        logger.debug("Run failed during %s: %s", self.state.value, message)
        self._transition(RunState.FAILED)
        return RunResult.failed(message, kind, self.warnings)
