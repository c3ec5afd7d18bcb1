"""Helper for running the action."""

from __future__ import annotations

from inference_action.action_run import ActionRun
from inference_action.generation import GenerateFn, generate_ai_response
from inference_action.models.action_inputs import ActionInputs
from inference_action.models.run_result import RunResult


class Orchestrator:
    def __init__(self, generate: GenerateFn | None = None) -> None:
        self.generate: GenerateFn = generate or generate_ai_response

    async def run(self, inputs: ActionInputs) -> RunResult:
        action_run = ActionRun(inputs, self.generate)
        return await action_run.run()
