"""Model types for action configuration and runtime."""

from inference_action.models.action_inputs import ActionInputs
from inference_action.models.run_result import RunResult
from inference_action.models.run_state import RunState
from inference_action.models.validation_outcome import ValidationOutcome

__all__ = [
    "ActionInputs",
    "RunResult",
    "RunState",
    "ValidationOutcome",
]
