"""Public package exports."""

from inference_action.action_run import ActionRun
from inference_action.input_adaptors import FileInput
from inference_action.input_adaptors import InputAdaptor
from inference_action.input_adaptors import TextInput
from inference_action.models import ActionInputs
from inference_action.models import RunResult
from inference_action.orchestrator import Orchestrator

__all__ = ["ActionInputs", "ActionRun", "FileInput", "InputAdaptor", "Orchestrator", "RunResult", "TextInput"]
