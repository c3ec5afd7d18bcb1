"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Mapping, Sequence

import anyio
from pydantic import ValidationError

from inference_action.actions_host import ActionsHost, ActionsLogHandler
from inference_action.errors import ActionError
from inference_action.models.action_inputs import INPUT_NAMES, ActionInputs
from inference_action.models.run_result import RunResult
from inference_action.orchestrator import Orchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inference-action",
        description="Render a prompt, call an inference model and validate the response.",
    )
    parser.add_argument("--prompt", type=str, help="Prompt text")
    parser.add_argument("--prompt-file", type=str, help="Path to a file holding the prompt")
    parser.add_argument("--system-prompt", type=str, help="System prompt text")
    parser.add_argument("--system-prompt-file", type=str, help="Path to a file holding the system prompt")
    parser.add_argument("--model", type=str, help="Model name")
    parser.add_argument("--token", type=str, help="Credential for the inference endpoint")
    parser.add_argument("--response-schema", type=str, help="Inline JSON schema for the response")
    parser.add_argument("--response-schema-file", type=str, help="Path to a JSON schema for the response")
    parser.add_argument("--vars", type=str, help="YAML document of template variables")
    parser.add_argument("--endpoint", type=str, help="OpenAI-compatible inference endpoint")
    parser.add_argument("--max-tokens", type=str, help="Maximum tokens to generate")
    parser.add_argument("--verbose", action="store_true", help="Log run state transitions")
    return parser


def collect_inputs(args: argparse.Namespace, host: ActionsHost, env: Mapping[str, str]) -> ActionInputs:
    overrides = {name: getattr(args, name.replace("-", "_")) for name in INPUT_NAMES}
    if overrides["token"] is None and not host.get_input("token"):
        overrides["token"] = env.get("GITHUB_TOKEN")
    return ActionInputs.from_host(host, overrides)


def configure_logging(host: ActionsHost, verbose: bool) -> None:
    package_logger = logging.getLogger("inference_action")
    package_logger.handlers.clear()
    package_logger.addHandler(ActionsLogHandler(host))
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    package_logger.propagate = False


def report(result: RunResult, host: ActionsHost) -> None:
    if not result.ok:
        host.set_failed(result.error or "Unknown error")
        return
    text = result.text or ""
    host.set_output("text", text)
    with host.group("AI Response"):
        host.info(text)


def main(argv: Sequence[str] | None = None, host: ActionsHost | None = None) -> int:
    args = build_parser().parse_args(argv)
    host = host or ActionsHost()
    configure_logging(host, args.verbose)

    try:
        inputs = collect_inputs(args, host, host.environ)
    except ActionError as exc:
        host.set_failed(exc.message)
        return host.exit_code
    except ValidationError as exc:
        host.set_failed(f"Invalid inputs: {exc}")
        return host.exit_code

    orch = Orchestrator()
    result = anyio.run(orch.run, inputs)
    report(result, host)
    return host.exit_code


if __name__ == "__main__":
    sys.exit(main())
