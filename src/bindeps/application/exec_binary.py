from __future__ import annotations

from collections.abc import Sequence
import logging
from pathlib import Path

from bindeps.adapters.errors import AdapterError
from bindeps.application.manifest import MANIFEST_NAME
from bindeps.domain.binary import Config
from bindeps.domain.diagnostics import BinaryLocation, Diagnostic, FileLocation, Severity
from bindeps.domain.naming import artifact_name
from bindeps.domain.result import Result
from bindeps.ports.command_runner import CommandRunnerPort

logger = logging.getLogger(__name__)


def exec_binary(
    config: Config,
    bin_dir: Path,
    name: str,
    args: Sequence[str],
    runner: CommandRunnerPort,
) -> Result[int]:
    """Run the installed artifact declared as ``name``.

    The value of a successful result is the child's exit code.
    """
    binary = config.find(name)
    if binary is None:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="BINARY_NOT_DECLARED",
                    rule="exec.declared",
                    severity=Severity.ERROR,
                    message=f"Binary '{name}' not found in {MANIFEST_NAME}",
                    location=BinaryLocation(name),
                )
            ]
        )

    bin_path = bin_dir / artifact_name(binary)
    if not bin_path.exists():
        return Result(
            diagnostics=[
                Diagnostic(
                    code="BINARY_NOT_INSTALLED",
                    rule="exec.installed",
                    severity=Severity.ERROR,
                    message=f"Binary '{name}' is not installed. Run 'bd install' first.",
                    location=FileLocation(str(bin_path)),
                )
            ]
        )

    logger.debug("exec %s %s", bin_path, list(args))
    try:
        completed = runner.run([str(bin_path), *args])
    except AdapterError as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="EXEC_LAUNCH_FAILED",
                    rule="exec.launch",
                    severity=Severity.ERROR,
                    message=f"Failed to execute {bin_path}: {e}",
                    location=FileLocation(str(bin_path)),
                )
            ]
        )
    exit_code = completed.exit_code
    if exit_code < 0:
        # killed by signal N, report as a shell would
        exit_code = 128 - exit_code
    return Result(value=exit_code)
