from __future__ import annotations

from collections.abc import Mapping
import logging
import subprocess

from bindeps.adapters.errors import CommandFailed, CommandNotFound
from bindeps.ports.command_runner import CommandResult

logger = logging.getLogger(__name__)


class SubprocessCommandRunner:
    """Runs a child with the parent's stdin/stdout/stderr and waits for it."""

    def run(
        self,
        args: list[str],
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        logger.debug("running %s", args)
        try:
            completed = subprocess.run(
                args,
                env=dict(env) if env is not None else None,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandNotFound(
                f"Command not found: {args[0]}",
                details={"args": args},
                cause=e,
            )
        except OSError as e:
            raise CommandFailed(
                f"Failed to start {args[0]}",
                details={"args": args},
                cause=e,
            )
        logger.debug("%s exited with %d", args[0], completed.returncode)
        return CommandResult(args=list(args), exit_code=completed.returncode)
