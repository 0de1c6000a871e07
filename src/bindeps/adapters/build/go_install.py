from __future__ import annotations

import os
from pathlib import Path

from bindeps.adapters.errors import CommandFailed
from bindeps.domain.binary import Binary
from bindeps.ports.command_runner import CommandRunnerPort

GO_ENV_VAR = "BD_GO"


def _go_executable() -> str:
    return os.environ.get(GO_ENV_VAR) or "go"


class GoInstallBuildTool:
    """Builds a Go package with ``go install``, redirecting the output via GOBIN."""

    def __init__(self, runner: CommandRunnerPort, go: str | None = None) -> None:
        self.runner = runner
        self.go = go or _go_executable()

    def command(self, binary: Binary) -> list[str]:
        return [self.go, "install", f"{binary.package}@{binary.version}"]

    def environment(self, binary: Binary, out_dir: Path) -> dict[str, str]:
        env = dict(os.environ)
        env["GOBIN"] = str(out_dir)
        if binary.toolchain:
            env["GOTOOLCHAIN"] = binary.toolchain
        return env

    def build(self, binary: Binary, out_dir: Path) -> None:
        args = self.command(binary)
        result = self.runner.run(args, env=self.environment(binary, out_dir))
        if result.exit_code != 0:
            raise CommandFailed(
                f"go install {binary.package} exited with status {result.exit_code}",
                details={"args": args, "exit_code": result.exit_code},
            )
