from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol


@dataclass
class CommandResult:
    args: list[str]
    exit_code: int


class CommandRunnerPort(Protocol):
    def run(
        self,
        args: list[str],
        env: Mapping[str, str] | None = None,
    ) -> CommandResult: ...
