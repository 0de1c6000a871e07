from pathlib import Path

import pytest

from bindeps.adapters.errors import CommandFailed, CommandNotFound
from bindeps.application.alias import AliasPublisher
from bindeps.domain.binary import Binary
from bindeps.ports.command_runner import CommandResult


class FakeBuildTool:
    def __init__(self, outputs: int = 1, fail: bool = False, not_found: bool = False):
        self.outputs = outputs
        self.fail = fail
        self.not_found = not_found
        self.calls: list[Binary] = []
        self.scratch_dirs: list[Path] = []

    def build(self, binary: Binary, out_dir: Path) -> None:
        self.calls.append(binary)
        self.scratch_dirs.append(out_dir)
        if self.not_found:
            raise CommandNotFound("Command not found: go")
        if self.fail:
            raise CommandFailed(
                f"go install {binary.package} exited with status 1",
                details={"exit_code": 1},
            )
        for i in range(self.outputs):
            suffix = "" if i == 0 else str(i)
            (out_dir / f"{binary.name}{suffix}").write_text(
                f"#!/bin/sh\necho {binary.name} {binary.version}\n"
            )


class FakeCapability:
    def __init__(self, allowed: bool):
        self.allowed = allowed
        self.calls = 0

    def can_symlink(self) -> bool:
        self.calls += 1
        return self.allowed


class FakeRunner:
    def __init__(self, exit_code: int = 0, error: Exception | None = None):
        self.exit_code = exit_code
        self.error = error
        self.calls: list[dict] = []

    def run(self, args, env=None) -> CommandResult:
        self.calls.append({"args": list(args), "env": env})
        if self.error is not None:
            raise self.error
        return CommandResult(args=list(args), exit_code=self.exit_code)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for var in ("BD_MANIFEST", "BD_GO", "BD_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def build_tool():
    return FakeBuildTool()


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def symlink_publisher():
    return AliasPublisher(FakeCapability(True))


@pytest.fixture
def copy_publisher():
    return AliasPublisher(FakeCapability(False))


@pytest.fixture
def fakes():
    class _Fakes:
        BuildTool = FakeBuildTool
        Capability = FakeCapability
        Runner = FakeRunner

    return _Fakes
