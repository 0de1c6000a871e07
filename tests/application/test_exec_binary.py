from bindeps.adapters.errors import CommandNotFound
from bindeps.application.exec_binary import exec_binary
from bindeps.domain.binary import Binary, Config

TOOL = Binary(package="example.org/tool", version="v1.0.0", name="tool")


def _install(tmp_path, name="tool-v1.0.0"):
    path = tmp_path / name
    path.write_text("#!/bin/sh\n")
    return path


def test_exec_runs_final_artifact_with_args(tmp_path, fakes):
    final = _install(tmp_path)
    runner = fakes.Runner(exit_code=5)
    result = exec_binary(Config(binaries=(TOOL,)), tmp_path, "tool", ["-x", "--flag"], runner)
    assert result.ok
    assert result.value == 5
    assert runner.calls[0]["args"] == [str(final), "-x", "--flag"]


def test_exec_unknown_name_fails_before_spawning(tmp_path, runner):
    result = exec_binary(Config(binaries=(TOOL,)), tmp_path, "nope", [], runner)
    assert result.diagnostics[0].code == "BINARY_NOT_DECLARED"
    assert "Binary 'nope' not found" in result.diagnostics[0].message
    assert runner.calls == []


def test_exec_not_installed_is_distinct(tmp_path, runner):
    result = exec_binary(Config(binaries=(TOOL,)), tmp_path, "tool", [], runner)
    assert result.diagnostics[0].code == "BINARY_NOT_INSTALLED"
    assert "Run 'bd install' first" in result.diagnostics[0].message
    assert runner.calls == []


def test_exec_duplicate_names_pick_first_declaration(tmp_path, runner):
    first = Binary(package="example.org/a/tool", version="v1", name="tool")
    second = Binary(package="example.org/b/tool", version="v2", name="tool")
    _install(tmp_path, "tool-v1")
    _install(tmp_path, "tool-v2")
    exec_binary(Config(binaries=(first, second)), tmp_path, "tool", [], runner)
    assert runner.calls[0]["args"] == [str(tmp_path / "tool-v1")]


def test_exec_launch_failure(tmp_path, fakes):
    _install(tmp_path)
    runner = fakes.Runner(error=CommandNotFound("Command not found: tool"))
    result = exec_binary(Config(binaries=(TOOL,)), tmp_path, "tool", [], runner)
    assert result.exit_code == 1
    assert result.diagnostics[0].code == "EXEC_LAUNCH_FAILED"


def test_exec_signal_exit_maps_to_shell_convention(tmp_path, fakes):
    _install(tmp_path)
    runner = fakes.Runner(exit_code=-15)
    result = exec_binary(Config(binaries=(TOOL,)), tmp_path, "tool", [], runner)
    assert result.value == 143
