from __future__ import annotations

from pathlib import Path
from typing import Any, NoReturn

import click
import typer
from typer.core import TyperGroup

from bindeps.adapters.build.go_install import GoInstallBuildTool
from bindeps.adapters.command.subprocess_runner import SubprocessCommandRunner
from bindeps.adapters.platform.symlink_probe import PlatformSymlinkProbe
from bindeps.application.alias import AliasPublisher
from bindeps.application.exec_binary import exec_binary
from bindeps.application.install import install_binaries
from bindeps.application.manifest import load_manifest, resolve_bin_dir
from bindeps.domain.binary import Config
from bindeps.domain.diagnostics import Diagnostic
from bindeps.domain.result import Result
from bindeps.entrypoints.logging_setup import configure_logging
from bindeps.ports.build_tool import BuildToolPort
from bindeps.ports.command_runner import CommandRunnerPort

USAGE = "Usage: bd <install|exec>"


class UsageGroup(TyperGroup):
    """Prints the one-line usage for anything that is not a known command."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if not args or args[0] not in self.commands:
            typer.echo(USAGE)
            raise typer.Exit(1)
        return super().parse_args(ctx, args)


app = typer.Typer(cls=UsageGroup, add_completion=False)


def _command_runner() -> CommandRunnerPort:
    return SubprocessCommandRunner()


def _build_tool() -> BuildToolPort:
    return GoInstallBuildTool(_command_runner())


def _alias_publisher() -> AliasPublisher:
    return AliasPublisher(PlatformSymlinkProbe())


def _emit(diagnostics: list[Diagnostic]) -> None:
    for d in diagnostics:
        typer.echo(d.render(), err=True)


def _load() -> tuple[Config, Path]:
    config_result = load_manifest()
    _emit(config_result.diagnostics)
    if not config_result.ok or config_result.value is None:
        raise typer.Exit(config_result.exit_code)
    config = config_result.value
    bin_dir_result = resolve_bin_dir(config)
    _emit(bin_dir_result.diagnostics)
    if not bin_dir_result.ok or bin_dir_result.value is None:
        raise typer.Exit(bin_dir_result.exit_code)
    return config, bin_dir_result.value


def _finish(result: Result[Any]) -> NoReturn:
    _emit(result.diagnostics)
    raise typer.Exit(result.exit_code)


@app.callback()
def _root() -> None:  # pyright: ignore[reportUnusedFunction]
    configure_logging()


@app.command()
def install(
    clean: bool = typer.Option(
        False, "--clean", "-clean", "-c", help="Remove binDir before installing."
    ),
):
    """Install every binary declared in bd.json."""
    config, bin_dir = _load()
    result = install_binaries(
        config,
        bin_dir,
        build_tool=_build_tool(),
        publisher=_alias_publisher(),
        clean=clean,
        report=typer.echo,
    )
    _finish(result)


@app.command(
    "exec",
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
def exec_(
    name: str = typer.Argument(...),
    args: list[str] | None = typer.Argument(None),
):
    """Run an installed binary, forwarding ARGS."""
    config, bin_dir = _load()
    result = exec_binary(config, bin_dir, name, args or [], runner=_command_runner())
    if not result.ok or result.value is None:
        _finish(result)
    raise typer.Exit(result.value)


def main() -> None:
    app(prog_name="bd")


if __name__ == "__main__":
    main()
