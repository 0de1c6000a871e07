from __future__ import annotations

from collections.abc import Callable
import logging
import os
from pathlib import Path
import shutil
import stat
import tempfile

from bindeps.adapters.errors import AdapterError, AliasPublishError, CommandNotFound
from bindeps.application.alias import AliasPublisher
from bindeps.domain.binary import Binary, Config
from bindeps.domain.diagnostics import BinaryLocation, Diagnostic, FileLocation, Severity
from bindeps.domain.naming import alias_name, artifact_name
from bindeps.domain.result import Result
from bindeps.ports.build_tool import BuildToolPort

logger = logging.getLogger(__name__)

Reporter = Callable[[str], None]
SCRATCH_PREFIX = "bindeps-build-"


def _silent(_message: str) -> None:
    return None


def _failure(
    binary: Binary,
    code: str,
    rule: str,
    message: str,
    error: Exception | None = None,
    hint: str | None = None,
) -> Result[Path]:
    text = f"install binary {binary.name}: {message}"
    if error is not None:
        text = f"{text}: {error}"
    return Result(
        diagnostics=[
            Diagnostic(
                code=code,
                rule=rule,
                severity=Severity.ERROR,
                message=text,
                location=BinaryLocation(binary.name),
                hint=hint,
                details=error.details if isinstance(error, AdapterError) else None,
            )
        ]
    )


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def _move(source: Path, dest: Path) -> None:
    try:
        os.replace(source, dest)
    except OSError:
        # scratch may live on another filesystem
        shutil.move(str(source), str(dest))


def install_binary(
    binary: Binary,
    bin_dir: Path,
    build_tool: BuildToolPort,
    publisher: AliasPublisher,
    report: Reporter = _silent,
) -> Result[Path]:
    final_path = bin_dir / artifact_name(binary)
    alias_path = bin_dir / alias_name(binary)

    if final_path.exists() and not binary.is_latest:
        try:
            publisher.publish(final_path, alias_path)
        except AliasPublishError as e:
            return _failure(binary, "ALIAS_PUBLISH_FAILED", "install.alias", "symlink binary", e)
        report(f"Already installed: {binary.name} {binary.display_version}")
        return Result(value=final_path)

    try:
        scratch = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX))
    except OSError as e:
        return _failure(
            binary, "SCRATCH_CREATE_FAILED", "install.scratch", "failed to create temp directory", e
        )
    logger.debug("building %s into %s", binary.package, scratch)
    try:
        try:
            build_tool.build(binary, scratch)
        except CommandNotFound as e:
            return _failure(
                binary,
                "BUILD_TOOL_NOT_FOUND",
                "install.build",
                "build tool not found",
                e,
                hint="Install Go or point BD_GO at the go executable",
            )
        except AdapterError as e:
            return _failure(binary, "BUILD_FAILED", "install.build", "build failed", e)

        try:
            files = [entry for entry in scratch.iterdir() if entry.is_file()]
        except OSError as e:
            return _failure(
                binary, "BUILD_OUTPUT_MISSING", "install.output", f"read {scratch}", e
            )
        if not files:
            return _failure(
                binary,
                "BUILD_OUTPUT_MISSING",
                "install.output",
                f"find built binary in {scratch}",
            )
        if len(files) > 1:
            names = ", ".join(sorted(f.name for f in files))
            return _failure(
                binary,
                "BUILD_OUTPUT_AMBIGUOUS",
                "install.output",
                f"expected one built binary in {scratch}, found {names}",
            )

        try:
            _move(files[0], final_path)
            _make_executable(final_path)
        except OSError as e:
            return _failure(
                binary, "ARTIFACT_MOVE_FAILED", "install.move", "move binary to final path", e
            )

        try:
            publisher.publish(final_path, alias_path)
        except AliasPublishError as e:
            return _failure(binary, "ALIAS_PUBLISH_FAILED", "install.alias", "symlink binary", e)
    finally:
        shutil.rmtree(scratch, ignore_errors=True)

    report(f"Installed: {binary.name} {binary.display_version}")
    return Result(value=final_path)


def clean_bin_dir(bin_dir: Path) -> Result[None]:
    try:
        if bin_dir.is_symlink() or bin_dir.is_file():
            bin_dir.unlink()
        elif bin_dir.exists():
            shutil.rmtree(bin_dir)
    except OSError as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="BIN_DIR_CLEAN_FAILED",
                    rule="bin_dir.clean",
                    severity=Severity.ERROR,
                    message=f"failed to clean {bin_dir}: {e}",
                    location=FileLocation(str(bin_dir)),
                )
            ]
        )
    return Result()


def install_binaries(
    config: Config,
    bin_dir: Path,
    build_tool: BuildToolPort,
    publisher: AliasPublisher,
    clean: bool = False,
    report: Reporter = _silent,
) -> Result[list[Path]]:
    if clean:
        cleaned = clean_bin_dir(bin_dir)
        if not cleaned.ok:
            return Result(diagnostics=cleaned.diagnostics)

    try:
        bin_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="BIN_DIR_CREATE_FAILED",
                    rule="bin_dir.create",
                    severity=Severity.ERROR,
                    message=f"create binDir: {e}",
                    location=FileLocation(str(bin_dir)),
                )
            ]
        )

    installed: list[Path] = []
    for binary in config.binaries:
        result = install_binary(binary, bin_dir, build_tool, publisher, report=report)
        if not result.ok or result.value is None:
            return Result(value=installed, diagnostics=result.diagnostics)
        installed.append(result.value)

    report(f"\nAll binaries installed in {bin_dir}")
    return Result(value=installed)
