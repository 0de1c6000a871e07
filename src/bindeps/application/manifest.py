from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from bindeps.domain.binary import DEFAULT_BIN_DIR, Binary, Config, normalize_binary
from bindeps.domain.diagnostics import (
    BinaryLocation,
    Diagnostic,
    FileLocation,
    Severity,
)
from bindeps.domain.result import Result

logger = logging.getLogger(__name__)

MANIFEST_NAME = "bd.json"
MANIFEST_ENV_VAR = "BD_MANIFEST"
BINARY_FIELDS = ("package", "version", "name", "toolchain")


def manifest_path(cwd: Path | None = None) -> Path:
    override = os.environ.get(MANIFEST_ENV_VAR)
    if override:
        return Path(override)
    return (cwd or Path.cwd()) / MANIFEST_NAME


def _invalid(message: str, path: Path, index: int | None = None) -> Diagnostic:
    location = (
        BinaryLocation(f"binaries[{index}]", index)
        if index is not None
        else FileLocation(str(path))
    )
    return Diagnostic(
        code="MANIFEST_INVALID",
        rule="manifest.schema",
        severity=Severity.ERROR,
        message=f"{path.name}: {message}",
        location=location,
    )


def _parse_binary(entry: object, index: int, path: Path) -> Result[Binary]:
    if not isinstance(entry, dict):
        return Result(diagnostics=[_invalid(f"binaries[{index}] must be an object", path, index)])
    fields: dict[str, str] = {}
    for key in BINARY_FIELDS:
        value = entry.get(key)
        if value is None:
            fields[key] = ""
        elif isinstance(value, str):
            fields[key] = value
        else:
            return Result(
                diagnostics=[
                    _invalid(f"binaries[{index}].{key} must be a string", path, index)
                ]
            )
    if not fields["package"]:
        return Result(
            diagnostics=[_invalid(f"binaries[{index}].package is required", path, index)]
        )
    return normalize_binary(
        fields["package"],
        version=fields["version"],
        name=fields["name"],
        toolchain=fields["toolchain"],
        index=index,
    )


def _duplicate_names(binaries: list[Binary]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    seen: dict[str, Binary] = {}
    for index, binary in enumerate(binaries):
        first = seen.get(binary.name)
        if first is None:
            seen[binary.name] = binary
            continue
        diagnostics.append(
            Diagnostic(
                code="BINARY_NAME_DUPLICATE",
                rule="manifest.binary.name",
                severity=Severity.WARN,
                message=(
                    f"Binary name {binary.name!r} is declared more than once; "
                    f"exec uses {first.package}@{first.version}"
                ),
                location=BinaryLocation(binary.name, index),
            )
        )
    return diagnostics


def parse_manifest(raw: object, path: Path) -> Result[Config]:
    if not isinstance(raw, dict):
        return Result(diagnostics=[_invalid("root must be an object", path)])
    bin_dir = raw.get("binDir")
    if bin_dir is None or bin_dir == "":
        bin_dir = DEFAULT_BIN_DIR
    elif not isinstance(bin_dir, str):
        return Result(diagnostics=[_invalid("binDir must be a string", path)])
    entries = raw.get("binaries")
    if entries is None:
        entries = []
    elif not isinstance(entries, list):
        return Result(diagnostics=[_invalid("binaries must be a list", path)])

    binaries: list[Binary] = []
    diagnostics: list[Diagnostic] = []
    for index, entry in enumerate(entries):
        parsed = _parse_binary(entry, index, path)
        diagnostics.extend(parsed.diagnostics)
        if parsed.value is not None:
            binaries.append(parsed.value)
    if any(d.severity == Severity.ERROR for d in diagnostics):
        return Result(diagnostics=diagnostics)
    diagnostics.extend(_duplicate_names(binaries))
    return Result(
        value=Config(binaries=tuple(binaries), bin_dir=bin_dir),
        diagnostics=diagnostics,
    )


def load_manifest(path: Path | None = None) -> Result[Config]:
    path = path or manifest_path()
    logger.debug("loading manifest %s", path)
    if not path.exists():
        return Result(
            diagnostics=[
                Diagnostic(
                    code="MANIFEST_MISSING",
                    rule="manifest.exists",
                    severity=Severity.ERROR,
                    message=f"Failed to load {path.name}: {path} not found",
                    location=FileLocation(str(path)),
                )
            ]
        )
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="MANIFEST_READ_FAILED",
                    rule="manifest.read",
                    severity=Severity.ERROR,
                    message=f"Failed to load {path.name}: {e}",
                    location=FileLocation(str(path)),
                )
            ]
        )
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="MANIFEST_PARSE_FAILED",
                    rule="manifest.parse",
                    severity=Severity.ERROR,
                    message=f"Failed to load {path.name}: {e}",
                    location=FileLocation(str(path)),
                )
            ]
        )
    return parse_manifest(raw, path)


def resolve_bin_dir(config: Config, cwd: Path | None = None) -> Result[Path]:
    try:
        base = cwd or Path.cwd()
        return Result(value=Path(os.path.abspath(base / config.bin_dir)))
    except (OSError, RuntimeError) as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="BIN_DIR_UNRESOLVABLE",
                    rule="bin_dir.resolve",
                    severity=Severity.ERROR,
                    message=f"Failed to resolve binDir {config.bin_dir!r}: {e}",
                )
            ]
        )
