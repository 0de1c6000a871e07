from __future__ import annotations

from dataclasses import dataclass, field

from bindeps.domain.diagnostics import BinaryLocation, Diagnostic, Severity
from bindeps.domain.result import Result

LATEST = "latest"
DEFAULT_BIN_DIR = "bin"
VERSION_SEPARATOR = "@"


@dataclass(frozen=True)
class Binary:
    package: str
    version: str = LATEST
    name: str = ""
    toolchain: str = ""

    @property
    def is_latest(self) -> bool:
        return self.version == LATEST

    @property
    def display_version(self) -> str:
        if self.toolchain:
            return f"{self.version} ({self.toolchain})"
        return self.version


def _new_binaries() -> tuple[Binary, ...]:
    return ()


@dataclass(frozen=True)
class Config:
    binaries: tuple[Binary, ...] = field(default_factory=_new_binaries)
    bin_dir: str = DEFAULT_BIN_DIR

    def find(self, name: str) -> Binary | None:
        """Return the first declaration registered under ``name``."""
        for binary in self.binaries:
            if binary.name == name:
                return binary
        return None


def split_package(package: str) -> tuple[str, str]:
    """Split ``path@version`` into ``(path, version)``; version is "" when absent."""
    bare, _, embedded = package.partition(VERSION_SEPARATOR)
    return bare, embedded


def default_name(package: str) -> str:
    return package.rstrip("/").split("/")[-1]


def normalize_binary(
    package: str,
    version: str = "",
    name: str = "",
    toolchain: str = "",
    index: int | None = None,
) -> Result[Binary]:
    bare, embedded = split_package(package.strip())
    label = name or bare or package
    if not bare:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="MANIFEST_INVALID",
                    rule="manifest.binary.package",
                    severity=Severity.ERROR,
                    message=f"Binary entry {label!r} has an empty package",
                    location=BinaryLocation(label, index),
                )
            ]
        )
    if VERSION_SEPARATOR in embedded:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="MANIFEST_INVALID",
                    rule="manifest.binary.package",
                    severity=Severity.ERROR,
                    message=f"Package {package!r} contains more than one '@'",
                    location=BinaryLocation(label, index),
                )
            ]
        )
    if embedded and version and embedded != version:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="BINARY_VERSION_CONFLICT",
                    rule="manifest.binary.version",
                    severity=Severity.ERROR,
                    message=(
                        f"Package {package!r} embeds version {embedded!r} "
                        f"but version is set to {version!r}"
                    ),
                    location=BinaryLocation(label, index),
                    hint="Drop one of the two versions",
                )
            ]
        )
    resolved_name = name or default_name(bare)
    if not resolved_name:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="MANIFEST_INVALID",
                    rule="manifest.binary.name",
                    severity=Severity.ERROR,
                    message=f"Cannot derive a name from package {package!r}",
                    location=BinaryLocation(label, index),
                )
            ]
        )
    return Result(
        value=Binary(
            package=bare,
            version=version or embedded or LATEST,
            name=resolved_name,
            toolchain=toolchain,
        )
    )
