from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Severity(str, Enum):
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


@dataclass(frozen=True)
class Location:
    kind: str


@dataclass(frozen=True)
class FileLocation(Location):
    path: str

    def __init__(self, path: str):
        object.__setattr__(self, "kind", "file")
        object.__setattr__(self, "path", path)


@dataclass(frozen=True)
class BinaryLocation(Location):
    name: str
    index: int | None = None

    def __init__(self, name: str, index: int | None = None):
        object.__setattr__(self, "kind", "binary")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "index", index)


@dataclass(frozen=True)
class Diagnostic:
    code: str
    rule: str
    severity: Severity
    message: str
    location: Location | None = None
    hint: str | None = None
    details: dict[str, Any] | None = None

    def render(self) -> str:
        text = self.message
        if self.severity != Severity.ERROR:
            text = f"{self.severity.value}: {text}"
        if self.hint:
            text = f"{text}\n  hint: {self.hint}"
        return text
