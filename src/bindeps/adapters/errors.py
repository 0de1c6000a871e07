from dataclasses import dataclass
from typing import Any


@dataclass
class AdapterError(Exception):
    message: str
    details: dict[str, Any] | None = None
    hint: str | None = None
    cause: Exception | None = None

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class CommandNotFound(AdapterError):
    pass


class CommandFailed(AdapterError):
    pass


class AliasPublishError(AdapterError):
    pass
