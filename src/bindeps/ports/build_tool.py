from pathlib import Path
from typing import Protocol

from bindeps.domain.binary import Binary


class BuildToolPort(Protocol):
    def build(self, binary: Binary, out_dir: Path) -> None: ...
