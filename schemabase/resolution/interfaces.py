from pathlib import Path
from typing import Any, Protocol


class IDocumentLoader(Protocol):
    def load(self, path: Path) -> dict[str, Any]: ...
