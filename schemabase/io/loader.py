"""Reading schema documents from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from schemabase.core.config import config
from schemabase.core.exceptions import LoadError
from schemabase.core.schemas import SchemaSource
from schemabase.logger import logger


def load_schema_file(path: Path | str) -> dict[str, Any]:
    """Load a JSON schema document.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed JSON object

    Raises:
        LoadError: If the file cannot be read, is not JSON, or is not an object
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = json.load(f)
    except FileNotFoundError as e:
        raise LoadError(str(path), "file not found") from e
    except json.JSONDecodeError as e:
        raise LoadError(str(path), f"invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise LoadError(str(path), f"invalid UTF-8: {e}") from e
    except OSError as e:
        raise LoadError(str(path), str(e)) from e

    if not isinstance(content, dict):
        raise LoadError(str(path), "schema file is not an object")
    return content


class JSONFileLoader:
    """Document loader used by the resolver for external `$ref` targets."""

    def load(self, path: Path) -> dict[str, Any]:
        logger.debug("Loading external schema document %s", path)
        return load_schema_file(path)


def discover_schema_files(
    directory: Path | str, pattern: str = config.schema_file_pattern
) -> list[Path]:
    """List the schema files of a directory (non-recursive, sorted by name).

    Raises:
        LoadError: If the directory does not exist or holds no matching files
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise LoadError(str(directory), "not a directory")
    files = sorted(p for p in directory.glob(pattern) if p.is_file())
    if not files:
        raise LoadError(str(directory), f"no files matching '{pattern}'")
    return files


def load_schema_sources(
    directory: Path | str, pattern: str = config.schema_file_pattern
) -> list[SchemaSource]:
    """Load every schema file of a directory for a multi-file compile."""
    sources = [
        SchemaSource(path=str(path.resolve()), schema=load_schema_file(path))
        for path in discover_schema_files(directory, pattern)
    ]
    logger.info("Loaded %d schema file(s) from %s", len(sources), directory)
    return sources
