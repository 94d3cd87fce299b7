"""File system operations for output generation."""

from __future__ import annotations

from pathlib import Path


class OutputManager:
    """Writes generated SQL, IR or plan text to disk."""

    def __init__(self, output_path: Path | str) -> None:
        """Initialize the output manager.

        Args:
            output_path: File the generated text is written to
        """
        self.output_path = Path(output_path)

    def create_output_structure(self) -> None:
        """Create the directory that will hold the output file.

        Raises:
            PermissionError: If unable to create directories
        """
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
        except Exception as e:
            raise PermissionError(
                f"Failed to create output directory {self.output_path.parent}: {e}"
            ) from e

    def write_output(self, text: str) -> Path:
        """Write generated text to the output file.

        Args:
            text: SQL script or JSON document to write

        Returns:
            Path where the file was written

        Raises:
            PermissionError: If unable to write file
        """
        self.create_output_structure()
        try:
            with open(self.output_path, "w", encoding="utf-8") as f:
                f.write(text)
        except Exception as e:
            raise PermissionError(
                f"Failed to write output to {self.output_path}: {e}"
            ) from e
        return self.output_path
