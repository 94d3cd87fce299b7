"""Tests for the OutputManager class."""

from unittest.mock import patch

import pytest

from schemabase.io.output_manager import OutputManager


class TestOutputManager:
    """Test suite for OutputManager class."""

    def test_init_with_string_path(self, tmp_path):
        """Test OutputManager accepts a plain string path."""
        manager = OutputManager(str(tmp_path / "out.sql"))
        assert manager.output_path == tmp_path / "out.sql"

    def test_create_output_structure_success(self, tmp_path):
        """Test successful creation of the parent directories."""
        manager = OutputManager(tmp_path / "build" / "db" / "init.sql")

        manager.create_output_structure()

        assert (tmp_path / "build" / "db").is_dir()

    def test_write_output(self, tmp_path):
        """Test writing text to the output file."""
        target = tmp_path / "build" / "init.sql"
        manager = OutputManager(target)

        written = manager.write_output("CREATE TABLE users (\n  id UUID\n);\n")

        assert written == target
        assert target.read_text(encoding="utf-8").startswith("CREATE TABLE users")

    def test_write_output_overwrites(self, tmp_path):
        target = tmp_path / "init.sql"
        target.write_text("old", encoding="utf-8")
        OutputManager(target).write_output("new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_create_output_structure_permission_error(self, tmp_path):
        """Test that directory failures surface as PermissionError."""
        manager = OutputManager(tmp_path / "build" / "init.sql")
        with patch("pathlib.Path.mkdir", side_effect=OSError("Permission denied")):
            with pytest.raises(PermissionError, match="Failed to create output"):
                manager.create_output_structure()

    def test_write_output_permission_error(self, tmp_path):
        """Test that write failures surface as PermissionError."""
        manager = OutputManager(tmp_path / "init.sql")
        with patch("builtins.open", side_effect=OSError("Permission denied")):
            with pytest.raises(PermissionError, match="Failed to write output"):
                manager.write_output("x")
