"""Main class that orchestrates loading, compiling and emitting."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Literal

import click

from schemabase.compilation.compiler import (
    compile_json_schema_to_ir,
    compile_json_schemas_to_ir,
)
from schemabase.core.config import config
from schemabase.core.exceptions import (
    CircularReferenceError,
    LoadError,
    SchemaGenerationError,
    ValidationError,
)
from schemabase.core.schemas import RelationalIR, SchemaSource
from schemabase.emitters.base import get_emitter
from schemabase.io.loader import load_schema_file, load_schema_sources
from schemabase.io.output_manager import OutputManager
from schemabase.logger import logger, setup_logger
from schemabase.plan.builder import build_plan
from schemabase.validation.schema_validator import SchemaValidator

OutputFormat = Literal["sql", "ir", "plan"]


class SchemaGenerator:
    """Main class that orchestrates the generation process.

    A file path compiles one schema on its own. A directory path compiles
    every schema file in it together, so `$ref`s between the files become
    foreign keys.
    """

    def __init__(
        self,
        schema_path: Path | str,
        output_format: OutputFormat = config.output_format,
        dialect: str = config.dialect,
        out_path: Path | str | None = None,
        log_level: str | None = None,
    ) -> None:
        """Initialize the schema generator.

        Args:
            schema_path: Schema file, or directory of schema files
            output_format: One of `sql`, `ir` or `plan`
            dialect: SQL dialect used for `sql` output
            out_path: File to write the output to, stdout when omitted
            log_level: Console log level override
        """
        self.schema_path = Path(schema_path)
        self.output_format = output_format
        self.dialect = dialect
        self.output_manager = OutputManager(out_path) if out_path is not None else None
        self.log_level = log_level
        self.validator = SchemaValidator()

    def run(self) -> None:
        """Run the generation process and deliver its output.

        Raises:
            SystemExit: With a non-zero code if any error occurs
        """
        exit_codes = config.exit_codes
        try:
            setup_logger(self.log_level)
            text = self.generate_text()
            if self.output_manager is None:
                click.echo(text, nl=False)
            else:
                path = self.output_manager.write_output(text)
                click.echo(f"Wrote {path}")
        except ValidationError as e:
            self._fail(e, exit_codes.error_validation_failed)
        except CircularReferenceError as e:
            self._fail(e, exit_codes.error_circular_reference)
        except LoadError as e:
            self._fail(e, exit_codes.error_file_not_found)
        except SchemaGenerationError as e:
            self._fail(e, exit_codes.error_invalid_schema)
        except PermissionError as e:
            self._fail(e, exit_codes.error_file_system)
        except Exception:
            logger.exception("Unexpected error occurred")
            sys.exit(exit_codes.error_file_system)

    @staticmethod
    def _fail(error: Exception, code: int) -> None:
        logger.error("Error: %s", error)
        logger.debug("Failure details", exc_info=error)
        sys.exit(code)

    def run_for_testing(self) -> str:
        """Run the generation process, raising instead of exiting.

        Returns:
            The generated text (also written to the output file, if any)

        Raises:
            SchemaGenerationError: If any stage of the compile fails
        """
        text = self.generate_text()
        if self.output_manager is not None:
            self.output_manager.write_output(text)
        return text

    def generate_text(self) -> str:
        """Compile the input and render it in the configured output format."""
        ir = self.compile_ir()
        if self.output_format == "ir":
            return ir.to_json(indent=config.json_indent) + "\n"
        if self.output_format == "plan":
            return build_plan(ir).to_json(indent=config.json_indent) + "\n"
        return get_emitter(self.dialect).emit(ir)

    def compile_ir(self) -> RelationalIR:
        """Load, validate and compile the input into the relational IR."""
        if self.schema_path.is_dir():
            logger.info("Compiling schema directory %s", self.schema_path)
            sources = load_schema_sources(self.schema_path)
            for source in sources:
                self.validate(source)
            return compile_json_schemas_to_ir(sources)

        logger.info("Compiling schema file %s", self.schema_path)
        source = SchemaSource(
            path=str(self.schema_path), schema=load_schema_file(self.schema_path)
        )
        self.validate(source)
        return compile_json_schema_to_ir(source.schema, source.path)

    def validate(self, source: SchemaSource) -> None:
        """Validate one input document.

        Raises:
            ValidationError: If the document fails structural validation
        """
        result = self.validator.validate_schema(source.schema)
        for warning in result.warnings:
            logger.info("%s: %s", source.path, warning)
        if not result.is_valid:
            raise ValidationError([f"{source.path}: {e}" for e in result.errors])
