"""Custom exception classes for the schemabase compiler."""

from __future__ import annotations


class SchemaGenerationError(Exception):
    """Base exception for schema compilation errors.

    All custom exceptions in schemabase inherit from this class.
    """

    pass


class LoadError(SchemaGenerationError):
    """Error while reading a schema document.

    Raised when a schema file cannot be read, is not valid JSON, or does not
    contain a JSON object at the top level.

    Args:
        path: The path that failed to load
        reason: Human-readable description of the failure
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load schema '{path}': {reason}")


class ResolveError(SchemaGenerationError):
    """Error during JSON reference resolution.

    Raised for malformed JSON pointers, `$ref` targets that are not objects,
    and external references that cannot be resolved.
    """

    pass


class ReferenceResolutionError(ResolveError):
    """Error while loading the document behind an external reference.

    Args:
        ref_path: The reference path that failed to resolve
        cause: The underlying exception that caused the resolution failure
    """

    def __init__(self, ref_path: str, cause: Exception) -> None:
        self.ref_path = ref_path
        self.cause = cause
        super().__init__(f"Failed to resolve reference '{ref_path}': {cause}")


class CircularReferenceError(ResolveError):
    """Error when a local reference cycle is detected.

    Raised when inlining a local `$ref` would re-enter a reference that is
    already being inlined, which would otherwise recurse without bound.

    Args:
        reference_chain: List of references showing the circular dependency path
    """

    def __init__(self, reference_chain: list[str]) -> None:
        self.reference_chain = reference_chain
        super().__init__(f"Circular reference detected: {' -> '.join(reference_chain)}")


class CompileError(SchemaGenerationError):
    """Error while compiling a resolved schema into a table."""

    pass


class EmitError(SchemaGenerationError):
    """Error while emitting DDL for a dialect."""

    pass


class ValidationError(SchemaGenerationError):
    """Error during schema validation.

    Raised when schema validation fails with one or more validation errors.

    Args:
        errors: List of validation error messages
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Schema validation failed: {'; '.join(errors)}")


class ConfigurationError(SchemaGenerationError):
    """Error in application configuration.

    Raised when a configuration value taken from the environment is missing
    or invalid.

    Args:
        variable_name: The name of the configuration variable that caused the error
        message: Optional custom error message
    """

    def __init__(self, variable_name: str, message: str | None = None) -> None:
        self.variable_name = variable_name
        if message is None:
            message = f"Required configuration variable '{variable_name}' is not set"
        super().__init__(message)
