"""Configuration for the schemabase compiler."""

from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError

ENV_PREFIX = "SCHEMABASE_"


class JSONSchemaFieldsConfig(BaseModel):
    """Configuration for JSON Schema field names."""

    ref_field: str = "$ref"
    defs_field: str = "$defs"
    definitions_field: str = "definitions"
    id_field: str = "$id"
    enum_field: str = "enum"
    extension_field: str = "x-schemabase"


class ExitCodesConfig(BaseModel):
    """Configuration for exit codes."""

    success: int = 0
    error_file_not_found: int = 1
    error_invalid_schema: int = 2
    error_circular_reference: int = 3
    error_validation_failed: int = 4
    error_file_system: int = 5


class Config(BaseSettings):
    """Main configuration class for the schemabase compiler."""

    schema_file_pattern: str = Field(
        default="*.json", description="Glob used to discover schema files in a directory"
    )
    output_format: Literal["sql", "ir", "plan"] = Field(
        default="sql", description="Default output format of the generate command"
    )
    dialect: Literal["postgres"] = Field(
        default="postgres", description="Default SQL dialect"
    )
    json_indent: int = Field(
        default=2, ge=0, description="Indentation used for ir/plan JSON output"
    )

    # Nested configurations
    json_schema_fields: JSONSchemaFieldsConfig = Field(
        default_factory=JSONSchemaFieldsConfig
    )
    exit_codes: ExitCodesConfig = Field(default_factory=ExitCodesConfig)

    model_config = {
        "env_prefix": ENV_PREFIX,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def __init__(self, **data):
        """Initialize config, reporting bad environment values as ConfigurationError."""
        try:
            super().__init__(**data)
        except ValidationError as e:
            error = e.errors()[0]
            field_name = error["loc"][0] if error["loc"] else "unknown"
            env_var_name = f"{ENV_PREFIX}{field_name}".upper()
            raise ConfigurationError(
                variable_name=env_var_name,
                message=(
                    f"Invalid value for configuration variable '{env_var_name}': "
                    f"{error['msg']}"
                ),
            ) from e


# At application import time, populate os.environ from .env (if present).
load_dotenv()
config = Config()
