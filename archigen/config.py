"""archigen configuration.

``ProjectConfig`` is the single record handed from the interactive layer (or
the programmatic API) to a generation run.  It is a frozen Pydantic v2 model:
once validated it cannot change, and overrides produce a fresh, re-validated
copy.
"""

from __future__ import annotations

import json
import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from archigen.errors import UnsupportedOptionError, ValidationError

PROJECT_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")


class Language(str, Enum):
    """Target language of the generated project."""

    GO = "go"
    JAVA = "java"  # reserved, no generator yet


class ProjectConfig(BaseModel):
    """Validated description of the project to scaffold."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_name: str = Field(..., description="Project name (root directory name)")
    module_path: str = Field(..., description="Module path, e.g. github.com/org/project")
    output_path: Path = Field(default=Path("."), description="Parent directory of the project")
    language: Language = Field(default=Language.GO)
    use_redis: bool = Field(default=False, description="Add the Redis cache dependency")
    generate_docker: bool = Field(default=True, description="Emit container files")
    generate_user_module: bool = Field(
        default=True, description="Emit the example user domain/infrastructure/api modules"
    )

    # Fixed for the currently supported stack.
    database: str = Field(default="postgres")
    deployment: str = Field(default="docker")

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("project name must not be empty")
        if not PROJECT_NAME_PATTERN.match(value):
            raise ValueError(
                "project name must start with a letter and contain only "
                "letters, digits, '_' and '-'"
            )
        return value

    @field_validator("module_path")
    @classmethod
    def _check_module_path(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("module path must not be empty")
        if any(ch.isspace() for ch in value):
            raise ValueError("module path must not contain whitespace")
        return value

    @field_validator("output_path", mode="before")
    @classmethod
    def _check_output_path(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("output path must not be empty")
        return value

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def project_path(self) -> Path:
        """Directory the project is generated into."""
        return self.output_path / self.project_name

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def validate_config(cls, **data: Any) -> "ProjectConfig":
        """Build a config, converting Pydantic errors into ``ValidationError``.

        Raises:
            UnsupportedOptionError: ``language`` names no known language.
            ValidationError: Any other field is missing or malformed.
        """
        language = data.get("language")
        if language is not None and not isinstance(language, Language):
            try:
                Language(language)
            except ValueError as exc:
                raise UnsupportedOptionError(
                    str(language), f"Unknown language: {language}"
                ) from exc
        try:
            return cls(**data)
        except PydanticValidationError as exc:
            raise _to_validation_error(exc) from exc

    def with_overrides(self, **changes: Any) -> "ProjectConfig":
        """Return a re-validated copy with *changes* applied."""
        return type(self).validate_config(**{**self.model_dump(), **changes})

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ProjectConfig":
        """Load a previously-saved, complete configuration from JSON."""
        return cls.validate_config(**read_config_values(path))


def read_config_values(path: str | Path) -> dict[str, Any]:
    """Read raw configuration values from a JSON object file.

    The values are not validated, so a partial file is fine; callers merge
    them with other sources before building a ``ProjectConfig``.

    Raises:
        ValidationError: The file cannot be read or is not a JSON object.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValidationError(
            f"Cannot read config file '{file_path}': {exc.strerror or exc}", ["config"]
        ) from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(
            f"Config file '{file_path}' is not valid JSON: {exc.msg} (line {exc.lineno})",
            ["config"],
        ) from exc
    if not isinstance(data, dict):
        raise ValidationError(f"Config file '{file_path}' must contain a JSON object", ["config"])
    return data


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    fields: list[str] = []
    messages: list[str] = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "config"
        fields.append(field)
        msg = str(err.get("msg", "invalid value")).removeprefix("Value error, ")
        messages.append(f"{field}: {msg}")
    return ValidationError("Invalid configuration -- " + "; ".join(messages), fields)
