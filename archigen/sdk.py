"""Programmatic API for embedding archigen in other tools.

Usage::

    from archigen.sdk import Scaffolder, with_use_redis

    scaffolder = Scaffolder(
        {"project_name": "shopapi", "module_path": "github.com/acme/shopapi"},
        with_use_redis(),
    )
    result = scaffolder.generate()
    print(result.project_path, result.modules)

Options are applied to the raw configuration before it is validated, so an
option can supply a value the base configuration is missing.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from archigen.config import ProjectConfig
from archigen.errors import PreconditionError
from archigen.scaffolder import Pipeline, StepCallback, get_generator_class

# An option edits the raw configuration values in place.
Option = Callable[[dict[str, Any]], None]


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


def without_docker() -> Option:
    """Skip the Dockerfile, docker-compose.yml and .dockerignore."""

    def apply(data: dict[str, Any]) -> None:
        data["generate_docker"] = False

    return apply


def without_user_module() -> Option:
    """Skip the example user domain, infrastructure and API modules."""

    def apply(data: dict[str, Any]) -> None:
        data["generate_user_module"] = False

    return apply


def with_use_redis() -> Option:
    """Enable the Redis cache dependency."""

    def apply(data: dict[str, Any]) -> None:
        data["use_redis"] = True

    return apply


def with_output_path(path: str | Path) -> Option:
    """Generate under *path* instead of the configured output directory."""

    def apply(data: dict[str, Any]) -> None:
        data["output_path"] = path

    return apply


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


class GenerationResult(BaseModel):
    """Outcome of a successful generation run."""

    model_config = ConfigDict(frozen=True)

    project_path: Path
    modules: tuple[str, ...]


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------


class Scaffolder:
    """Validated, ready-to-run generation request.

    Construction applies the options, validates the configuration, refuses an
    existing target directory and resolves the generator for the configured
    language.  Each ``generate()`` call builds a fresh generator (renderer,
    writer and pipeline), so nothing carries over between runs.

    Raises:
        ValidationError: The configuration is missing or malformed.
        PreconditionError: The target directory already exists.
        UnsupportedOptionError: No generator exists for the language.
    """

    def __init__(self, config: ProjectConfig | Mapping[str, Any], *options: Option) -> None:
        if isinstance(config, ProjectConfig):
            changes: dict[str, Any] = {}
            for option in options:
                option(changes)
            self._config = config.with_overrides(**changes)
        else:
            data = dict(config)
            for option in options:
                option(data)
            self._config = ProjectConfig.validate_config(**data)
        self._check_target()
        self._generator_cls = get_generator_class(self._config.language)

    @property
    def config(self) -> ProjectConfig:
        return self._config

    @property
    def project_path(self) -> Path:
        """Directory the project will be generated into."""
        return self._config.project_path

    def generate(self, on_step: StepCallback | None = None) -> GenerationResult:
        """Run every generation step and describe the produced project.

        Args:
            on_step: Progress callback receiving one ``StepEvent`` per step.
                Defaults to printing progress lines on the console.

        Raises:
            PreconditionError: The target directory appeared since construction.
            StepError: A step failed; files from earlier steps stay on disk.
        """
        self._check_target()

        generator = self._generator_cls(self._config)
        pipeline = Pipeline(generator.steps(), on_step=on_step)
        pipeline.run()

        return GenerationResult(
            project_path=self.project_path,
            modules=tuple(generator.modules()),
        )

    def _check_target(self) -> None:
        if self.project_path.exists():
            raise PreconditionError(self.project_path)


def generate_project(
    config: ProjectConfig | Mapping[str, Any],
    *options: Option,
    on_step: StepCallback | None = None,
) -> GenerationResult:
    """Validate *config* and generate the project in one call."""
    return Scaffolder(config, *options).generate(on_step=on_step)
