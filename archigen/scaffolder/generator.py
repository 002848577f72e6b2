"""Stack-independent generator capability.

A ``ProjectGenerator`` turns one validated ``ProjectConfig`` into an ordered
list of pipeline steps for a single target stack.  Concrete stacks register
themselves with ``register_generator`` and are looked up by language through
``get_generator_class``; adding a stack means adding a subclass and a
template directory, never branching inside shared code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any, ClassVar

from archigen.config import Language, ProjectConfig
from archigen.errors import UnsupportedOptionError

from .pipeline import Step
from .templates import TEMPLATE_SUFFIX, TemplateRenderer
from .writer import FileWriter


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

GENERATORS: dict[Language, type["ProjectGenerator"]] = {}


def register_generator(cls: type["ProjectGenerator"]) -> type["ProjectGenerator"]:
    """Class decorator: make *cls* the generator for ``cls.language``."""
    GENERATORS[cls.language] = cls
    return cls


def get_generator_class(language: Language | str) -> type["ProjectGenerator"]:
    """Return the generator registered for *language*.

    Raises:
        UnsupportedOptionError: No generator exists for the language (e.g. the
            reserved ``java`` placeholder).
    """
    try:
        key = Language(language)
    except ValueError as exc:
        raise UnsupportedOptionError(str(language), f"Unknown language: {language}") from exc
    cls = GENERATORS.get(key)
    if cls is None:
        raise UnsupportedOptionError(
            key.value, f"Language '{key.value}' is not supported yet"
        )
    return cls


# ---------------------------------------------------------------------------
# Base generator
# ---------------------------------------------------------------------------


class ProjectGenerator(ABC):
    """Builds the generation steps for one target stack.

    Subclasses set ``language`` and ``stack`` (the template subdirectory) and
    implement ``steps`` and ``modules``.  The renderer and writer are created
    per instance so separate runs never share state.
    """

    language: ClassVar[Language]
    stack: ClassVar[str]

    def __init__(
        self,
        config: ProjectConfig,
        renderer: TemplateRenderer | None = None,
        writer: FileWriter | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.writer = writer or FileWriter(config.project_path)
        self._context: Mapping[str, Any] | None = None

    # -- Abstract surface --------------------------------------------------

    @abstractmethod
    def steps(self) -> list[Step]:
        """Return the ordered generation steps."""

    @abstractmethod
    def modules(self) -> list[str]:
        """Return the logical module names this configuration produces."""

    def context_values(self) -> dict[str, Any]:
        """Stack-specific bindings added on top of the common ones."""
        return {}

    # -- Binding context ---------------------------------------------------

    @property
    def context(self) -> Mapping[str, Any]:
        """The read-only template binding context, built once per generator."""
        if self._context is None:
            self._context = self._build_context()
        return self._context

    def _build_context(self) -> Mapping[str, Any]:
        cfg = self.config
        values: dict[str, Any] = {
            "project_name": cfg.project_name,
            "module_path": cfg.module_path,
            "language": cfg.language.value,
            "use_redis": cfg.use_redis,
            "generate_docker": cfg.generate_docker,
            "generate_user_module": cfg.generate_user_module,
            "database": cfg.database,
            "deployment": cfg.deployment,
        }
        values.update(self.context_values())
        return MappingProxyType({**self.renderer.helpers, **values})

    # -- Rendering helpers -------------------------------------------------

    def render_file(self, template: str, output: str) -> Path:
        """Render ``<stack>/<template>`` and write it to *output*."""
        content = self.renderer.render(f"{self.stack}/{template}", self.context)
        return self.writer.write(output, content)

    def render_tree(
        self,
        template_prefix: str,
        output_dir: str,
        *,
        skip_patterns: Sequence[str] = (),
    ) -> list[Path]:
        """Render every ``*.j2`` file under *template_prefix* into *output_dir*.

        The directory structure is preserved: ``go/bom/bom.go.j2`` rendered
        with ``template_prefix="bom"`` and ``output_dir="bom"`` writes to
        ``bom/bom.go``.  Subdirectories named in *skip_patterns* (matched as
        path substrings) are left out.
        """
        full_prefix = f"{self.stack}/{template_prefix}".rstrip("/")
        written: list[Path] = []
        for template_key in self.renderer.list_templates(full_prefix):
            rel = template_key[len(full_prefix) + 1 :]
            if any(pat in rel for pat in skip_patterns):
                continue
            output_name = rel[: -len(TEMPLATE_SUFFIX)]
            content = self.renderer.render(template_key, self.context)
            written.append(self.writer.write(f"{output_dir}/{output_name}", content))
        return written

    def create_directories(self, directories: Sequence[str]) -> None:
        for directory in directories:
            self.writer.ensure_dir(directory)
