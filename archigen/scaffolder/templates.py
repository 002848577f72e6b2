"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``archigen/scaffolder/templates/`` directory and renders them against a
read-only binding context.  Supports file-based rendering, string-based
rendering for inline template content, and template discovery.

Every renderer owns its own ``Environment`` and helper table, so two
generation runs never share registered state.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from archigen.errors import BindingError, TemplateError, TemplateSyntaxError

from .casing import to_camel_case, to_kebab_case, to_pascal_case, to_snake_case


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

TEMPLATE_SUFFIX = ".j2"


def _text_helper(func: Callable[[str], str]) -> Callable[[Any], str]:
    """Wrap *func* so non-string values (bools, ints) are stringified first."""

    @functools.wraps(func)
    def helper(value: Any) -> str:
        return func(str(value))

    return helper


def default_helpers() -> Mapping[str, Callable[[Any], str]]:
    """Return the fixed, read-only table of string helpers."""
    return MappingProxyType(
        {
            "pascal_case": _text_helper(to_pascal_case),
            "camel_case": _text_helper(to_camel_case),
            "snake_case": _text_helper(to_snake_case),
            "kebab_case": _text_helper(to_kebab_case),
            "upper": _text_helper(str.upper),
            "lower": _text_helper(str.lower),
        }
    )


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Templates reference context fields with ``{{ project_name }}``, apply
    helpers either as filters (``{{ project_name | pascal_case }}``) or as
    calls (``{{ pascal_case(project_name) }}``), and guard optional blocks
    with ``{% if use_redis %}...{% endif %}``.  Referencing a name that is
    not bound raises ``BindingError``; malformed syntax raises
    ``TemplateSyntaxError``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.helpers = default_helpers()
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters.update(self.helpers)
        self.env.globals.update(self.helpers)

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: Mapping[str, Any]) -> str:
        """Render a template file with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"go/bom/go.mod.j2"``).
            context: Read-only mapping of names visible inside the template.

        Returns:
            The rendered template content as a string.
        """
        try:
            template = self.env.get_template(template_path)
        except jinja2.TemplateNotFound as exc:
            raise TemplateError("template not found", template_path) from exc
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateSyntaxError(exc.message or str(exc), template_path, exc.lineno) from exc
        return self._render(template, context, template_path)

    def render_string(
        self,
        template_string: str,
        context: Mapping[str, Any],
        name: str = "<string>",
    ) -> str:
        """Render an inline template string with the provided context.

        Useful for rendering small template fragments that are not stored as
        files.  *name* is only used to label errors.
        """
        try:
            template = self.env.from_string(template_string)
        except jinja2.TemplateSyntaxError as exc:
            raise TemplateSyntaxError(exc.message or str(exc), name, exc.lineno) from exc
        return self._render(template, context, name)

    def _render(
        self, template: jinja2.Template, context: Mapping[str, Any], name: str
    ) -> str:
        try:
            return template.render(dict(context))
        except jinja2.UndefinedError as exc:
            raise BindingError(exc.message or str(exc), name) from exc
        except jinja2.TemplateSyntaxError as exc:
            # Raised lazily for includes/imports resolved at render time.
            raise TemplateSyntaxError(exc.message or str(exc), name, exc.lineno) from exc
        except jinja2.TemplateNotFound as exc:
            raise TemplateError(f"included template not found: {exc.name}", name) from exc
        except jinja2.TemplateError as exc:
            raise TemplateError(exc.message or str(exc), name) from exc

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob(f"*{TEMPLATE_SUFFIX}")
        )
