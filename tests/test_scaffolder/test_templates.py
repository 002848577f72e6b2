"""Tests for the Jinja2 template renderer (archigen.scaffolder.templates).

Covers:
- Placeholder substitution and helper filters/functions
- Conditional blocks
- Error mapping: missing template, syntax errors, unbound names
- Context immutability and renderer isolation
- Template discovery
- The bundled Go templates all parse
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from types import MappingProxyType

import pytest
from hypothesis import given
from hypothesis import strategies as st

from archigen.errors import BindingError, TemplateError, TemplateSyntaxError
from archigen.scaffolder.templates import TemplateRenderer, default_helpers


pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------


class TestRenderString:
    def test_placeholder(self, renderer: TemplateRenderer):
        out = renderer.render_string("module {{ module_path }}/bom", {"module_path": "shopapi"})
        assert out == "module shopapi/bom"

    def test_helper_as_filter(self, renderer: TemplateRenderer):
        ctx = {"name": "user_api", **renderer.helpers}
        assert renderer.render_string("{{ name | pascal_case }}", ctx) == "UserApi"

    def test_helper_as_function(self, renderer: TemplateRenderer):
        assert renderer.render_string("{{ kebab_case('UserApi') }}", {}) == "user-api"

    @pytest.mark.parametrize(
        ("helper", "expected"),
        [
            ("pascal_case", "UserName"),
            ("camel_case", "userName"),
            ("snake_case", "user_name"),
            ("kebab_case", "user-name"),
            ("upper", "USER_NAME"),
            ("lower", "user_name"),
        ],
    )
    def test_every_helper_registered(self, renderer: TemplateRenderer, helper: str, expected: str):
        out = renderer.render_string(f"{{{{ value | {helper} }}}}", {"value": "user_name"})
        assert out == expected

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("{{ use_redis | upper }}", "TRUE"),
            ("{{ 5 | lower }}", "5"),
            ("{{ port | snake_case }}", "8080"),
            ("{{ pascal_case(use_redis) }}", "True"),
        ],
    )
    def test_helpers_accept_non_strings(self, renderer: TemplateRenderer, source: str, expected: str):
        assert renderer.render_string(source, {"use_redis": True, "port": 8080}) == expected

    def test_conditional_block_true(self, renderer: TemplateRenderer):
        source = "a\n{% if use_redis %}\nredis\n{% endif %}\nb\n"
        assert renderer.render_string(source, {"use_redis": True}) == "a\nredis\nb\n"

    def test_conditional_block_false(self, renderer: TemplateRenderer):
        source = "a\n{% if use_redis %}\nredis\n{% endif %}\nb\n"
        assert renderer.render_string(source, {"use_redis": False}) == "a\nb\n"

    def test_trailing_newline_kept(self, renderer: TemplateRenderer):
        assert renderer.render_string("x\n", {}) == "x\n"

    def test_no_html_escaping(self, renderer: TemplateRenderer):
        assert renderer.render_string("{{ v }}", {"v": "<a & b>"}) == "<a & b>"

    @given(text=st.text(alphabet=st.characters(exclude_characters="{}#\r"), max_size=200))
    def test_text_without_markup_is_unchanged(self, text: str):
        assert TemplateRenderer().render_string(text, {}) == text


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_unbound_name_raises_binding_error(self, renderer: TemplateRenderer):
        with pytest.raises(BindingError) as exc_info:
            renderer.render_string("{{ missing }}", {}, name="go.mod.j2")
        assert exc_info.value.template_name == "go.mod.j2"
        assert "missing" in str(exc_info.value)

    def test_unbound_name_in_false_branch_is_fine(self, renderer: TemplateRenderer):
        out = renderer.render_string("{% if flag %}{{ missing }}{% endif %}ok", {"flag": False})
        assert out == "ok"

    def test_syntax_error(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            renderer.render_string("line1\n{% if x %}\nno end", {"x": True}, name="bad.j2")
        err = exc_info.value
        assert err.template_name == "bad.j2"
        assert err.lineno is not None
        assert "bad.j2" in str(err)

    def test_unclosed_placeholder(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateSyntaxError):
            renderer.render_string("{{ module_path ", {"module_path": "x"})

    def test_syntax_error_is_template_error(self):
        assert issubclass(TemplateSyntaxError, TemplateError)
        assert issubclass(BindingError, TemplateError)

    def test_missing_template(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateError) as exc_info:
            renderer.render("go/does/not/exist.j2", {})
        assert "not found" in str(exc_info.value)

    def test_missing_include_raises_template_error(
        self, template_dir: Callable[[dict[str, str]], Path]
    ):
        root = template_dir({"a.j2": "head\n{% include 'missing.j2' %}\n"})
        with pytest.raises(TemplateError) as exc_info:
            TemplateRenderer(root).render("a.j2", {})
        assert exc_info.value.template_name == "a.j2"
        assert "missing.j2" in str(exc_info.value)

    def test_unknown_filter_in_taken_branch(self, renderer: TemplateRenderer):
        # Unknown filters inside a conditional only fail when the branch runs.
        source = "{% if flag %}{{ 1 | no_such_filter }}{% endif %}"
        assert renderer.render_string(source, {"flag": False}) == ""
        with pytest.raises(TemplateError):
            renderer.render_string(source, {"flag": True})

    def test_file_syntax_error(self, template_dir: Callable[[dict[str, str]], Path]):
        root = template_dir({"broken.j2": "{% if x %}\n"})
        with pytest.raises(TemplateSyntaxError) as exc_info:
            TemplateRenderer(root).render("broken.j2", {"x": True})
        assert exc_info.value.template_name == "broken.j2"


# ---------------------------------------------------------------------------
# Context & isolation
# ---------------------------------------------------------------------------


class TestContext:
    def test_read_only_context_accepted(self, renderer: TemplateRenderer):
        ctx = MappingProxyType({"project_name": "shopapi"})
        assert renderer.render_string("{{ project_name }}", ctx) == "shopapi"

    def test_repeated_renders_identical(self, renderer: TemplateRenderer):
        ctx = {"module_path": "github.com/acme/shopapi", "use_redis": True}
        source = "module {{ module_path }}/bom\n{% if use_redis %}\nredis\n{% endif %}\n"
        first = renderer.render_string(source, ctx)
        assert all(renderer.render_string(source, ctx) == first for _ in range(3))
        assert TemplateRenderer().render_string(source, ctx) == first

    def test_context_not_mutated(self, renderer: TemplateRenderer):
        ctx = {"project_name": "shopapi"}
        renderer.render_string("{% set project_name = 'other' %}{{ project_name }}", ctx)
        assert ctx == {"project_name": "shopapi"}

    def test_helpers_table_is_read_only(self):
        helpers = default_helpers()
        with pytest.raises(TypeError):
            helpers["shout"] = str.upper  # type: ignore[index]

    def test_renderers_do_not_share_environment(self):
        first, second = TemplateRenderer(), TemplateRenderer()
        first.env.filters["shout"] = str.upper
        assert "shout" not in second.env.filters


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestListTemplates:
    def test_lists_sorted_j2_files(self, template_dir: Callable[[dict[str, str]], Path]):
        root = template_dir({"b/two.go.j2": "", "a/one.go.j2": "", "a/notes.txt": ""})
        assert TemplateRenderer(root).list_templates() == ["a/one.go.j2", "b/two.go.j2"]

    def test_prefix(self, template_dir: Callable[[dict[str, str]], Path]):
        root = template_dir({"b/two.go.j2": "", "a/one.go.j2": ""})
        assert TemplateRenderer(root).list_templates("a") == ["a/one.go.j2"]

    def test_missing_prefix(self, renderer: TemplateRenderer):
        assert renderer.list_templates("nope") == []

    def test_bundled_go_templates_compile(self, renderer: TemplateRenderer):
        names = renderer.list_templates("go")
        assert "go/bom/go.mod.j2" in names
        for name in names:
            # get_template parses the source and raises on malformed syntax.
            renderer.env.get_template(name)
