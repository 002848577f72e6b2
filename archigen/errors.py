"""Error taxonomy for the archigen scaffolder.

Every failure the generator can surface to a caller derives from
``ScaffoldError`` so the CLI (and SDK users) can catch a single type.  The
pipeline wraps step failures in ``StepError`` so the failing step label is
always part of the message.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised by archigen."""


class ValidationError(ScaffoldError):
    """A required configuration field is missing or malformed."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        self.fields = fields or []
        super().__init__(message)


class PreconditionError(ScaffoldError):
    """The target project directory already exists."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Directory '{self.path}' already exists")


class UnsupportedOptionError(ScaffoldError):
    """A requested language or variant has no generator implementation."""

    def __init__(self, option: str, message: str | None = None) -> None:
        self.option = option
        super().__init__(message or f"Unsupported option: {option}")


class TemplateError(ScaffoldError):
    """Base class for template rendering failures."""

    def __init__(self, message: str, template_name: str | None = None) -> None:
        self.template_name = template_name
        if template_name:
            message = f"{template_name}: {message}"
        super().__init__(message)


class TemplateSyntaxError(TemplateError):
    """The template source has malformed placeholder or block syntax."""

    def __init__(
        self, message: str, template_name: str | None = None, lineno: int | None = None
    ) -> None:
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message, template_name)


class BindingError(TemplateError):
    """The template references a name that is not in the binding context."""


class PathTraversalError(ScaffoldError):
    """A relative output path would escape the project root."""

    def __init__(self, path: str | Path, root: str | Path) -> None:
        self.path = str(path)
        self.root = Path(root)
        super().__init__(f"Path '{self.path}' escapes project root '{self.root}'")


class FileWriteError(ScaffoldError):
    """Creating a directory or writing a file failed at the OS level."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot write '{self.path}': {reason}")


class StepError(ScaffoldError):
    """A pipeline step failed; carries the step position, label and cause."""

    def __init__(self, index: int, label: str, cause: BaseException) -> None:
        self.index = index
        self.label = label
        self.cause = cause
        super().__init__(f"Step {index + 1} ({label}) failed: {cause}")
