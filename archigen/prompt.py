"""Interactive question flow for ``archigen init``.

Asks, in order: project name, language, whether the project is hosted on a
remote repository (which decides the module path), Redis, and the output
directory.  Answers already supplied on the command line are not asked
again.  The result is a plain mapping of raw values; validation happens when
it is turned into a ``ProjectConfig``.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from rich.prompt import Confirm, Prompt

from archigen.config import PROJECT_NAME_PATTERN, Language
from archigen.utils import print_error, print_warning

DEFAULT_MODULE_HOST = "github.com/yourname"


def ask_project_config(answers: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Collect the missing configuration values from the terminal.

    Args:
        answers: Values already known (``None`` entries count as missing).

    Returns:
        Raw configuration values, including everything in *answers*.

    Raises:
        KeyboardInterrupt: The user aborted a prompt.
    """
    data = {key: value for key, value in (answers or {}).items() if value is not None}

    if "project_name" not in data:
        data["project_name"] = ask_project_name()
    if "language" not in data:
        data["language"] = ask_language()
    if "module_path" not in data:
        data["module_path"] = ask_module_path(data["project_name"])
    if "use_redis" not in data:
        data["use_redis"] = Confirm.ask("Use Redis?", default=True)
    if "output_path" not in data:
        data["output_path"] = ask_output_path()
    return data


def ask_project_name() -> str:
    while True:
        name = Prompt.ask("Project name").strip()
        if PROJECT_NAME_PATTERN.match(name):
            return name
        print_error(
            "Project name must start with a letter and contain only letters, "
            "digits, '_' and '-'"
        )


def ask_language() -> str:
    choice = Prompt.ask(
        "Language",
        choices=[lang.value for lang in Language],
        default=Language.GO.value,
    )
    if choice != Language.GO.value:
        print_warning(f"{choice} support is coming soon; using go")
    return Language.GO.value


def ask_module_path(project_name: str) -> str:
    """Hosted projects get a full module path; local ones reuse the name."""
    hosted = Confirm.ask(
        "Host the project on a remote repository (GitHub, GitLab, ...)?",
        default=True,
    )
    if not hosted:
        return project_name

    while True:
        module_path = Prompt.ask(
            "Module path",
            default=f"{DEFAULT_MODULE_HOST}/{project_name}",
        ).strip()
        if "/" in module_path and not any(ch.isspace() for ch in module_path):
            return module_path
        print_error("Module path should look like github.com/username/project")


def ask_output_path() -> Path:
    custom = Confirm.ask("Use a custom output directory?", default=False)
    if not custom:
        return Path.cwd()

    while True:
        raw = Prompt.ask("Output directory").strip()
        path = Path(raw).expanduser()
        if raw and path.is_absolute():
            return path
        print_error("Enter an absolute path, e.g. /home/user/projects")
