"""Command-line interface: ``archigen init``.

Collects the project configuration from flags, an optional JSON config file
and (for anything still missing) interactive prompts, prints a summary, runs
the generator and prints the next steps.

Exit codes: 0 success, 1 generation or configuration error, 2 usage error,
130 aborted prompt.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from archigen import __version__
from archigen.config import ProjectConfig, read_config_values
from archigen.errors import FileWriteError, ScaffoldError
from archigen.prompt import ask_project_config
from archigen.sdk import GenerationResult, Scaffolder, without_docker, without_user_module
from archigen.utils import (
    console,
    print_banner,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    yes_no,
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_ABORTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="archigen",
        description="archigen -- layered DDD project scaffolder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  archigen init\n"
            "  archigen init --name shopapi --module-path github.com/acme/shopapi --yes\n"
            "  archigen init --name shopapi --redis --output ~/projects\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"archigen {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser(
        "init",
        help="Generate a new project skeleton",
        description=(
            "Generate a Go workspace with a BOM module, shared code, an example "
            "user module, an API module, a cmd/api entrypoint and Docker files."
        ),
    )
    init.add_argument("--name", dest="project_name", default=None, help="Project name")
    init.add_argument("--module-path", default=None, help="Module path, e.g. github.com/org/name")
    init.add_argument(
        "--language",
        default=None,
        help="Target language (default: go)",
    )
    init.add_argument(
        "--redis",
        dest="use_redis",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Add the Redis cache dependency",
    )
    init.add_argument(
        "--output", "-o",
        dest="output_path",
        default=None,
        help="Parent directory of the project (default: current directory)",
    )
    init.add_argument("--no-docker", action="store_true", help="Skip the Docker files")
    init.add_argument(
        "--no-user-module", action="store_true", help="Skip the example user module"
    )
    init.add_argument(
        "--config",
        default=None,
        help="JSON file with configuration values (may be partial)",
    )
    init.add_argument(
        "--save-config",
        default=None,
        metavar="FILE",
        help="Write the final configuration to FILE for reuse with --config",
    )
    init.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Never prompt; use defaults for anything not given",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``archigen`` and ``python -m archigen``."""
    args = build_parser().parse_args(argv)

    try:
        return run_init(args)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return EXIT_ERROR
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_warning("Aborted.")
        return EXIT_ABORTED


def run_init(args: argparse.Namespace) -> int:
    print_banner(
        "archigen",
        "Scaffold a layered DDD project\n"
        "Stack: Go + Hertz + Kitex + GORM + PostgreSQL + Docker",
    )

    data = collect_config(args)

    options = []
    if args.no_docker:
        options.append(without_docker())
    if args.no_user_module:
        options.append(without_user_module())
    scaffolder = Scaffolder(data, *options)

    print_config_summary(scaffolder.config)
    console.print("[bold]Generating project skeleton...[/bold]")
    result = scaffolder.generate()

    if args.save_config:
        save_config(scaffolder.config, Path(args.save_config).expanduser())
    print_next_steps(scaffolder.config, result)
    return EXIT_OK


def save_config(config: ProjectConfig, path: Path) -> Path:
    try:
        saved = config.save(path)
    except OSError as exc:
        raise FileWriteError(path, exc.strerror or str(exc)) from exc
    print_success(f"Configuration saved to {saved}")
    return saved


def collect_config(args: argparse.Namespace) -> dict[str, Any]:
    """Merge the config file, the flags and (unless ``--yes``) the prompts."""
    data: dict[str, Any] = {}
    if args.config:
        # Partial files are fine; the merged values are validated later.
        data.update(read_config_values(Path(args.config).expanduser()))

    for key in ("project_name", "module_path", "language", "use_redis", "output_path"):
        value = getattr(args, key)
        if value is not None:
            data[key] = value
    if data.get("output_path"):
        data["output_path"] = Path(data["output_path"]).expanduser()

    if args.yes:
        if "project_name" in data:
            data.setdefault("module_path", data["project_name"])
        data.setdefault("output_path", Path.cwd())
        return data
    return ask_project_config(data)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def print_config_summary(config: ProjectConfig) -> None:
    print_summary_table(
        {
            "Project name": config.project_name,
            "Module path": config.module_path,
            "Project path": str(config.project_path),
            "Language": config.language.value,
            "Database": "PostgreSQL",
            "Cache": yes_no(config.use_redis, "Redis", "none"),
            "Deployment": yes_no(config.generate_docker, "Docker", "none"),
            "User module": yes_no(config.generate_user_module),
        },
        title="Project configuration",
    )


def print_next_steps(config: ProjectConfig, result: GenerationResult) -> None:
    console.print()
    print_success("Project skeleton generated!")
    console.print()
    console.print(f"Project path: [cyan]{result.project_path}[/cyan]")
    console.print(f"Modules: {', '.join(result.modules)}")
    console.print()
    console.print("[bold]Next steps:[/bold]")
    console.print(f"   cd {result.project_path}")
    console.print("   go work sync")
    if config.generate_docker:
        services = "postgres redis" if config.use_redis else "postgres"
        console.print(f"   docker-compose up -d {services}")
    console.print("   go run ./cmd/api/main.go")
    console.print()
    console.print("Check http://localhost:8080/health to confirm the service is up.")
    console.print()


if __name__ == "__main__":
    sys.exit(main())
