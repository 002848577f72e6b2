"""Go project generator.

Produces a Go workspace with a BOM dependency module, a shared utilities
module, an example ``user`` bounded context (domain + infrastructure), an API
module and a ``cmd/api`` entrypoint, on Hertz + GORM + PostgreSQL, with
optional Redis and Docker files.  Template payloads live under
``templates/go/`` and mirror the output tree.
"""

from __future__ import annotations

from typing import Any

from archigen.config import Language

from .generator import ProjectGenerator, register_generator
from .pipeline import Step

GO_VERSION = "1.24.11"

# Output directories per module; created up front so empty packages exist.
BASE_DIRECTORIES: tuple[str, ...] = (
    "bom",
    "share/errors",
    "share/utils",
    "share/types",
    "share/middleware",
    "share/repository/gorm",
    "api",
    "cmd/api",
)

USER_DIRECTORIES: tuple[str, ...] = (
    "user/domain/entity",
    "user/domain/enum",
    "user/domain/errors",
    "user/domain/repository",
    "user/domain/service",
    "user/domain/valueobject",
    "user/domain/event",
    "user/infrastructure/entity",
    "user/infrastructure/converter",
    "user/infrastructure/repository",
    "api/user-api/dto",
    "api/user-api/service",
    "api/user-api/http",
)


@register_generator
class GoProjectGenerator(ProjectGenerator):
    """Multi-module Go workspace following a layered DDD layout."""

    language = Language.GO
    stack = "go"

    def context_values(self) -> dict[str, Any]:
        name = self.config.project_name
        return {
            "go_version": GO_VERSION,
            "db_driver": "gorm.io/driver/postgres",
            "db_dsn_example": (
                f"host=localhost user=postgres password=postgres dbname={name} "
                "port=5432 sslmode=disable"
            ),
        }

    def modules(self) -> list[str]:
        modules = ["bom", "share"]
        if self.config.generate_user_module:
            modules.append("user")
        modules.extend(["api", "cmd"])
        return modules

    def directories(self) -> list[str]:
        dirs = list(BASE_DIRECTORIES)
        if self.config.use_redis:
            dirs.append("share/cache")
        if self.config.generate_user_module:
            dirs.extend(USER_DIRECTORIES)
        return dirs

    # -- Steps -------------------------------------------------------------

    def steps(self) -> list[Step]:
        cfg = self.config
        steps = [
            Step("Create project directories", self._create_project_dirs),
            Step("Generate go.work", lambda: self.render_file("root/go.work.j2", "go.work")),
            Step("Generate .gitignore", lambda: self.render_file("root/gitignore.j2", ".gitignore")),
            Step("Generate Makefile", lambda: self.render_file("root/Makefile.j2", "Makefile")),
            Step("Generate bom module", self._generate_bom),
            Step("Generate share module", self._generate_share),
        ]
        if cfg.generate_user_module:
            steps.extend([
                Step("Generate user/domain module", self._generate_user_domain),
                Step("Generate user/infrastructure module", self._generate_user_infra),
                Step("Generate user aggregate module", self._generate_user_module),
                Step("Generate api/user-api module", self._generate_user_api),
            ])
        steps.extend([
            Step("Generate api aggregate module", self._generate_api_module),
            Step("Generate cmd/api entrypoint", self._generate_cmd),
        ])
        if cfg.generate_docker:
            steps.extend([
                Step("Generate Dockerfile", lambda: self.render_file("root/Dockerfile.j2", "Dockerfile")),
                Step(
                    "Generate docker-compose.yml",
                    lambda: self.render_file("root/docker-compose.yml.j2", "docker-compose.yml"),
                ),
                Step(
                    "Generate .dockerignore",
                    lambda: self.render_file("root/dockerignore.j2", ".dockerignore"),
                ),
            ])
        steps.append(
            Step("Generate README.md", lambda: self.render_file("root/README.md.j2", "README.md"))
        )
        return steps

    def _create_project_dirs(self) -> None:
        self.create_directories(self.directories())

    def _generate_bom(self) -> None:
        self.render_tree("bom", "bom")

    def _generate_share(self) -> None:
        skip = [] if self.config.use_redis else ["cache/"]
        self.render_tree("share", "share", skip_patterns=skip)

    def _generate_user_domain(self) -> None:
        self.render_tree("user/domain", "user/domain")

    def _generate_user_infra(self) -> None:
        self.render_tree("user/infrastructure", "user/infrastructure")

    def _generate_user_module(self) -> None:
        self.render_file("user/go.mod.j2", "user/go.mod")

    def _generate_user_api(self) -> None:
        self.render_tree("api/user-api", "api/user-api")

    def _generate_api_module(self) -> None:
        self.render_file("api/go.mod.j2", "api/go.mod")

    def _generate_cmd(self) -> None:
        self.render_tree("cmd/api", "cmd/api")
