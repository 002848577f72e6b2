"""archigen -- layered DDD project scaffolder."""

__version__ = "0.1.0"

from archigen.config import Language, ProjectConfig  # noqa: E402
from archigen.errors import (  # noqa: E402
    BindingError,
    FileWriteError,
    PathTraversalError,
    PreconditionError,
    ScaffoldError,
    StepError,
    TemplateError,
    TemplateSyntaxError,
    UnsupportedOptionError,
    ValidationError,
)
from archigen.sdk import (  # noqa: E402
    GenerationResult,
    Scaffolder,
    generate_project,
    with_output_path,
    with_use_redis,
    without_docker,
    without_user_module,
)

__all__ = [
    "BindingError",
    "FileWriteError",
    "GenerationResult",
    "Language",
    "PathTraversalError",
    "PreconditionError",
    "ProjectConfig",
    "ScaffoldError",
    "Scaffolder",
    "StepError",
    "TemplateError",
    "TemplateSyntaxError",
    "UnsupportedOptionError",
    "ValidationError",
    "__version__",
    "generate_project",
    "with_output_path",
    "with_use_redis",
    "without_docker",
    "without_user_module",
]
