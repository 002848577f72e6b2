"""Project scaffolding: casing helpers, rendering, file emission and the
generation pipeline, plus the per-stack generators.

Importing this package registers every built-in stack generator.
"""

from .casing import to_camel_case, to_kebab_case, to_pascal_case, to_snake_case
from .generator import GENERATORS, ProjectGenerator, get_generator_class, register_generator
from .go_gen import GoProjectGenerator
from .pipeline import (
    Pipeline,
    PipelineState,
    Step,
    StepCallback,
    StepEvent,
    StepStatus,
    console_reporter,
)
from .templates import TemplateRenderer
from .writer import FileWriter

__all__ = [
    "FileWriter",
    "GENERATORS",
    "GoProjectGenerator",
    "Pipeline",
    "PipelineState",
    "ProjectGenerator",
    "Step",
    "StepCallback",
    "StepEvent",
    "StepStatus",
    "TemplateRenderer",
    "console_reporter",
    "get_generator_class",
    "register_generator",
    "to_camel_case",
    "to_kebab_case",
    "to_pascal_case",
    "to_snake_case",
]
