"""Structural analysis and test scaffold generation for JavaScript sources."""

from js_test_scaffolder.extractor import extract_structure
from js_test_scaffolder.frameworks import (
    FRAMEWORK_PROFILES,
    FrameworkProfile,
    get_profile,
)
from js_test_scaffolder.models import (
    ClassDeclaration,
    ExportDeclaration,
    FunctionDeclaration,
    MethodDeclaration,
    SourceUnit,
    StructuralModel,
)
from js_test_scaffolder.param_values import placeholder_for
from js_test_scaffolder.paths import get_import_path, get_test_file_path
from js_test_scaffolder.runner import (
    GenerationTally,
    GeneratorOptions,
    SetupError,
    generate_tests,
)
from js_test_scaffolder.test_generator import generate_test_file

__all__ = [
    # Models
    "SourceUnit",
    "FunctionDeclaration",
    "MethodDeclaration",
    "ClassDeclaration",
    "ExportDeclaration",
    "StructuralModel",
    # Frameworks
    "FrameworkProfile",
    "FRAMEWORK_PROFILES",
    "get_profile",
    # Analysis and generation
    "extract_structure",
    "placeholder_for",
    "generate_test_file",
    # Paths
    "get_test_file_path",
    "get_import_path",
    # Runs
    "GeneratorOptions",
    "GenerationTally",
    "SetupError",
    "generate_tests",
]
