"""Generate test scaffolds from a structural model."""

import logging
import re

from js_test_scaffolder.frameworks import FrameworkProfile
from js_test_scaffolder.models import (
    ClassDeclaration,
    ExportDeclaration,
    FunctionDeclaration,
    StructuralModel,
)
from js_test_scaffolder.param_values import placeholder_args

logger = logging.getLogger(__name__)

INDENT = "  "


def escape_string(s: str) -> str:
    """Escape a string for use in JavaScript single-quoted strings."""
    return s.replace("\\", "\\\\").replace("'", "\\'")


def placeholder_binding_name(source_name: str) -> str:
    """Build the import binding used when a file has no exports.

    Args:
        source_name: File base name without extension

    Returns:
        Capitalized identifier, e.g. "Helpers" for "helpers"
    """
    name = re.sub(r"[^\w$]", "_", source_name) or "Module"
    if name[0].isdigit():
        name = f"_{name}"
    return name[0].upper() + name[1:]


def resolve_exports(model: StructuralModel) -> list[ExportDeclaration]:
    """Return the exports used for imports and correlation.

    Only the first default export is kept; later ones are reported and
    ignored.
    """
    resolved = []
    default_seen = None
    for export in model.exports:
        if export.is_default:
            if default_seen is not None:
                logger.warning(
                    f"Ignoring duplicate default export {export.name!r} "
                    f"(already have {default_seen.name!r})"
                )
                continue
            default_seen = export
        resolved.append(export)
    return resolved


def generate_import_statement(
    exports: list[ExportDeclaration], import_path: str, source_name: str
) -> str:
    """Generate the import of the module under test.

    Args:
        exports: Resolved exports of the module
        import_path: Module specifier relative to the test file
        source_name: File base name, used when nothing is exported

    Returns:
        A single import statement
    """
    default = next((e for e in exports if e.is_default), None)
    named = [e.name for e in exports if not e.is_default]

    if default and named:
        return f"import {default.name}, {{ {', '.join(named)} }} from '{import_path}';"
    if default:
        return f"import {default.name} from '{import_path}';"
    if named:
        return f"import {{ {', '.join(named)} }} from '{import_path}';"
    return f"import {placeholder_binding_name(source_name)} from '{import_path}';"


def _test_header(profile: FrameworkProfile, title: str, is_async: bool) -> str:
    arrow = "async () =>" if is_async else "() =>"
    return f"{profile.test_function}('{escape_string(title)}', {arrow} {{"


def generate_function_test(func: FunctionDeclaration, profile: FrameworkProfile) -> str:
    """Generate the test group for one function.

    Args:
        func: The function declaration
        profile: Framework profile for syntax and assertions

    Returns:
        Test code as a string
    """
    args = placeholder_args(func.raw_params, profile)
    call = f"{func.name}({args})"
    if func.is_async:
        call = f"await {call}"

    lines = [
        f"{profile.group_function}('{escape_string(func.name)}', () => {{",
        INDENT + _test_header(profile, "should work correctly", func.is_async),
        INDENT * 2 + "// TODO: Add proper test values",
        INDENT * 2 + f"const result = {call};",
        INDENT * 2 + "// TODO: Add appropriate assertions",
        INDENT * 2 + profile.assertion_form("result"),
        INDENT + "});",
        "",
        INDENT + f"// TODO: Add more test cases for {func.name}",
        INDENT + f"// {profile.todo_function}('should handle edge cases');",
        INDENT + f"// {profile.todo_function}('should throw errors for invalid inputs');",
        "});",
        "",
    ]
    return "\n".join(lines)


def generate_class_test(cls: ClassDeclaration, profile: FrameworkProfile) -> str:
    """Generate the test group for one class and its methods.

    Args:
        cls: The class declaration
        profile: Framework profile for syntax and assertions

    Returns:
        Test code as a string
    """
    lines = [
        f"{profile.group_function}('{escape_string(cls.name)}', () => {{",
        INDENT + _test_header(profile, "should create an instance", False),
        INDENT * 2 + "// TODO: Add proper constructor parameters",
        INDENT * 2 + f"const instance = new {cls.name}();",
        INDENT * 2 + profile.instance_assertion("instance", cls.name),
        INDENT + "});",
        "",
    ]

    for method in cls.methods:
        receiver = cls.name if method.is_static else "instance"
        call = f"{receiver}.{method.name}({placeholder_args(method.raw_params, profile)})"
        if method.is_async:
            call = f"await {call}"

        lines.extend(
            [
                INDENT
                + f"{profile.group_function}('#{escape_string(method.name)}', () => {{",
                INDENT * 2
                + _test_header(profile, "should work correctly", method.is_async),
            ]
        )
        if not method.is_static:
            lines.extend(
                [
                    INDENT * 3 + "// TODO: Add proper constructor parameters",
                    INDENT * 3 + f"const instance = new {cls.name}();",
                ]
            )
        lines.extend(
            [
                INDENT * 3 + "// TODO: Add proper test values",
                INDENT * 3 + f"const result = {call};",
                INDENT * 3 + "// TODO: Add appropriate assertions",
                INDENT * 3 + profile.assertion_form("result"),
                INDENT * 2 + "});",
                INDENT + "});",
                "",
            ]
        )

    lines.extend(["});", ""])
    return "\n".join(lines)


def generate_test_file(
    model: StructuralModel,
    profile: FrameworkProfile,
    import_path: str,
    source_name: str,
) -> str:
    """Generate a complete test scaffold for one source file.

    When the file exports anything, only exported functions and classes
    get scaffolds. When it exports nothing, every function and class does.

    Args:
        model: Structural model of the source file
        profile: Framework profile for syntax and assertions
        import_path: Module specifier of the source relative to the test file
        source_name: File base name without extension

    Returns:
        Test file content as a string
    """
    exports = resolve_exports(model)

    groups = []

    if exports:
        for export in exports:
            func = model.find_function(export.name)
            if func:
                groups.append(generate_function_test(func, profile))
                continue
            cls = model.find_class(export.name)
            if cls:
                groups.append(generate_class_test(cls, profile))
                continue
            logger.debug(f"Export {export.name!r} has no matching declaration")
    else:
        logger.info(f"No exports found in {source_name}, generating for all declarations")
        for func in model.functions:
            groups.append(generate_function_test(func, profile))
        for cls in model.classes:
            groups.append(generate_class_test(cls, profile))

    body = "\n".join(groups)
    header = [
        profile.import_form(profile.import_names_for(body)),
        generate_import_statement(exports, import_path, source_name),
        "",
    ]
    logger.info(f"Generated test scaffold with {len(groups)} groups")
    return "\n".join(header + groups)
