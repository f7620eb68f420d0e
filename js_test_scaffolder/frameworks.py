"""Test framework profiles: import syntax and assertion idioms."""

from dataclasses import dataclass


class UnknownFrameworkError(ValueError):
    """Requested framework id is not in the profile table."""

    def __init__(self, framework: str):
        super().__init__(
            f"Unknown framework: {framework} "
            f"(expected one of: {', '.join(framework_ids())})"
        )
        self.framework = framework


@dataclass(frozen=True)
class FrameworkProfile:
    """How generated tests import the framework and assert results.

    Attributes:
        id: Profile identifier used on the command line
        runner_module: Module providing the grouping and test functions
        import_names: Identifiers the generated file imports
        group_function: Call that opens a named group of tests
        test_function: Call that declares a single test case
        todo_function: Call used in the commented-out placeholder cases
        defined_assertion: Template asserting a value exists ({value})
        instance_assertion_template: Template asserting instance-of ({value}, {cls})
        mock_function: Expression producing a no-op callable
        assertion_module: Separate module providing `expect`, if any
        mock_import: Identifier the mock function needs imported, if any
    """

    id: str
    runner_module: str
    import_names: tuple[str, ...]
    group_function: str
    test_function: str
    todo_function: str
    defined_assertion: str
    instance_assertion_template: str
    mock_function: str
    assertion_module: str | None = None
    mock_import: str | None = None

    def import_names_for(self, body: str) -> list[str]:
        """Return the identifiers a generated test body needs imported."""
        names = list(self.import_names)
        if self.mock_import and self.mock_function in body:
            names.append(self.mock_import)
        return names

    def import_form(self, target_names: tuple[str, ...] | list[str] | None = None) -> str:
        """Render the framework import statement(s).

        Args:
            target_names: Identifiers to import (defaults to the profile's own)

        Returns:
            One import line, or two when assertions come from another module
        """
        names = list(target_names if target_names is not None else self.import_names)
        if self.assertion_module is None:
            return f"import {{ {', '.join(names)} }} from '{self.runner_module}';"

        runner_names = [n for n in names if n != "expect"]
        lines = [f"import {{ {', '.join(runner_names)} }} from '{self.runner_module}';"]
        if "expect" in names:
            lines.append(f"import {{ expect }} from '{self.assertion_module}';")
        return "\n".join(lines)

    def assertion_form(self, result_expr: str) -> str:
        """Render the assertion that a result is defined."""
        return self.defined_assertion.format(value=result_expr)

    def instance_assertion(self, instance_expr: str, class_name: str) -> str:
        """Render the assertion that a value is an instance of a class."""
        return self.instance_assertion_template.format(
            value=instance_expr, cls=class_name
        )


# Ordered: the first profile is the default
FRAMEWORK_PROFILES: tuple[FrameworkProfile, ...] = (
    FrameworkProfile(
        id="jest",
        runner_module="@jest/globals",
        import_names=("describe", "test", "expect"),
        group_function="describe",
        test_function="test",
        todo_function="test.todo",
        defined_assertion="expect({value}).toBeDefined();",
        instance_assertion_template="expect({value}).toBeInstanceOf({cls});",
        mock_function="jest.fn()",
    ),
    FrameworkProfile(
        id="mocha",
        runner_module="mocha",
        import_names=("describe", "it", "expect"),
        group_function="describe",
        test_function="it",
        todo_function="it.skip",
        defined_assertion="expect({value}).to.exist;",
        instance_assertion_template="expect({value}).to.be.an.instanceof({cls});",
        mock_function="() => {}",
        assertion_module="chai",
    ),
    FrameworkProfile(
        id="vitest",
        runner_module="vitest",
        import_names=("describe", "it", "expect"),
        group_function="describe",
        test_function="it",
        todo_function="it.todo",
        defined_assertion="expect({value}).toBeDefined();",
        instance_assertion_template="expect({value}).toBeInstanceOf({cls});",
        mock_function="vi.fn()",
        mock_import="vi",
    ),
    FrameworkProfile(
        id="playwright",
        runner_module="@playwright/test",
        import_names=("test", "expect"),
        group_function="test.describe",
        test_function="test",
        todo_function="test.fixme",
        defined_assertion="expect({value}).toBeDefined();",
        instance_assertion_template="expect({value}).toBeInstanceOf({cls});",
        mock_function="() => {}",
    ),
)

DEFAULT_FRAMEWORK = FRAMEWORK_PROFILES[0].id


def framework_ids() -> list[str]:
    """Return the profile ids in table order."""
    return [p.id for p in FRAMEWORK_PROFILES]


def get_profile(framework: str) -> FrameworkProfile:
    """Look up a profile by id (case-insensitive).

    Raises:
        UnknownFrameworkError: If no profile has that id
    """
    wanted = framework.strip().lower()
    for profile in FRAMEWORK_PROFILES:
        if profile.id == wanted:
            return profile
    raise UnknownFrameworkError(framework)
