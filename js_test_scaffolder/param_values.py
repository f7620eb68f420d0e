"""Synthesize placeholder call arguments from parameter names."""

import logging

from js_test_scaffolder.frameworks import FrameworkProfile

logger = logging.getLogger(__name__)

# Sentinel replaced by the profile's no-op callable
MOCK_FUNCTION = object()

# Checked in order, first match wins. "idOptions" must resolve via "id".
PLACEHOLDER_RULES = [
    {"contains": "callback", "value": MOCK_FUNCTION},
    {"contains": "id", "value": "123"},
    {"contains": "name", "value": '"testName"'},
    {"contains": "options", "value": "{}"},
    {"contains": "config", "value": "{}"},
]

DEFAULT_PLACEHOLDER = "undefined"
DEFAULT_MOCK_FUNCTION = "jest.fn()"


def placeholder_for(param: str, profile: FrameworkProfile | None = None) -> str:
    """Return a placeholder value expression for one parameter.

    Args:
        param: Raw parameter name or text
        profile: Framework profile supplying the no-op callable

    Returns:
        JavaScript expression text
    """
    for rule in PLACEHOLDER_RULES:
        if rule["contains"] in param:
            value = rule["value"]
            if value is MOCK_FUNCTION:
                return profile.mock_function if profile else DEFAULT_MOCK_FUNCTION
            return value

    logger.debug(f"No placeholder rule for parameter {param!r}")
    return DEFAULT_PLACEHOLDER


def placeholder_args(params: list[str], profile: FrameworkProfile | None = None) -> str:
    """Return a comma-separated placeholder argument list."""
    return ", ".join(placeholder_for(p, profile) for p in params)
