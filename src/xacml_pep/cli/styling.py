"""CLI output styling utilities.

Provides consistent styling helpers for CLI output:
- Cyan bold for labels
- Green for success messages and Permit
- Red for error messages and Deny
- Yellow for warnings, NotApplicable and Indeterminate
"""

from __future__ import annotations

__all__ = [
    "style_decision",
    "style_error",
    "style_label",
    "style_success",
    "style_warning",
]

import click

from xacml_pep.model.response import Decision

_DECISION_COLORS: dict[Decision, str] = {
    Decision.PERMIT: "green",
    Decision.DENY: "red",
    Decision.NOT_APPLICABLE: "yellow",
    Decision.INDETERMINATE: "yellow",
}


def style_label(label: str) -> str:
    """Style a label with cyan bold and colon suffix.

    Example:
        >>> click.echo(style_label("Decision") + " Permit")
        Decision: Permit
    """
    return click.style(f"{label}:", fg="cyan", bold=True)


def style_decision(decision: Decision) -> str:
    """Color a decision by outcome."""
    return click.style(decision.value, fg=_DECISION_COLORS[decision], bold=True)


def style_success(message: str) -> str:
    """Style a success message with checkmark.

    Example:
        >>> click.echo(style_success("Configuration is valid"))
        ✓ Configuration is valid
    """
    return click.style(f"✓ {message}", fg="green")


def style_error(message: str) -> str:
    """Style an error message with cross mark."""
    return click.style(f"✗ {message}", fg="red")


def style_warning(message: str) -> str:
    """Style a warning message with yellow color."""
    return click.style(f"Warning: {message}", fg="yellow", bold=True)
