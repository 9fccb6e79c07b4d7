"""Renders verification failures for people and machines."""

import json
from collections.abc import Iterable

from oas_contract_verify.failures import (
    ExcessRequiredParameter,
    IncompatibleParameter,
    MissingHttpMethod,
    MissingParameter,
    MissingPath,
    ParameterConstraints,
    VerificationFailure,
)


def describe(failure: VerificationFailure) -> str:
    """One-line, human-readable description of a failure."""
    if isinstance(failure, MissingPath):
        return f"{failure.path}: path removed"
    if isinstance(failure, MissingHttpMethod):
        return f"{failure.method.upper()} {failure.path}: operation removed"
    if isinstance(failure, MissingParameter):
        return (
            f"{failure.method.upper()} {failure.path}: "
            f"{failure.parameter_kind.value} parameter '{failure.parameter_name}' removed"
        )
    if isinstance(failure, ExcessRequiredParameter):
        return (
            f"{failure.method.upper()} {failure.path}: "
            f"new required {failure.parameter_kind.value} parameter '{failure.parameter_name}'"
        )
    if isinstance(failure, IncompatibleParameter):
        changes = ", ".join(_constraint_changes(failure.contract_constraints, failure.candidate_constraints))
        return (
            f"{failure.method.upper()} {failure.path}: "
            f"{failure.parameter_kind.value} parameter '{failure.parameter_name}' changed ({changes})"
        )
    raise TypeError(f"Unknown failure type: {type(failure).__name__}")


def _constraint_changes(contract: ParameterConstraints, candidate: ParameterConstraints) -> list[str]:
    changes = []
    for field in ParameterConstraints.model_fields:
        before, after = getattr(contract, field), getattr(candidate, field)
        if before != after:
            changes.append(f"{field}: {_show(before)} -> {_show(after)}")
    return changes


def _show(value) -> str:
    if value is None:
        return "unset"
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def sort_failures(failures: Iterable[VerificationFailure]) -> list[VerificationFailure]:
    """Canonical ordering: path, method, failure kind, parameter name."""
    return sorted(
        failures,
        key=lambda f: (
            f.path,
            getattr(f, "method", ""),
            f.kind,
            getattr(f, "parameter_name", ""),
            getattr(getattr(f, "parameter_kind", None), "value", ""),
        ),
    )


def render_text(failures: Iterable[VerificationFailure]) -> str:
    lines = [describe(f) for f in failures]
    if not lines:
        return "No breaking changes found."
    lines.append("")
    lines.append(f"{len(lines) - 1} breaking change(s) found.")
    return "\n".join(lines)


def render_json(failures: Iterable[VerificationFailure]) -> str:
    return json.dumps([f.model_dump(mode="json") for f in failures], indent=2)


RENDERERS = {
    "text": render_text,
    "json": render_json,
}
