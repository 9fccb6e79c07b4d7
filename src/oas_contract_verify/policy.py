"""Parameter compatibility policies.

A policy decides whether a candidate parameter's constraints are acceptable
in place of the contract's. The verifier calls it once per shared parameter.
"""

from collections.abc import Callable

from oas_contract_verify.failures import ParameterConstraints

CompatibilityPolicy = Callable[[ParameterConstraints, ParameterConstraints], bool]


def exact_match(contract: ParameterConstraints, candidate: ParameterConstraints) -> bool:
    """Compatible only when every constraint field is equal."""
    return contract == candidate


def relaxed_bounds(contract: ParameterConstraints, candidate: ParameterConstraints) -> bool:
    """Also accept a candidate that loosens the contract's bounds.

    The type must match. A required parameter may become optional, and
    maximum / maxItems / maxLength may grow or be dropped, since every
    request valid under the contract stays valid under the candidate.
    """
    if contract.type != candidate.type:
        return False
    if candidate.is_required and not contract.is_required:
        return False
    if not _optional_bound_covers(contract.maximum, candidate.maximum):
        return False
    if not _optional_bound_covers(contract.max_length, candidate.max_length):
        return False
    # max_items uses 0 for "unbounded"
    if candidate.max_items and (not contract.max_items or candidate.max_items < contract.max_items):
        return False
    return True


def _optional_bound_covers(contract, candidate) -> bool:
    if candidate is None:
        return True
    if contract is None:
        return False
    return candidate >= contract


POLICIES: dict[str, CompatibilityPolicy] = {
    "exact": exact_match,
    "relaxed": relaxed_bounds,
}
