"""Backward-compatibility verifier for OpenAPI documents.

Walks the contract document top-down (paths, then methods, then parameters)
and yields a failure for every way the candidate would break a client written
against the contract. Everything is lazy: nothing is evaluated until the
caller iterates, and iterating again re-walks the same inputs.
"""

import logging
from collections.abc import Iterable, Iterator
from itertools import chain

from pydantic import BaseModel, ConfigDict

from oas_contract_verify.failures import (
    ExcessRequiredParameter,
    IncompatibleParameter,
    MissingHttpMethod,
    MissingParameter,
    MissingPath,
    ParameterConstraints,
    VerificationFailure,
)
from oas_contract_verify.model import Document, Operation, Parameter, ParameterKind, PathItem
from oas_contract_verify.policy import CompatibilityPolicy, exact_match

logger = logging.getLogger(__name__)


class VerificationContext(BaseModel):
    """Where in the contract the verifier currently is."""

    model_config = ConfigDict(frozen=True)

    path: str
    method: str = ""


class Verifier:
    """Compares a candidate document against a contract document."""

    def __init__(self, policy: CompatibilityPolicy | None = None):
        self.policy = policy or exact_match

    def verify(self, candidate: Document, contract: Document) -> Iterator[VerificationFailure]:
        """Yield every breaking divergence of ``candidate`` from ``contract``.

        Paths only present in the candidate are never inspected.
        """
        for path, contract_item in contract.paths.items():
            candidate_item = candidate.paths.get(path)
            if candidate_item is None:
                yield MissingPath(path=path)
                continue
            cx = VerificationContext(path=path)
            yield from self.verify_operations(cx, candidate_item, contract_item)

    def verify_operations(
        self, cx: VerificationContext, candidate: PathItem, contract: PathItem
    ) -> Iterator[VerificationFailure]:
        for method, contract_operation in contract.operations.items():
            cx = cx.model_copy(update={"method": method})
            candidate_operation = candidate.operations.get(method)
            if candidate_operation is None:
                yield MissingHttpMethod(path=cx.path, method=method)
                continue
            yield from self.verify_operation(cx, candidate_operation, contract_operation)

    def verify_operation(
        self, cx: VerificationContext, candidate: Operation, contract: Operation
    ) -> Iterator[VerificationFailure]:
        return chain(
            self.verify_parameters(cx, candidate, contract),
            self.verify_request_body(cx, candidate, contract),
            self.verify_responses(cx, candidate, contract),
        )

    def verify_parameters(
        self, cx: VerificationContext, candidate: Operation, contract: Operation
    ) -> Iterator[VerificationFailure]:
        candidate_params = _parameter_map(cx, candidate.parameters)
        contract_params = _parameter_map(cx, contract.parameters)

        missing = (
            MissingParameter(path=cx.path, method=cx.method, parameter_name=name, parameter_kind=kind)
            for name, kind in contract_params
            if (name, kind) not in candidate_params
        )
        excess_required = (
            ExcessRequiredParameter(path=cx.path, method=cx.method, parameter_name=p.name, parameter_kind=p.kind)
            for key, p in candidate_params.items()
            if key not in contract_params and p.is_required
        )
        incompatible = chain.from_iterable(
            self.verify_parameter_compatibility(cx, p, contract_params[key])
            for key, p in candidate_params.items()
            if key in contract_params
        )
        return chain(missing, excess_required, incompatible)

    def verify_parameter_compatibility(
        self, cx: VerificationContext, candidate: Parameter, contract: Parameter
    ) -> Iterator[VerificationFailure]:
        contract_constraints = ParameterConstraints.from_parameter(contract)
        candidate_constraints = ParameterConstraints.from_parameter(candidate)
        if not self.policy(contract_constraints, candidate_constraints):
            yield IncompatibleParameter(
                path=cx.path,
                method=cx.method,
                parameter_name=contract.name,
                parameter_kind=contract.kind,
                contract_constraints=contract_constraints,
                candidate_constraints=candidate_constraints,
            )

    def verify_request_body(
        self, cx: VerificationContext, candidate: Operation, contract: Operation
    ) -> Iterator[VerificationFailure]:
        # TODO: compare request body schemas once a body compatibility policy exists
        return iter(())

    def verify_responses(
        self, cx: VerificationContext, candidate: Operation, contract: Operation
    ) -> Iterator[VerificationFailure]:
        # TODO: compare response schemas per status code
        return iter(())


def verify(
    candidate: Document, contract: Document, policy: CompatibilityPolicy | None = None
) -> Iterator[VerificationFailure]:
    """Shortcut for ``Verifier(policy).verify(candidate, contract)``."""
    return Verifier(policy).verify(candidate, contract)


def _parameter_map(
    cx: VerificationContext, parameters: Iterable[Parameter]
) -> dict[tuple[str, ParameterKind], Parameter]:
    """Index parameters by (name, kind). Duplicates: last one wins."""
    result: dict[tuple[str, ParameterKind], Parameter] = {}
    for p in parameters:
        if p.key in result:
            # logged on every walk, so kept below WARNING
            logger.debug(
                "Duplicate parameter %s (%s) in %s %s; keeping the last one",
                p.name, p.kind.value, cx.method, cx.path,
            )
        result[p.key] = p
    return result
