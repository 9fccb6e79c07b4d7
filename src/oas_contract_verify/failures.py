"""Verification failure values.

Failures are reports, not exceptions. They are frozen pydantic models, so two
failures with the same field values compare and hash equal; the ``kind`` tag
survives ``model_dump`` for JSON reports.
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict

from oas_contract_verify.model import Parameter, ParameterKind, SchemaType


class ParameterConstraints(BaseModel):
    """The contract-relevant fields of one parameter."""

    model_config = ConfigDict(frozen=True)

    type: SchemaType
    is_required: bool
    maximum: Decimal | None = None
    max_items: int = 0
    max_length: int | None = None

    @classmethod
    def from_parameter(cls, parameter: Parameter) -> "ParameterConstraints":
        """Copy the constraint fields of ``parameter`` verbatim."""
        return cls(
            type=parameter.type,
            is_required=parameter.is_required,
            maximum=parameter.maximum,
            max_items=parameter.max_items,
            max_length=parameter.max_length,
        )


class VerificationFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str


class MissingPath(VerificationFailure):
    kind: Literal["missing_path"] = "missing_path"


class MissingHttpMethod(VerificationFailure):
    kind: Literal["missing_http_method"] = "missing_http_method"
    method: str


class MissingParameter(VerificationFailure):
    kind: Literal["missing_parameter"] = "missing_parameter"
    method: str
    parameter_name: str
    parameter_kind: ParameterKind


class ExcessRequiredParameter(VerificationFailure):
    kind: Literal["excess_required_parameter"] = "excess_required_parameter"
    method: str
    parameter_name: str
    parameter_kind: ParameterKind


class IncompatibleParameter(VerificationFailure):
    kind: Literal["incompatible_parameter"] = "incompatible_parameter"
    method: str
    parameter_name: str
    parameter_kind: ParameterKind
    contract_constraints: ParameterConstraints
    candidate_constraints: ParameterConstraints
