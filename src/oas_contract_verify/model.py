"""In-memory OpenAPI document model consumed by the verifier.

The loader in ``oas_contract_verify.parser`` converts Swagger 2.0 and
OpenAPI 3.x files into these models. All of them are frozen: the verifier
only ever reads them.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ParameterKind(str, Enum):
    """Where a parameter lives in the HTTP request."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"
    FORM_DATA = "formData"  # Swagger 2.0 only
    BODY = "body"  # Swagger 2.0 only


class SchemaType(str, Enum):
    NONE = "none"  # no type declared
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    FILE = "file"
    NULL = "null"


class Parameter(BaseModel):
    """A single operation parameter, identified by (name, kind)."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: ParameterKind = ParameterKind.QUERY
    type: SchemaType = SchemaType.NONE
    is_required: bool = False
    maximum: Decimal | None = None
    max_items: int = 0  # 0 = no declared bound
    max_length: int | None = None

    @property
    def key(self) -> tuple[str, ParameterKind]:
        return (self.name, self.kind)


class Operation(BaseModel):
    """One HTTP operation: its parameters plus raw body/response fragments."""

    model_config = ConfigDict(frozen=True)

    parameters: tuple[Parameter, ...] = ()
    request_body: dict | None = None
    responses: dict = Field(default_factory=dict)


class PathItem(BaseModel):
    """HTTP method name -> Operation, in document order."""

    model_config = ConfigDict(frozen=True)

    operations: dict[str, Operation] = Field(default_factory=dict)


class Document(BaseModel):
    """Path string -> PathItem, in document order."""

    model_config = ConfigDict(frozen=True)

    paths: dict[str, PathItem] = Field(default_factory=dict)
    title: str = ""
    version: str = ""
