"""OpenAPI / Swagger document parser.

Parses OpenAPI 3.x and Swagger 2.0 documents into the verifier's Document
model. Only references local to the document (``#/...``) are resolved.
"""

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from oas_contract_verify.errors import DocumentLoadError
from oas_contract_verify.model import Document, Operation, Parameter, ParameterKind, PathItem, SchemaType
from oas_contract_verify.parser.detect import detect_version, read_document

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def load_document(file_path: Path) -> Document:
    """Parse an OpenAPI/Swagger file into a Document."""
    data = read_document(file_path)
    try:
        document = parse_document(data)
    except DocumentLoadError as e:
        raise DocumentLoadError(file_path, e.reason) from e
    logger.debug("Loaded %s: %d paths", file_path, len(document.paths))
    return document


def parse_document(data: dict) -> Document:
    """Convert an already-loaded OpenAPI/Swagger dict into a Document."""
    version = detect_version(data)
    paths = {}
    for path, raw_item in _mapping("paths", data.get("paths")).items():
        raw_item = _resolve(data, raw_item)
        if not isinstance(raw_item, dict):
            raise DocumentLoadError(None, f"path item {path!r} must be a mapping")
        paths[str(path)] = _parse_path_item(data, version, str(path), raw_item)

    info = _mapping("info", data.get("info"))
    return Document(
        paths=paths,
        title=str(info.get("title", "")),
        version=str(info.get("version", "")),
    )


def _parse_path_item(doc: dict, version: str, path: str, item: dict) -> PathItem:
    shared = _sequence(f"parameters of {path}", item.get("parameters"))
    operations = {}
    for method, operation in item.items():
        if str(method).lower() not in HTTP_METHODS:
            continue
        if not isinstance(operation, dict):
            raise DocumentLoadError(None, f"operation {method} {path} must be a mapping")
        operations[str(method)] = _parse_operation(doc, version, path, shared, operation)
    return PathItem(operations=operations)


def _parse_operation(doc: dict, version: str, path: str, shared: list, operation: dict) -> Operation:
    # Operation-level parameters override path-level ones with the same (name, in).
    raw_params: dict[tuple, dict] = {}
    for raw in shared + _sequence(f"parameters of {path}", operation.get("parameters")):
        raw = _resolve(doc, raw)
        if not isinstance(raw, dict):
            raise DocumentLoadError(None, f"parameter must be a mapping: {raw!r}")
        name, location = raw.get("name"), raw.get("in")
        if not isinstance(name, str) or not name or not isinstance(location, str) or not location:
            raise DocumentLoadError(None, f"parameter needs string 'name' and 'in': {raw!r}")
        raw_params[(name, location)] = raw

    params = []
    request_body = None
    for raw in raw_params.values():
        if version == "swagger2" and raw.get("in") == "body":
            request_body = _mapping(f"schema of body parameter {raw['name']!r}", _resolve(doc, raw.get("schema")))
            continue
        params.append(_parse_parameter(doc, version, raw))

    if version == "openapi3" and operation.get("requestBody"):
        request_body = _mapping(f"requestBody of {path}", _resolve(doc, operation["requestBody"]))

    return Operation(
        parameters=tuple(params),
        request_body=request_body,
        responses=_parse_responses(_mapping(f"responses of {path}", operation.get("responses"))),
    )


def _parse_parameter(doc: dict, version: str, raw: dict) -> Parameter:
    name = raw["name"]
    location = raw["in"]
    try:
        kind = ParameterKind(location)
    except ValueError:
        raise DocumentLoadError(None, f"parameter {name!r} has unknown location {location!r}") from None

    if version == "openapi3":
        schema = _parameter_schema(doc, raw)
    else:
        schema = raw  # Swagger 2.0 keeps constraints on the parameter itself

    max_items = _int_bound(name, "maxItems", schema.get("maxItems"))
    return Parameter(
        name=name,
        kind=kind,
        type=_schema_type(name, schema.get("type")),
        # path parameters are always required
        is_required=bool(raw.get("required", False)) or kind == ParameterKind.PATH,
        maximum=_decimal(name, schema.get("maximum")),
        max_items=max_items or 0,
        max_length=_int_bound(name, "maxLength", schema.get("maxLength")),
    )


def _parameter_schema(doc: dict, raw: dict) -> dict:
    name = raw.get("name")
    if "schema" in raw:
        schema = _resolve(doc, raw["schema"])
    else:
        # Fallback: schema of the first media type
        schema = None
        for media in _mapping(f"content of parameter {name!r}", raw.get("content")).values():
            media = _mapping(f"media type of parameter {name!r}", _resolve(doc, media))
            schema = _resolve(doc, media.get("schema"))
            break
    return _mapping(f"schema of parameter {name!r}", schema)


def _mapping(what: str, value) -> dict:
    """Return ``value`` as a dict; missing/null becomes an empty one."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentLoadError(None, f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _sequence(what: str, value) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentLoadError(None, f"{what} must be a list, got {type(value).__name__}")
    return value


def _int_bound(name: str, field: str, value) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DocumentLoadError(None, f"parameter {name!r} has invalid {field} {value!r}")
    return value


def _schema_type(name: str, value) -> SchemaType:
    if value is None:
        return SchemaType.NONE
    if isinstance(value, list):
        # OpenAPI 3.1 allows ["integer", "null"]
        types = [t for t in value if t != "null"] or ["null"]
        value = types[0]
    try:
        return SchemaType(value)
    except ValueError:
        raise DocumentLoadError(None, f"parameter {name!r} has unknown type {value!r}") from None


def _decimal(name: str, value) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise DocumentLoadError(None, f"parameter {name!r} has non-numeric maximum {value!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise DocumentLoadError(None, f"parameter {name!r} has non-numeric maximum {value!r}") from None
    if not result.is_finite():
        raise DocumentLoadError(None, f"parameter {name!r} has non-finite maximum {value!r}")
    return result


def _parse_responses(responses: dict) -> dict:
    return {str(status_code): resp for status_code, resp in responses.items()}


def _resolve(doc: dict, node, _seen: frozenset = frozenset()):
    """Follow local ``$ref`` pointers until a concrete node is reached."""
    if not isinstance(node, dict) or "$ref" not in node:
        return node
    ref = node["$ref"]
    if not isinstance(ref, str) or not ref.startswith("#/"):
        raise DocumentLoadError(None, f"external reference {ref!r} is not supported")
    if ref in _seen:
        raise DocumentLoadError(None, f"circular reference {ref!r}")

    target = doc
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(target, dict) or part not in target:
            raise DocumentLoadError(None, f"unresolved reference {ref!r}")
        target = target[part]
    return _resolve(doc, target, _seen | {ref})
