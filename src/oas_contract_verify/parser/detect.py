"""Detect which OpenAPI dialect a loaded document uses."""

from pathlib import Path

import yaml

from oas_contract_verify.errors import DocumentLoadError


def read_document(file_path: Path) -> dict:
    """Read a YAML or JSON API document into a plain dict.

    JSON is a subset of YAML, so ``yaml.safe_load`` handles both.
    """
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(file_path, f"cannot read file ({e.strerror or e})") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(file_path, f"invalid YAML/JSON: {e}") from e

    if not isinstance(data, dict):
        raise DocumentLoadError(file_path, "document root must be a mapping")
    return data


def detect_version(data: dict) -> str:
    """Return 'openapi3' or 'swagger2' for a loaded document."""
    if str(data.get("openapi", "")).startswith("3."):
        return "openapi3"
    if str(data.get("swagger", "")).startswith("2."):
        return "swagger2"
    raise DocumentLoadError(None, "not an OpenAPI 3.x or Swagger 2.0 document")


def detect_format(file_path: Path) -> str:
    """Detect the dialect of an API document file."""
    try:
        return detect_version(read_document(file_path))
    except DocumentLoadError as e:
        raise DocumentLoadError(file_path, e.reason) from e
