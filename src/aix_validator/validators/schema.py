"""Validation of descriptor documents against their JSON schemas."""

from __future__ import annotations

import json
import logging
from enum import Enum
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any
from collections.abc import Iterable, Mapping

import requests
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import SchemaError
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from ..errors import SchemaLoadError
from ..models import ValidationOutcome

logger = logging.getLogger(__name__)

ROOT = "(root)"


class SchemaKind(str, Enum):
    SOURCE = "source"
    FILTERS = "filters"
    SETTINGS = "settings"

    @property
    def filename(self) -> str:
        return f"{self.value}.schema.json"


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, timeout=30)


def _fetch_schema_text(url: str) -> str:
    try:
        response = _http_get(url)
    except requests.RequestException as exc:  # pragma: no cover - network failure path
        raise SchemaLoadError(f"Failed to fetch schema {url}: {exc}") from exc

    if response.status_code != 200:
        raise SchemaLoadError(f"Unexpected status code {response.status_code} fetching {url}")

    return response.text


def _read_schema_text(kind: SchemaKind, source: str | None) -> str:
    if not source:
        return (resources.files("aix_validator") / "schemas" / kind.filename).read_text(
            encoding="utf-8"
        )

    if source.startswith("http://") or source.startswith("https://"):
        return _fetch_schema_text(f"{source.rstrip('/')}/{kind.filename}")

    path = Path(source) / kind.filename
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaLoadError(f"Failed to read schema {path}: {exc}") from exc


def load_schema(kind: SchemaKind, source: str | None = None) -> dict[str, Any]:
    """Load and check the schema for ``kind``.

    Params:
        kind: which descriptor the schema describes
        source: None for the bundled schemas, otherwise a directory or an
            http(s) base URL holding ``<kind>.schema.json``

    Raises: SchemaLoadError if the schema cannot be read, parsed or is not a
    valid draft 2020-12 schema.
    """
    text = _read_schema_text(kind, source)
    try:
        schema = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Invalid JSON in {kind.filename}: {exc}") from exc

    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as exc:
        raise SchemaLoadError(f"{kind.filename} is not a valid schema: {exc.message}") from exc

    logger.debug("loaded %s from %s", kind.filename, source or "bundled schemas")
    return schema


def _render_path(error: ValidationError) -> str:
    path = error.json_path.removeprefix("$").removeprefix(".")
    return path or ROOT


def _path_key(error: ValidationError) -> list[tuple[int, Any]]:
    # indices sort before keys so mixed paths stay comparable
    return [(0, p) if isinstance(p, int) else (1, str(p)) for p in error.absolute_path]


def _format_errors(errors: Iterable[ValidationError]) -> list[str]:
    return [f"{_render_path(error)}: {error.message}" for error in sorted(errors, key=_path_key)]


class SchemaValidator:
    """Validates descriptor documents against one schema per SchemaKind."""

    def __init__(self, schemas: Mapping[SchemaKind, dict[str, Any]]) -> None:
        self._validators = {kind: Draft202012Validator(schema) for kind, schema in schemas.items()}

    @classmethod
    def from_source(cls, source: str | None = None) -> SchemaValidator:
        return cls({kind: load_schema(kind, source) for kind in SchemaKind})

    def validate(self, kind: SchemaKind, document: bytes | str) -> ValidationOutcome:
        """Check a raw document; unparseable input is reported as a violation."""
        try:
            data = json.loads(document)
        except (ValueError, RecursionError) as exc:
            return ValidationOutcome.failed([f"{ROOT}: document is not valid JSON: {exc}"])

        try:
            violations = _format_errors(self._validators[kind].iter_errors(data))
        except RecursionError:
            return ValidationOutcome.failed([f"{ROOT}: document is nested too deeply to validate"])
        if violations:
            return ValidationOutcome.failed(violations)
        return ValidationOutcome.ok()


@lru_cache(maxsize=1)
def default_validator() -> SchemaValidator:
    return SchemaValidator.from_source(None)


def validate(kind: SchemaKind, document: bytes | str) -> ValidationOutcome:
    """Validate ``document`` against the bundled schema for ``kind``."""
    return default_validator().validate(kind, document)
