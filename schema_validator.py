import json
from typing import Any, Dict

from jsonschema import FormatChecker
from jsonschema.validators import validator_for

# Compiled validators keyed by the canonical JSON text of their schema.
_COMPILED: Dict[str, Any] = {}


class SchemaValidationError(AssertionError):
    """Every violation of one validation run, joined into a single failure."""

    def __init__(self, message: str, errors: list[str], instance: Any):
        super().__init__(message)
        self.errors = errors
        self.instance = instance


def compile_schema(schema: dict):
    """
    Return a ready-to-use validator for `schema`, compiling it only once.

    The schema document itself is checked first (SchemaError on a malformed
    contract). jsonschema never coerces types, so "1" is not an integer here.
    """
    key = json.dumps(schema, sort_keys=True)
    validator = _COMPILED.get(key)
    if validator is None:
        cls = validator_for(schema)
        cls.check_schema(schema)
        validator = cls(schema, format_checker=FormatChecker())
        _COMPILED[key] = validator
    return validator


def _instance_path(error) -> str:
    if not error.absolute_path:
        return "root"
    return "/" + "/".join(str(p) for p in error.absolute_path)


def validate_response_schema(response: Any, schema: dict) -> bool:
    """
    Validate a decoded response body against a JSON schema.

    Returns True when the body conforms. Otherwise raises SchemaValidationError
    listing every violation as "Path: <pointer> - <message>", followed by the
    pretty-printed body.
    """
    validator = compile_schema(schema)
    errors = sorted(validator.iter_errors(response), key=lambda e: list(map(str, e.absolute_path)))
    if not errors:
        return True

    lines = [f"Path: {_instance_path(e)} - {e.message}" for e in errors]
    message = (
        "Schema validation failed:\n"
        + "\n".join(lines)
        + "\n\nActual Response:\n"
        + json.dumps(response, indent=2, default=str)
    )
    raise SchemaValidationError(message, lines, response)
