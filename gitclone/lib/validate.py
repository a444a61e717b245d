"""
Schema validation for step inputs.

Raw inputs are validated against a JSON Schema before they are converted
into a CheckoutRequest, so a bad input fails the step before any git
command runs.
"""

import json
from pathlib import Path

import jsonschema

from gitclone.lib.errors import ConfigInvalidError


class ValidationError(ConfigInvalidError):
    """Schema validation failed."""

    def __init__(self, schema_name: str, problems: list[str]):
        self.schema_name = schema_name
        self.problems = problems
        super().__init__(f"[{schema_name}] " + "; ".join(problems))


# Cache loaded schemas
_schema_cache: dict[str, dict] = {}


def _get_schemas_dir() -> Path:
    """Schemas ship inside the package."""
    return Path(__file__).parent.parent / "schemas"


def _load_schema(schema_name: str) -> dict:
    """Load schema by name, with caching."""
    if schema_name not in _schema_cache:
        schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, [f"schema file not found: {schema_path}"])
        _schema_cache[schema_name] = json.loads(schema_path.read_text(encoding="utf-8"))
    return _schema_cache[schema_name]


def _describe(error: jsonschema.ValidationError) -> str:
    if error.absolute_path:
        field = ".".join(str(p) for p in error.absolute_path)
        return f"{field}: {error.message}"
    return error.message


def validate(data: dict, schema_name: str = "inputs") -> None:
    """
    Validate data against named schema, reporting every problem at once.

    Raises:
        ValidationError: If validation fails
    """
    schema = _load_schema(schema_name)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)

    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if errors:
        raise ValidationError(schema_name, [_describe(e) for e in errors])
