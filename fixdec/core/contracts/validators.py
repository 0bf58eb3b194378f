"""
JSON Schema Contract Validators

Validation of interchange documents against the formal JSON Schema
contracts shipped with the package.

Schemas (fixdec/core/contracts/schema/):
- fixed_decimal.json  (Fixed[D]: bare non-negative integer)
- scaled_decimal.json (Scaled: {"val", "decimals"} record)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader for the bundled JSON Schema files.

    Schemas live next to this module in schema/ and are cached after the
    first load.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'scaled_decimal')

        Returns:
            Parsed schema as dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation of the schema itself
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base validator for one interchange contract.

    Subclasses name their schema in SCHEMA_NAME; the Draft 2020-12 validator
    is compiled once per instance.
    """

    SCHEMA_NAME: str = ""

    def __init__(self, loader: SchemaLoader | None = None):
        self.schema = (loader or _SCHEMA_LOADER).load_schema(self.SCHEMA_NAME)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: If data does not match the schema
        """
        self._validator.validate(data)


class FixedDecimalValidator(ContractValidator):
    """Validator for the fixed_decimal contract."""

    SCHEMA_NAME = "fixed_decimal"


class ScaledDecimalValidator(ContractValidator):
    """Validator for the scaled_decimal contract."""

    SCHEMA_NAME = "scaled_decimal"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


_FIXED_VALIDATOR = FixedDecimalValidator()
_SCALED_VALIDATOR = ScaledDecimalValidator()


def validate_fixed_decimal(data: Any) -> None:
    """
    Validate a Fixed[D] interchange document (a bare integer).

    Raises:
        ValidationError: If data does not match fixed_decimal.json
    """
    _FIXED_VALIDATOR.validate(data)


def validate_scaled_decimal(data: Any) -> None:
    """
    Validate a Scaled interchange document.

    Raises:
        ValidationError: If data does not match scaled_decimal.json
    """
    _SCALED_VALIDATOR.validate(data)
