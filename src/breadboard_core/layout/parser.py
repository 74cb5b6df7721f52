# src/breadboard_core/layout/parser.py
import logging
import re
import string
from pathlib import Path
from typing import Any, Dict, List, Union

import cerberus
import yaml

from .exceptions import LayoutParsingError, LayoutSchemaError
from .raw_data import ParsedComponentPlacement, ParsedLayout

logger = logging.getLogger(__name__)

# Component ids become solver node and element names, so they are restricted
# to plain identifiers.
ID_REGEX = r"^[a-zA-Z_][a-zA-Z0-9_]*$"
ALLOWED_ID_CHARS = set(string.ascii_letters + string.digits + "_")


class EnhancedValidator(cerberus.Validator):
    """Cerberus validator with the identifier and uniqueness rules layout files need."""
    def __init__(self, *args, **kwargs):
        super(EnhancedValidator, self).__init__(*args, **kwargs)
        self.rules['id_regex'] = {'schema': {'type': 'boolean'}}
        self.rules['unique_elements_by_key'] = {'schema': {'type': 'string'}}

    def _validate_id_regex(self, constraint: bool, field: str, value: Any):
        if not constraint: return
        if not isinstance(value, str):
            self._error(field, "must be a string to be validated by id_regex.")
            return

        if not re.match(ID_REGEX, value):
            invalid_chars = sorted(list(set(value) - ALLOWED_ID_CHARS))
            message = (
                f"Identifier '{value}' is invalid. Identifiers must start with a letter or underscore, "
                "and can only contain letters, numbers, and underscores. "
                f"This identifier contains the following forbidden character(s): {invalid_chars}"
            )
            self._error(field, message)

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue
            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            unique_duplicates = sorted(list(set(duplicates)))
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {unique_duplicates}")


class LayoutParser:
    """
    Reads and validates a board layout YAML file into a `ParsedLayout`.

    Layout format::

        board:            # optional
          rows: 9
          cols: 9
        components:
          - id: B1
            type: Battery
            start: [0, 0]
            end: [0, 1]
            parameters:   # optional
              emf: 9 V
          - id: S1
            type: Switch
            start: [0, 1]
            end: [1, 1]
            closed: true  # optional
    """
    _point_rule = {
        "type": "list", "required": True, "minlength": 2, "maxlength": 2,
        "schema": {"type": "integer", "min": 0},
    }

    _param_value_schema = {"type": ["string", "number"]}

    _component_schema = {
        "id": {"type": "string", "required": True, "empty": False, "id_regex": True},
        "type": {"type": "string", "required": True, "empty": False, "id_regex": True},
        "start": _point_rule,
        "end": _point_rule,
        "parameters": {"type": "dict", "required": False, "keysrules": {"type": "string", "id_regex": True}, "valuesrules": _param_value_schema},
        "closed": {"type": "boolean", "required": False},
    }

    _schema = {
        "board": {
            "type": "dict", "required": False, "schema": {
                "rows": {"type": "integer", "required": True, "min": 1},
                "cols": {"type": "integer", "required": True, "min": 1},
            },
        },
        "components": {
            "type": "list", "required": True, "unique_elements_by_key": "id",
            "schema": {"type": "dict", "schema": _component_schema},
        },
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("LayoutParser initialized.")

    def parse(self, yaml_path: Union[str, Path]) -> ParsedLayout:
        """
        Raises:
            LayoutParsingError: If the file cannot be read as a YAML mapping.
            LayoutSchemaError: If the content does not match the layout schema.
        """
        resolved_path = Path(yaml_path).resolve()
        logger.info(f"Parsing board layout: {resolved_path}")

        yaml_content = self._load_yaml(resolved_path)
        if not self._validator.validate(yaml_content):
            raise LayoutSchemaError(self._validator.errors, resolved_path)
        validated_data = self._validator.document

        placements = [
            ParsedComponentPlacement(
                instance_id=raw["id"],
                component_type=raw["type"],
                start=(raw["start"][0], raw["start"][1]),
                end=(raw["end"][0], raw["end"][1]),
                raw_parameters_dict=raw.get("parameters", {}),
                closed=raw.get("closed"),
                source_yaml_path=resolved_path,
            )
            for raw in validated_data["components"]
        ]

        board = validated_data.get("board") or {}
        return ParsedLayout(
            source_yaml_path=resolved_path,
            num_rows=board.get("rows"),
            num_cols=board.get("cols"),
            components=placements,
        )

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise LayoutParsingError(details=f"Layout file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
            if content is None:
                raise LayoutParsingError(details="The YAML file is empty or contains no valid content.", file_path=source)
            if not isinstance(content, dict):
                raise LayoutParsingError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)
            return content
        except PermissionError as e:
            raise LayoutParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise LayoutParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
