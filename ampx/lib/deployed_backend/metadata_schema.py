"""
Parsing and validation of the backend output entries stored in the stack template metadata
"""

from typing import Any, Dict, List, Mapping

import jsonschema

from ampx.lib.deployed_backend.backend_output import MetadataEntry
from ampx.lib.deployed_backend.exceptions import SchemaValidationError

VERSION_FIELD = "version"
STACK_OUTPUT_NAMES_FIELD = "stackOutputNames"
# key written by the Amplify constructs, read as a synonym of stackOutputNames
STACK_OUTPUTS_FIELD = "stackOutputs"
OUTPUT_NAMES_FIELDS = (STACK_OUTPUT_NAMES_FIELD, STACK_OUTPUTS_FIELD)

_OUTPUT_NAMES_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {"type": "string"},
    "minItems": 1,
    "uniqueItems": True,
}

BACKEND_OUTPUT_ENTRY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": [VERSION_FIELD],
    "anyOf": [{"required": [field]} for field in OUTPUT_NAMES_FIELDS],
    "properties": {
        VERSION_FIELD: {"type": "string"},
        **{field: _OUTPUT_NAMES_SCHEMA for field in OUTPUT_NAMES_FIELDS},
    },
}

BACKEND_OUTPUT_METADATA_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": BACKEND_OUTPUT_ENTRY_SCHEMA,
}


def is_backend_output_entry(value: Any) -> bool:
    """
    Loose structural check. Anything that carries a version and a list of output names, under either key, is
    handed to the strict validation. Everything else is unrelated metadata and is left alone.
    """
    return (
        isinstance(value, Mapping)
        and VERSION_FIELD in value
        and any(field in value for field in OUTPUT_NAMES_FIELDS)
    )


def filter_backend_output_metadata(metadata: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in metadata.items() if is_backend_output_entry(value)}


def _format_violation(error: jsonschema.ValidationError) -> str:
    location = "/".join(str(part) for part in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


def _conflicting_names(metadata: Mapping[str, Any]) -> List[str]:
    return [
        f"{key}: {STACK_OUTPUT_NAMES_FIELD} and {STACK_OUTPUTS_FIELD} list different outputs"
        for key, entry in metadata.items()
        if isinstance(entry, Mapping)
        and all(field in entry for field in OUTPUT_NAMES_FIELDS)
        and entry[STACK_OUTPUT_NAMES_FIELD] != entry[STACK_OUTPUTS_FIELD]
    ]


def _output_names(entry: Mapping[str, Any]) -> List[str]:
    field = STACK_OUTPUT_NAMES_FIELD if STACK_OUTPUT_NAMES_FIELD in entry else STACK_OUTPUTS_FIELD
    return entry[field]


def parse_backend_output_metadata(metadata: Mapping[str, Any]) -> Dict[str, MetadataEntry]:
    """
    Validates the filtered metadata and converts it into MetadataEntry objects

    Parameters
    ----------
    metadata: Mapping[str, Any]
        Metadata entries that passed ``filter_backend_output_metadata``

    Returns
    -------
    Dict[str, MetadataEntry]
        Entries keyed by output group name, in the original order

    Raises
    ------
    SchemaValidationError
        Listing every violation found in the metadata
    """
    validator = jsonschema.Draft7Validator(BACKEND_OUTPUT_METADATA_SCHEMA)
    errors = sorted(validator.iter_errors(metadata), key=lambda e: [str(part) for part in e.absolute_path])
    violations = [_format_violation(error) for error in errors] + _conflicting_names(metadata)
    if violations:
        raise SchemaValidationError(violations)

    return {
        key: MetadataEntry(version=entry[VERSION_FIELD], stack_output_names=tuple(_output_names(entry)))
        for key, entry in metadata.items()
    }
