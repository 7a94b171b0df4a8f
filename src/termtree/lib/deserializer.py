"""Rebuild term trees from definition records.

A definition record is either an XML ``mapper`` element::

    <mapper name="person" path="name" required="true">
      <attribute name="type" value="personal"/>
      <mapper name="title" path="@title"/>
    </mapper>

or a mapping of the same shape (as loaded from YAML or JSON)::

    name: person
    path: name
    required: true
    attributes: {type: personal}
    children:
      - {name: title, path: "@title"}

``from_record`` does not derive XPath queries; the owner of the finished
tree runs that pass once (``Terminology`` does it on construction).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from lxml import etree
from pydantic import ValidationError as PydanticValidationError

from termtree.config.validator import flatten_pydantic_errors
from termtree.lib.errors import FileNotFoundError, MalformedDefinitionError
from termtree.models.config import TermTreeConfig
from termtree.models.definition import TermDefinition
from termtree.models.term import Term

logger = logging.getLogger(__name__)

# Scalar attributes read from a record, as named in the record
SCALAR_FIELDS = (
    "index_as",
    "required",
    "type",
    "variant_of",
    "path",
    "default_content_path",
    "namespace_prefix",
)

MAPPER_TAG = "mapper"
ATTRIBUTE_TAG = "attribute"
CHILD_KEYS = ("children", "mappers")


def from_record(record: Any, config: TermTreeConfig | None = None) -> Term:
    """Build a Term tree from a definition record.

    Args:
        record: XML ``mapper`` element or definition mapping
        config: Supplies defaults for data type and namespace prefix

    Returns:
        Root Term of the rebuilt tree, with ``internal_source`` set to the
        record it came from

    Raises:
        MalformedDefinitionError: If this record or any nested record is
            missing its name or carries invalid field values
    """
    if isinstance(record, Mapping):
        fields, child_records = _read_mapping(record)
    elif _is_element(record):
        fields, child_records = _read_element(record)
    else:
        raise MalformedDefinitionError(
            f"Unsupported record type {type(record).__name__}"
        )

    definition = _validate(fields)
    term = _term_from_definition(definition, config)
    term.internal_source = record

    for child_record in child_records:
        term.add_child(from_record(child_record, config))

    logger.debug(
        f"Deserialized term '{term.name}' with {len(term.children)} children"
    )
    return term


def _is_element(record: Any) -> bool:
    return hasattr(record, "tag") and hasattr(record, "get") and hasattr(
        record, "findall"
    )


def _read_element(element: Any) -> tuple[dict[str, Any], list[Any]]:
    fields: dict[str, Any] = {"name": element.get("name")}
    for field_name in SCALAR_FIELDS:
        value = element.get(field_name)
        if value is not None:
            fields[field_name] = value

    attributes: dict[str, str | None] = {}
    for attribute in element.findall(ATTRIBUTE_TAG):
        attr_name = attribute.get("name")
        if not attr_name:
            raise MalformedDefinitionError(
                "attribute record is missing its name", fields["name"]
            )
        attributes[attr_name] = attribute.get("value")
    fields["attributes"] = attributes

    return fields, list(element.findall(MAPPER_TAG))


def _read_mapping(record: Mapping[str, Any]) -> tuple[dict[str, Any], list[Any]]:
    fields = {key: value for key, value in record.items() if key not in CHILD_KEYS}
    child_records: list[Any] = []
    for key in CHILD_KEYS:
        nested = record.get(key)
        if nested is None:
            continue
        if not isinstance(nested, list):
            raise MalformedDefinitionError(
                f"'{key}' must be a list of records", record.get("name")
            )
        child_records.extend(nested)
    return fields, child_records


def _validate(fields: dict[str, Any]) -> TermDefinition:
    name = fields.get("name")
    if name is None or (isinstance(name, str) and not name.strip()):
        raise MalformedDefinitionError("record is missing the required 'name'")
    try:
        return TermDefinition.model_validate(fields)
    except PydanticValidationError as e:
        error_text = "\n".join(flatten_pydantic_errors(e, scope=str(name)))
        raise MalformedDefinitionError(error_text, str(name)) from e


def _term_from_definition(
    definition: TermDefinition, config: TermTreeConfig | None
) -> Term:
    defaults = config or TermTreeConfig()
    return Term(
        definition.name,
        path=definition.path,
        required=definition.required,
        data_type=definition.data_type or defaults.data_type,
        index_as=definition.index_as,
        variant_of=definition.variant_of,
        default_content_path=definition.default_content_path,
        attributes=definition.attributes,
        namespace_prefix=(
            definition.namespace_prefix
            if definition.namespace_prefix is not None
            else defaults.namespace_prefix
        ),
    )


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False, no_network=True, remove_comments=True
    )


def parse_definition_xml(path: str | Path) -> Any:
    """Read an XML definition file into its root ``mapper`` element.

    Raises:
        FileNotFoundError: If the file cannot be read
        MalformedDefinitionError: If the XML is invalid or its root is not
            a ``mapper`` element
    """
    return parse_definition_xml_text(_read_file(path))


def parse_definition_xml_text(text: str) -> Any:
    """Parse XML definition text into its root ``mapper`` element."""
    try:
        root = etree.fromstring(text.encode("utf-8"), parser=_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedDefinitionError(f"Invalid definition XML: {e}") from e

    if root.tag != MAPPER_TAG:
        raise MalformedDefinitionError(
            f"Root element must be <{MAPPER_TAG}>, got <{root.tag}>"
        )
    return root


def parse_definition_yaml(path: str | Path) -> dict[str, Any]:
    """Read a YAML definition file into its root record mapping.

    Raises:
        FileNotFoundError: If the file cannot be read
        MalformedDefinitionError: If the YAML is invalid or not a mapping
    """
    return parse_definition_yaml_text(_read_file(path))


def parse_definition_yaml_text(text: str) -> dict[str, Any]:
    """Parse YAML definition text into its root record mapping."""
    try:
        content = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedDefinitionError(f"Invalid definition YAML: {e}") from e

    if not isinstance(content, dict):
        raise MalformedDefinitionError("Definition YAML must be a mapping")
    return content


def _read_file(path: str | Path) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileNotFoundError(
            str(path),
            f"Definition file not found at {path}. "
            f"Please ensure the file exists at this path.",
        ) from e
