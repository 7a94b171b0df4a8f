"""Terminology: the owner of a finished term tree.

A Terminology holds the root term, gives every term a weak back-reference to
itself, runs the XPath derivation pass once the tree is complete and answers
pointer-path lookups for consumers such as a document layer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from termtree.lib.builder import TermBuilder
from termtree.lib.deserializer import (
    from_record,
    parse_definition_xml,
    parse_definition_xml_text,
    parse_definition_yaml,
    parse_definition_yaml_text,
)
from termtree.lib.errors import MalformedDefinitionError, TermNotFoundError
from termtree.lib.xpath_generator import XPathGenerator
from termtree.models.config import TermTreeConfig
from termtree.models.term import Term

logger = logging.getLogger(__name__)

XML_SUFFIXES = (".xml",)
YAML_SUFFIXES = (".yml", ".yaml")


class Terminology:
    """Registry wrapping a complete term tree.

    Attributes:
        root: The root term; lookups start at its children
        generator: XPath generator shared by every term in the tree
    """

    def __init__(self, root: Term, generator: XPathGenerator | None = None) -> None:
        self.root = root
        self.generator = generator or root.generator
        root.is_root_term = True
        for term in root.depth_first():
            term.terminology = self
            term.generator = self.generator
        root.generate_xpath_queries()
        logger.debug(f"Terminology '{root.name}' ready with {len(self)} terms")

    def __len__(self) -> int:
        return sum(1 for _ in self.root.depth_first())

    def __repr__(self) -> str:
        return f"Terminology(root={self.root.name!r})"

    @classmethod
    def from_builder(
        cls, builder: TermBuilder, generator: XPathGenerator | None = None
    ) -> Terminology:
        """Build the builder's tree and wrap it."""
        builder.set("is_root_term", True)
        return cls(builder.build(), generator)

    @classmethod
    def from_record(
        cls,
        record: Any,
        config: TermTreeConfig | None = None,
        generator: XPathGenerator | None = None,
    ) -> Terminology:
        """Deserialize a definition record and wrap the resulting tree."""
        return cls(from_record(record, config), generator)

    @classmethod
    def from_xml(
        cls, path: str | Path, config: TermTreeConfig | None = None
    ) -> Terminology:
        """Load from an XML definition file."""
        return cls.from_record(parse_definition_xml(path), config)

    @classmethod
    def from_xml_text(
        cls, text: str, config: TermTreeConfig | None = None
    ) -> Terminology:
        """Load from XML definition text."""
        return cls.from_record(parse_definition_xml_text(text), config)

    @classmethod
    def from_yaml(
        cls, path: str | Path, config: TermTreeConfig | None = None
    ) -> Terminology:
        """Load from a YAML definition file."""
        return cls.from_record(parse_definition_yaml(path), config)

    @classmethod
    def from_yaml_text(
        cls, text: str, config: TermTreeConfig | None = None
    ) -> Terminology:
        """Load from YAML definition text."""
        return cls.from_record(parse_definition_yaml_text(text), config)

    @classmethod
    def load(
        cls, path: str | Path, config: TermTreeConfig | None = None
    ) -> Terminology:
        """Load a definition file, choosing the format by its suffix.

        Raises:
            MalformedDefinitionError: If the suffix is not a known format
        """
        suffix = Path(path).suffix.lower()
        logger.debug(f"Loading definition file {path}")
        if suffix in XML_SUFFIXES:
            return cls.from_xml(Path(path), config)
        if suffix in YAML_SUFFIXES:
            return cls.from_yaml(Path(path), config)
        raise MalformedDefinitionError(
            f"Unsupported definition file type '{suffix}' for {path}; "
            f"expected one of {', '.join(XML_SUFFIXES + YAML_SUFFIXES)}"
        )

    def retrieve(self, *pointers: str) -> Term | None:
        """Return the term at the pointer path, or None on a miss."""
        return self.root.retrieve(*pointers)

    def has_term(self, *pointers: str) -> bool:
        return self.retrieve(*pointers) is not None

    def xpath_for(
        self, *pointers: str, constrained: bool = False, relative: bool = False
    ) -> str:
        """Return one of the derived queries for the term at the pointer path.

        Raises:
            TermNotFoundError: If the pointer path does not resolve
            ValueError: If both constrained and relative are requested
        """
        if constrained and relative:
            raise ValueError("Choose either constrained or relative, not both")
        term = self.retrieve(*pointers)
        if term is None:
            raise TermNotFoundError(pointers)
        if constrained:
            return term.xpath_constrained
        if relative:
            return term.xpath_relative
        return term.xpath

    def terms(self) -> Iterator[Term]:
        """Iterate every term below the root, depth-first."""
        for child in self.root.children.values():
            yield from child.depth_first()

    def regenerate(self) -> None:
        """Re-run the derivation pass over the whole tree."""
        self.root.generate_xpath_queries()

    def to_dict(self) -> dict[str, Any]:
        return self.root.to_dict()
