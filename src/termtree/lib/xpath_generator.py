"""XPath query generation for terms.

A term locates its value with three queries:

- relative: the term's own step plus attribute predicates, usable inside an
  already located parent node
- absolute: every step from the document root down to the term, joined with
  ``/``; a ``variant_of`` path adds a union branch
- constrained: the absolute query with the term's attribute predicates added
  to each union branch

Generators only read a term and its ancestors; caching is the term's job.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from termtree.models.term import Term

# Steps that must never be namespace qualified
_NODE_TEST_RE = re.compile(r"^(?:text|node|comment|processing-instruction)\(.*\)$")


class XPathGenerator(Protocol):
    """Collaborator that derives query strings for a term."""

    def compute_absolute(self, term: Term) -> str: ...

    def compute_constrained(self, term: Term) -> str: ...

    def compute_relative(self, term: Term) -> str: ...


def _split_steps(path: str) -> list[str]:
    """Split a path on ``/`` separators outside predicates and literals."""
    steps: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    for char in path:
        if quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == "/" and depth == 0:
            steps.append("".join(current))
            current = []
            continue
        current.append(char)
    steps.append("".join(current))
    return steps


def qualify_step(path: str, namespace_prefix: str | None) -> str:
    """Qualify a single path step with a namespace prefix.

    Only the node test before any predicate is inspected. Attribute steps
    (``@title``), node tests (``text()``), wildcards, self/parent steps and
    steps that already carry a prefix are returned unchanged, as is every
    step when there is no prefix.
    """
    if not namespace_prefix:
        return path
    node_test = path.split("[", 1)[0]
    if (
        node_test.startswith("@")
        or node_test in ("*", ".", "..")
        or ":" in node_test
        or _NODE_TEST_RE.match(node_test)
    ):
        return path
    return f"{namespace_prefix}:{path}"


def qualify_path(path: str, namespace_prefix: str | None) -> str:
    """Qualify every step of a ``/``-separated path.

    Slashes inside predicates or quoted literals do not separate steps.
    """
    return "/".join(
        qualify_step(step, namespace_prefix) if step else step
        for step in _split_steps(path)
    )


def attribute_predicates(attributes: dict[str, str | None]) -> str:
    """Build a predicate clause from an attribute constraint mapping.

    A value of None requires the attribute to be absent.

    Returns:
        ``[...]`` clause, or an empty string when there are no attributes
    """
    clauses = []
    for attr_name, attr_value in attributes.items():
        if attr_value is None:
            clauses.append(f"not(@{attr_name})")
        else:
            clauses.append(f"@{attr_name}={_quote(attr_value)}")
    if not clauses:
        return ""
    return "[" + " and ".join(clauses) + "]"


def _quote(value: str) -> str:
    """Quote a literal for use in an XPath 1.0 expression."""
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    # XPath 1.0 has no escape syntax; split around double quotes
    parts = value.split('"')
    pieces = []
    for i, part in enumerate(parts):
        if part:
            pieces.append(f'"{part}"')
        if i < len(parts) - 1:
            pieces.append("'\"'")
    return "concat(" + ", ".join(pieces) + ")"


class TermXPathGenerator:
    """Default XPath generator for namespace-qualified term trees."""

    def compute_relative(self, term: Term) -> str:
        step = qualify_path(term.path, term.namespace_prefix)
        return step + attribute_predicates(dict(term.attributes))

    def compute_absolute(self, term: Term) -> str:
        return " | ".join(self._absolute_branches(term))

    def compute_constrained(self, term: Term) -> str:
        predicates = attribute_predicates(dict(term.attributes))
        return " | ".join(
            branch + predicates for branch in self._absolute_branches(term)
        )

    def _absolute_branches(self, term: Term) -> list[str]:
        """Return the main absolute path plus the variant branch, if any."""
        parent_path = self._chain(term.ancestors)
        own_step = qualify_path(term.path, term.namespace_prefix)
        branches = [self._join(parent_path, own_step)]
        if term.variant_of:
            variant_step = qualify_path(term.variant_of, term.namespace_prefix)
            branches.append(self._join(parent_path, variant_step))
        return branches

    @staticmethod
    def _chain(ancestors: list[Term]) -> str:
        return "/".join(
            qualify_path(ancestor.path, ancestor.namespace_prefix)
            for ancestor in ancestors
        )

    @staticmethod
    def _join(parent_path: str, step: str) -> str:
        if parent_path:
            return f"//{parent_path}/{step}"
        return f"//{step}"


default_generator = TermXPathGenerator()
