"""Term model for termtree definitions.

A Term is one addressable field of a document schema: a named position in a
definition tree with a path step, an attribute constraint set and three
derived XPath queries. Terms own their children; the parent link and the
terminology link are weak references so a tree never forms ownership cycles.

Derived queries are cached. Changing anything a query depends on (path,
namespace prefix, attributes, variant path, parent) marks the term and all
of its descendants stale, and the ``xpath*`` accessors recompute on demand.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from termtree.config.defaults import DEFAULT_DATA_TYPE, DEFAULT_NAMESPACE_PREFIX
from termtree.lib.xpath_generator import XPathGenerator, default_generator

if TYPE_CHECKING:
    from termtree.lib.terminology import Terminology


class Term:
    """A named field definition mapped onto a location in an XML document."""

    def __init__(
        self,
        name: str,
        *,
        path: str | None = None,
        required: bool = False,
        data_type: str = DEFAULT_DATA_TYPE,
        index_as: Any = None,
        variant_of: str | None = None,
        default_content_path: str | None = None,
        attributes: Mapping[str, str | None] | None = None,
        namespace_prefix: str | None = DEFAULT_NAMESPACE_PREFIX,
        is_root_term: bool = False,
        generator: XPathGenerator | None = None,
    ) -> None:
        self._name = name
        self.required = required
        self.data_type = data_type
        self.index_as = index_as
        self.default_content_path = default_content_path
        self.is_root_term = is_root_term
        self.internal_source: Any = None
        self.generator: XPathGenerator = generator or default_generator

        self._path = self._default_path(path)
        self._namespace_prefix = namespace_prefix
        self._variant_of = variant_of
        self._attributes: dict[str, str | None] = dict(attributes or {})
        self._children: dict[str, Term] = {}
        self._parent_ref: weakref.ReferenceType[Term] | None = None
        self._terminology_ref: weakref.ReferenceType[Terminology] | None = None

        self._stale = True
        self._xpath: str | None = None
        self._xpath_relative: str | None = None
        self._xpath_constrained: str | None = None

    def __repr__(self) -> str:
        return f"Term(name={self.name!r}, path={self._path!r})"

    def _default_path(self, path: str | None) -> str:
        if path is None or path == "":
            return str(self.name)
        return path

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        """Rename the term, moving it to the new key of its parent."""
        parent = self.parent
        if parent is None or parent._children.get(self._name) is not self:
            self._name = value
            return
        del parent._children[self._name]
        self._name = value
        _link(parent, self)

    # -- fields that feed query derivation ---------------------------------

    @property
    def path(self) -> str:
        """Path step from the parent; never empty."""
        return self._path

    @path.setter
    def path(self, value: str | None) -> None:
        self._path = self._default_path(value)
        self.invalidate()

    @property
    def namespace_prefix(self) -> str | None:
        return self._namespace_prefix

    @namespace_prefix.setter
    def namespace_prefix(self, value: str | None) -> None:
        self._namespace_prefix = value
        self.invalidate()

    @property
    def variant_of(self) -> str | None:
        """Alternate path for the same term, queried as a union."""
        return self._variant_of

    @variant_of.setter
    def variant_of(self, value: str | None) -> None:
        self._variant_of = value
        self.invalidate()

    @property
    def attributes(self) -> Mapping[str, str | None]:
        """Read-only attribute constraints (name -> expected literal value).

        A None value requires the attribute to be absent.
        """
        return MappingProxyType(self._attributes)

    @attributes.setter
    def attributes(self, value: Mapping[str, str | None] | None) -> None:
        self._attributes = dict(value or {})
        self.invalidate()

    def set_attribute(self, name: str, value: str | None) -> None:
        """Add or replace a single attribute constraint."""
        self._attributes[name] = value
        self.invalidate()

    def remove_attribute(self, name: str) -> None:
        """Drop an attribute constraint if present."""
        if name in self._attributes:
            del self._attributes[name]
            self.invalidate()

    # -- tree linkage ---------------------------------------------------------

    @property
    def children(self) -> Mapping[str, Term]:
        """Read-only view of the child terms, keyed by child name."""
        return MappingProxyType(self._children)

    @property
    def parent(self) -> Term | None:
        """The current parent, or None for a root (or detached) term."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def ancestors(self) -> list[Term]:
        """Ancestors from the tree root down; the immediate parent is last."""
        chain: list[Term] = []
        node = self.parent
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain

    @property
    def is_root(self) -> bool:
        return bool(self.is_root_term)

    @property
    def terminology(self) -> Terminology | None:
        """The owning terminology, if one is still alive."""
        if self._terminology_ref is None:
            return None
        return self._terminology_ref()

    @terminology.setter
    def terminology(self, value: Terminology | None) -> None:
        self._terminology_ref = weakref.ref(value) if value is not None else None

    def add_child(self, child: Term) -> Term:
        """Attach child under its own name, replacing any same-named child.

        Returns:
            The attached child
        """
        _link(self, child)
        return child

    def set_parent(self, parent: Term) -> None:
        """Attach this term under parent; the inverse view of add_child."""
        _link(parent, self)

    def retrieve_child(self, name: str) -> Term | None:
        return self._children.get(name)

    def retrieve(self, *pointers: str) -> Term | None:
        """Follow a pointer path of child names down from this term.

        Args:
            pointers: Child names, outermost first

        Returns:
            The term reached by the last pointer, or None if any name misses

        Raises:
            ValueError: If no pointers are given
        """
        if not pointers:
            raise ValueError("retrieve() requires at least one pointer")
        target: Term | None = self
        for pointer in pointers:
            assert target is not None
            target = target._children.get(pointer)
            if target is None:
                return None
        return target

    @property
    def pointer(self) -> tuple[str, ...]:
        """Child names leading from the tree root to this term."""
        chain = self.ancestors + [self]
        return tuple(term.name for term in chain[1:])

    def depth_first(self) -> Iterator[Term]:
        """Traverse the subtree depth-first, yielding self then children."""
        yield self
        for child in self._children.values():
            yield from child.depth_first()

    # -- derived queries ------------------------------------------------------

    def invalidate(self) -> None:
        """Mark this term and every descendant as needing re-derivation."""
        for term in self.depth_first():
            term._stale = True

    def generate_xpath_queries(self) -> Term:
        """Derive and cache the queries for this term and all descendants.

        Parents are always derived before their children. Safe to call any
        number of times.
        """
        self._derive()
        for child in self._children.values():
            child.generate_xpath_queries()
        return self

    def _derive(self) -> None:
        self._xpath = self.generator.compute_absolute(self)
        self._xpath_constrained = self.generator.compute_constrained(self)
        self._xpath_relative = self.generator.compute_relative(self)
        self._stale = False

    @property
    def xpath(self) -> str:
        """Absolute query from the document root."""
        if self._stale:
            self._derive()
        assert self._xpath is not None
        return self._xpath

    @property
    def xpath_absolute(self) -> str:
        return self.xpath

    @property
    def xpath_relative(self) -> str:
        """Query relative to the located parent node."""
        if self._stale:
            self._derive()
        assert self._xpath_relative is not None
        return self._xpath_relative

    @property
    def xpath_constrained(self) -> str:
        """Absolute query with this term's attribute predicates."""
        if self._stale:
            self._derive()
        assert self._xpath_constrained is not None
        return self._xpath_constrained

    def to_dict(self) -> dict[str, Any]:
        """Summarize the subtree for display and debugging."""
        return {
            "name": self.name,
            "path": self.path,
            "required": self.required,
            "data_type": self.data_type,
            "index_as": self.index_as,
            "variant_of": self.variant_of,
            "default_content_path": self.default_content_path,
            "namespace_prefix": self.namespace_prefix,
            "attributes": dict(self._attributes),
            "xpath": self.xpath,
            "xpath_constrained": self.xpath_constrained,
            "xpath_relative": self.xpath_relative,
            "children": [child.to_dict() for child in self._children.values()],
        }


def _link(parent: Term, child: Term) -> None:
    """Establish the parent/child edge, detaching whatever it replaces."""
    previous = child.parent
    if (
        previous is not None
        and previous is not parent
        and previous._children.get(child.name) is child
    ):
        del previous._children[child.name]

    displaced = parent._children.get(child.name)
    if displaced is not None and displaced is not child:
        displaced._parent_ref = None
        displaced.invalidate()

    parent._children[child.name] = child
    child._parent_ref = weakref.ref(parent)

    owner = parent.terminology
    if owner is not None:
        for term in child.depth_first():
            term.terminology = owner
    child.invalidate()
