"""Imperative builder for term trees.

TermBuilder collects settings through chained calls and materializes a Term
tree::

    people = TermBuilder("people", is_root_term=True)
    person = people.child("person")
    person.child("title").path("@title").required(True)
    root = people.build()

Any unknown attribute on a builder is a setter for the setting of that name.
Recognized settings are the members of TermSetting and are applied to the
Term through a fixed setter table. Other names are kept in ``extensions``
and reported (or rejected in strict mode) instead of being silently lost.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from functools import partial
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from termtree.config.defaults import DEFAULT_TERM_SETTINGS
from termtree.lib.errors import UnrecognizedSettingError, ValidationError
from termtree.models.config import TermTreeConfig
from termtree.models.term import Term

logger = logging.getLogger(__name__)


class TermSetting(str, Enum):
    """Settings a builder knows how to apply to a Term."""

    PATH = "path"
    REQUIRED = "required"
    DATA_TYPE = "data_type"
    INDEX_AS = "index_as"
    VARIANT_OF = "variant_of"
    ATTRIBUTES = "attributes"
    DEFAULT_CONTENT_PATH = "default_content_path"
    NAMESPACE_PREFIX = "namespace_prefix"
    IS_ROOT_TERM = "is_root_term"


_bool = TypeAdapter(bool)
_str = TypeAdapter(str)
_optional_str = TypeAdapter(str | None)
_attributes = TypeAdapter(dict[str, str | None])


def _setter(
    attr: str, adapter: TypeAdapter[Any], expected: str
) -> Callable[[Term, Any], None]:
    def apply(term: Term, value: Any) -> None:
        try:
            converted = adapter.validate_python(value)
        except PydanticValidationError as e:
            raise ValidationError(
                field=f"{term.name}.{attr}",
                message=f"Invalid value for setting '{attr}'",
                expected=expected,
                actual=repr(value),
            ) from e
        setattr(term, attr, converted)

    return apply


def _set_index_as(term: Term, value: Any) -> None:
    # Free-form hint for external indexers, kept as given
    term.index_as = value


_SETTERS: dict[TermSetting, Callable[[Term, Any], None]] = {
    TermSetting.PATH: _setter("path", _str, "string"),
    TermSetting.REQUIRED: _setter("required", _bool, "boolean"),
    TermSetting.DATA_TYPE: _setter("data_type", _str, "string"),
    TermSetting.INDEX_AS: _set_index_as,
    TermSetting.VARIANT_OF: _setter("variant_of", _optional_str, "string or None"),
    TermSetting.ATTRIBUTES: _setter(
        "attributes", _attributes, "mapping of attribute name to string or None"
    ),
    TermSetting.DEFAULT_CONTENT_PATH: _setter(
        "default_content_path", _optional_str, "string or None"
    ),
    TermSetting.NAMESPACE_PREFIX: _setter(
        "namespace_prefix", _optional_str, "string or None"
    ),
    TermSetting.IS_ROOT_TERM: _setter("is_root_term", _bool, "boolean"),
}


class TermBuilder:
    """Mutable accumulator of term settings and child builders.

    Attributes:
        name: Name of the term to build
        settings: Recognized settings, applied to the Term on build
        extensions: Settings no Term field matches, kept for callers
        children: Child builders keyed by name
    """

    def __init__(
        self,
        name: str,
        *,
        config: TermTreeConfig | None = None,
        strict: bool | None = None,
        **settings: Any,
    ) -> None:
        """Create a builder, optionally seeding it with settings.

        Args:
            name: Name of the term to build
            config: Supplies default data type, namespace prefix and strictness
            strict: Raise on unrecognized settings (overrides config)
            settings: Initial settings, as if set one by one
        """
        self.name = name
        self.config = config
        if strict is None:
            strict = config.strict_settings if config is not None else False
        self.strict = strict

        self.settings: dict[TermSetting, Any] = {
            TermSetting(key): value for key, value in DEFAULT_TERM_SETTINGS.items()
        }
        if config is not None:
            self.settings[TermSetting.DATA_TYPE] = config.data_type
            self.settings[TermSetting.NAMESPACE_PREFIX] = config.namespace_prefix
        self.extensions: dict[str, Any] = {}
        self.children: dict[str, TermBuilder] = {}

        for key, value in settings.items():
            self.set(key, value)

    def __repr__(self) -> str:
        return f"TermBuilder(name={self.name!r})"

    def __getattr__(self, key: str) -> Callable[..., TermBuilder]:
        # Only reached for names that are not real attributes or methods
        if key.startswith("_"):
            raise AttributeError(key)
        return partial(self.set, key)

    def set(self, key: str | TermSetting, *values: Any) -> TermBuilder:
        """Record a setting and return the builder for chaining.

        One value is stored as is; several are stored as a tuple.

        Raises:
            TypeError: If no value is given
            UnrecognizedSettingError: For unknown keys in strict mode
        """
        if not values:
            raise TypeError(f"Setting '{key}' on '{self.name}' requires a value")
        value = values[0] if len(values) == 1 else tuple(values)

        try:
            setting = TermSetting(key)
        except ValueError:
            self._record_extension(str(key), value)
            return self

        self.settings[setting] = value
        return self

    def _record_extension(self, key: str, value: Any) -> None:
        if self.strict:
            raise UnrecognizedSettingError(key, self.name)
        logger.warning(
            f"Unrecognized setting '{key}' on term '{self.name}'; "
            f"kept in extensions and not applied to the term"
        )
        self.extensions[key] = value

    def add_child(self, child: TermBuilder) -> TermBuilder:
        """Register child under its own name, replacing any same-named child."""
        if child.name in self.children:
            logger.debug(f"Replacing child builder '{child.name}' of '{self.name}'")
        self.children[child.name] = child
        return child

    def child(self, name: str, **settings: Any) -> TermBuilder:
        """Create, register and return a child builder with this builder's config."""
        return self.add_child(
            TermBuilder(name, config=self.config, strict=self.strict, **settings)
        )

    def build(self) -> Term:
        """Build the Term tree and derive its XPath queries.

        Returns:
            The root Term of the built tree

        Raises:
            ValidationError: If a setting value has the wrong type
        """
        term = self._build_tree()
        term.generate_xpath_queries()
        logger.debug(f"Built term tree '{self.name}'")
        return term

    def _build_tree(self) -> Term:
        term = Term(self.name)
        for setting, value in self.settings.items():
            _SETTERS[setting](term, value)
        for child in self.children.values():
            term.add_child(child._build_tree())
        return term
