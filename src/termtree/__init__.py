"""termtree - map document fields onto XML locations with term definition trees.

A term definition tree names the fields of an XML document and records,
for each field, the path step that reaches it and the attribute values that
tell it apart from its siblings. From that position the tree derives
absolute, relative and constrained XPath queries.

Main features:
- Build trees imperatively with chained TermBuilder calls
- Load trees from XML <mapper> or YAML definition files
- Pointer-path lookup of terms and their queries
- User/project YAML configuration with environment overrides
"""

from termtree.lib.builder import TermBuilder, TermSetting
from termtree.lib.deserializer import from_record
from termtree.lib.errors import (
    ConfigError,
    MalformedDefinitionError,
    TermNotFoundError,
    TermTreeError,
    UnrecognizedSettingError,
    ValidationError,
)
from termtree.lib.terminology import Terminology
from termtree.models.term import Term

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "MalformedDefinitionError",
    "Term",
    "TermBuilder",
    "TermNotFoundError",
    "TermSetting",
    "TermTreeError",
    "Terminology",
    "UnrecognizedSettingError",
    "ValidationError",
    "from_record",
]
