"""Definition record models.

Validated view of one term definition record, whatever shape it arrived in
(XML ``mapper`` element or a YAML/JSON mapping). Only the record's own
fields are modeled; nested child records are walked by the deserializer.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AttributeDefinition(BaseModel):
    """One attribute constraint of a term.

    A missing value means the attribute must be absent from the node.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Attribute name")
    value: str | None = Field(None, description="Expected literal value")


class TermDefinition(BaseModel):
    """Fields of a single term definition record."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(..., description="Term name, unique among siblings")
    path: str | None = Field(None, description="Path step from the parent term")
    required: bool = Field(False, description="Whether the field is mandatory")
    data_type: str | None = Field(
        None, alias="type", description="Semantic value type tag"
    )
    index_as: str | None = Field(None, description="Search indexing hint")
    variant_of: str | None = Field(None, description="Alternate path for the term")
    default_content_path: str | None = Field(
        None, description="Default text content path"
    )
    namespace_prefix: str | None = Field(
        None, description="Namespace alias qualifying the path"
    )
    attributes: dict[str, str | None] = Field(
        default_factory=dict, description="Attribute constraints"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name is not blank."""
        if not v.strip():
            raise ValueError("name must be non-empty")
        return v

    @field_validator("attributes", mode="before")
    @classmethod
    def normalize_attributes(cls, v: object) -> object:
        """Accept a list of name/value records as well as a plain mapping."""
        if isinstance(v, list):
            normalized: dict[str, str | None] = {}
            for item in v:
                attribute = AttributeDefinition.model_validate(item)
                normalized[attribute.name] = attribute.value
            return normalized
        return v
