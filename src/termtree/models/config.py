"""Configuration models for termtree.

Defines the settings that shape how term trees are built and deserialized.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from termtree.config.defaults import DEFAULT_DATA_TYPE, DEFAULT_NAMESPACE_PREFIX


class TermTreeConfig(BaseModel):
    """Settings applied to every builder and deserializer call.

    Loaded from user/project YAML files and environment variables by
    ``ConfigLoader``; every field has a default so an empty config is valid.
    """

    model_config = ConfigDict(extra="forbid")

    namespace_prefix: str = Field(
        default=DEFAULT_NAMESPACE_PREFIX,
        description="Namespace alias used to qualify term paths",
    )
    data_type: str = Field(
        default=DEFAULT_DATA_TYPE,
        description="Value type tag assigned to terms that do not declare one",
    )
    strict_settings: bool = Field(
        default=False,
        description="Raise instead of warn when a builder receives an unknown setting",
    )

    @field_validator("data_type")
    @classmethod
    def validate_data_type(cls, v: str) -> str:
        """Validate data_type is not blank."""
        if not v.strip():
            raise ValueError("data_type must be non-empty")
        return v
