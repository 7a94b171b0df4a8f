"""Tests for flattening pydantic errors into readable messages."""

import pytest
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from termtree.config.validator import flatten_pydantic_errors
from termtree.models.definition import TermDefinition


@pytest.mark.unit
class TestFlattenPydanticErrors:
    """Tests for flatten_pydantic_errors."""

    def test_missing_field(self) -> None:
        """Test a missing field is reported by name."""

        class Model(BaseModel):
            name: str

        with pytest.raises(PydanticValidationError) as exc_info:
            Model()  # type: ignore[call-arg]

        messages = flatten_pydantic_errors(exc_info.value)
        assert len(messages) == 1
        assert messages == ["Field 'name': is required"]

    def test_value_error_includes_input(self) -> None:
        """Test custom validator errors show the received value."""
        with pytest.raises(PydanticValidationError) as exc_info:
            TermDefinition(name=" ")

        messages = flatten_pydantic_errors(exc_info.value)
        assert "received: ' '" in messages[0]

    def test_nested_location(self) -> None:
        """Test nested locations are joined with dots."""
        with pytest.raises(PydanticValidationError) as exc_info:
            TermDefinition.model_validate({"name": "p", "attributes": {"type": 1}})

        messages = flatten_pydantic_errors(exc_info.value)
        assert "Field 'attributes.type" in messages[0]

    def test_scope_prefixes_location(self) -> None:
        """Test a scope such as a record name leads every location."""
        with pytest.raises(PydanticValidationError) as exc_info:
            TermDefinition.model_validate({"name": "person", "required": "often"})

        messages = flatten_pydantic_errors(exc_info.value, scope="person")
        assert messages == [
            "Field 'person.required': Input should be a valid boolean, "
            "unable to interpret input (received: 'often')"
        ]

    def test_unknown_field_is_named(self) -> None:
        """Test forbidden extra keys are reported with their value."""
        with pytest.raises(PydanticValidationError) as exc_info:
            TermDefinition.model_validate({"name": "p", "requird": True})

        messages = flatten_pydantic_errors(exc_info.value)
        assert messages == [
            "Field 'requird': is not a recognized field (received: True)"
        ]
