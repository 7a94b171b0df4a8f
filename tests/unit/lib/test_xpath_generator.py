"""Unit tests for termtree.lib.xpath_generator module."""

import pytest

from termtree.lib.xpath_generator import (
    TermXPathGenerator,
    attribute_predicates,
    qualify_path,
    qualify_step,
)
from termtree.models.term import Term


@pytest.mark.unit
class TestQualifyStep:
    """Tests for namespace qualification of path steps."""

    @pytest.mark.parametrize(
        "step,expected",
        [
            ("person", "oxns:person"),
            ("@title", "@title"),
            ("text()", "text()"),
            ("*", "*"),
            ("mods:name", "mods:name"),
            ("name[1]", "oxns:name[1]"),
            (
                'name[@authority="marc:relator"]',
                'oxns:name[@authority="marc:relator"]',
            ),
            ("mods:name[@type]", "mods:name[@type]"),
        ],
    )
    def test_qualify_step(self, step: str, expected: str) -> None:
        """Test which steps receive the prefix."""
        assert qualify_step(step, "oxns") == expected

    def test_no_prefix_leaves_step_unchanged(self) -> None:
        """Test an empty prefix disables qualification."""
        assert qualify_step("person", None) == "person"
        assert qualify_step("person", "") == "person"

    def test_qualify_path_handles_each_step(self) -> None:
        """Test multi-step paths are qualified step by step."""
        assert qualify_path("name/namePart", "oxns") == "oxns:name/oxns:namePart"
        assert qualify_path("name/@type", "oxns") == "oxns:name/@type"

    def test_qualify_path_with_predicates(self) -> None:
        """Test predicates do not stop later steps from being qualified."""
        assert (
            qualify_path("name/namePart[1]", "oxns")
            == "oxns:name/oxns:namePart[1]"
        )
        assert (
            qualify_path('name[@href="a/b"]/namePart', "oxns")
            == 'oxns:name[@href="a/b"]/oxns:namePart'
        )
        assert (
            qualify_path("name[namePart/@type]/role", "oxns")
            == "oxns:name[namePart/@type]/oxns:role"
        )


@pytest.mark.unit
class TestAttributePredicates:
    """Tests for attribute predicate clauses."""

    def test_empty_attributes(self) -> None:
        """Test no attributes produce no clause."""
        assert attribute_predicates({}) == ""

    def test_single_attribute(self) -> None:
        """Test one attribute produces an equality clause."""
        assert attribute_predicates({"type": "personal"}) == '[@type="personal"]'

    def test_multiple_attributes_joined_with_and(self) -> None:
        """Test several attributes are combined with 'and'."""
        result = attribute_predicates({"type": "personal", "lang": "en"})
        assert result == '[@type="personal" and @lang="en"]'

    def test_none_requires_absence(self) -> None:
        """Test a None value produces a not() clause."""
        assert attribute_predicates({"type": None}) == "[not(@type)]"

    def test_value_with_double_quote(self) -> None:
        """Test values with double quotes switch to single quotes."""
        assert attribute_predicates({"label": 'say "hi"'}) == "[@label='say \"hi\"']"

    def test_value_with_both_quotes_uses_concat(self) -> None:
        """Test values with both quote kinds are built with concat()."""
        result = attribute_predicates({"label": "it's \"x\""})
        assert result.startswith("[@label=concat(")


@pytest.mark.unit
class TestTermXPathGenerator:
    """Tests for absolute, relative and constrained query generation."""

    @pytest.fixture
    def generator(self) -> TermXPathGenerator:
        return TermXPathGenerator()

    def test_root_term_queries(self, generator: TermXPathGenerator) -> None:
        """Test queries for a term without ancestors."""
        term = Term("people")
        assert generator.compute_absolute(term) == "//oxns:people"
        assert generator.compute_relative(term) == "oxns:people"
        assert generator.compute_constrained(term) == "//oxns:people"

    def test_absolute_concatenates_ancestor_paths(
        self, generator: TermXPathGenerator
    ) -> None:
        """Test absolute query walks from root to the term."""
        root = Term("people")
        person = root.add_child(Term("person", attributes={"type": "personal"}))
        title = person.add_child(Term("title", path="@title"))

        assert generator.compute_absolute(title) == "//oxns:people/oxns:person/@title"
        assert generator.compute_relative(title) == "@title"

    def test_constrained_adds_own_predicates(
        self, generator: TermXPathGenerator
    ) -> None:
        """Test constrained query appends the term's attribute predicates."""
        root = Term("people")
        person = root.add_child(Term("person", attributes={"type": "personal"}))

        assert (
            generator.compute_constrained(person)
            == '//oxns:people/oxns:person[@type="personal"]'
        )

    def test_per_term_namespace_prefix(self, generator: TermXPathGenerator) -> None:
        """Test each step uses its own term's prefix."""
        root = Term("record", namespace_prefix="marc")
        field = root.add_child(Term("title", namespace_prefix=None))

        assert generator.compute_absolute(field) == "//marc:record/title"

    def test_variant_produces_union(self, generator: TermXPathGenerator) -> None:
        """Test variant_of adds an alternative branch."""
        root = Term("people")
        name = root.add_child(
            Term("name", attributes={"type": "given"}, variant_of="alternateName")
        )

        assert (
            generator.compute_absolute(name)
            == "//oxns:people/oxns:name | //oxns:people/oxns:alternateName"
        )
        assert generator.compute_constrained(name) == (
            '//oxns:people/oxns:name[@type="given"]'
            ' | //oxns:people/oxns:alternateName[@type="given"]'
        )

    def test_generation_is_pure(self, generator: TermXPathGenerator) -> None:
        """Test repeated calls give the same result."""
        root = Term("people")
        person = root.add_child(Term("person", attributes={"type": "personal"}))

        assert generator.compute_constrained(person) == generator.compute_constrained(
            person
        )

    def test_custom_generator_is_used_by_term(self) -> None:
        """Test a term derives its queries through its generator."""

        class FixedGenerator:
            def compute_absolute(self, term: Term) -> str:
                return f"abs:{term.name}"

            def compute_constrained(self, term: Term) -> str:
                return f"con:{term.name}"

            def compute_relative(self, term: Term) -> str:
                return f"rel:{term.name}"

        term = Term("people", generator=FixedGenerator())
        term.generate_xpath_queries()

        assert term.xpath == "abs:people"
        assert term.xpath_constrained == "con:people"
        assert term.xpath_relative == "rel:people"
