"""Tests for inheritance enrichment."""

from java_info.enricher import InheritanceEnricher, merge_documentation
from java_info.failures import Failure
from java_info.models import ClassDescriptor, MethodDescriptor, Origin, OriginKind


class FakeIntrospector:
    """Introspector backed by a fixed ancestor table."""

    def __init__(self, ancestors: dict[str, list[str] | Failure]) -> None:
        self.ancestors = ancestors
        self.calls: list[str] = []

    def resolve_origin(self, class_name: str) -> Origin:
        return Origin(class_name=class_name, kind=OriginKind.UNRESOLVED)

    def direct_ancestors(self, class_name: str) -> list[str] | Failure:
        self.calls.append(class_name)
        return self.ancestors.get(class_name, [])


class FakeExtractor:
    """Extraction function backed by fixed descriptors, counting calls."""

    def __init__(self, descriptors: dict[str, ClassDescriptor | Failure]) -> None:
        self.descriptors = descriptors
        self.calls: list[str] = []

    def __call__(self, class_name: str) -> ClassDescriptor | Failure:
        self.calls.append(class_name)
        return self.descriptors.get(
            class_name, Failure.not_found(class_name, "no such class")
        )


def method(
    name: str,
    description: str = "",
    params: dict[str, str] | None = None,
    returns: str | None = None,
    declaration: str | None = None,
) -> MethodDescriptor:
    """Build a method descriptor."""
    return MethodDescriptor(
        name=name,
        declaration=declaration or f"public void {name}()",
        description=description,
        params=params or {},
        returns=returns,
    )


def descriptor(name: str, *methods: MethodDescriptor) -> ClassDescriptor:
    """Build a class descriptor."""
    return ClassDescriptor(name=name, description=None, methods=list(methods))


class TestMergeDocumentation:
    """Tests for merge_documentation()."""

    def test_parent_fields_fill_child(self) -> None:
        """Test that every parent-supplied field is taken."""
        child = method("get", declaration="public E get(int index)")
        parent = method("get", "Gets.", {"index": "position"}, "the element")

        merged = merge_documentation(child, parent)

        assert merged.declaration == "public E get(int index)"
        assert merged.description == "Gets."
        assert merged.params == {"index": "position"}
        assert merged.returns == "the element"

    def test_parent_with_only_return_keeps_child_params(self) -> None:
        """Test that absent parent fields never erase child fields."""
        child = method("get", "Child text.", {"index": "child index"})
        parent = method("get", returns="the element")

        merged = merge_documentation(child, parent)

        assert merged.description == "Child text."
        assert merged.params == {"index": "child index"}
        assert merged.returns == "the element"

    def test_parent_params_win_on_overlap(self) -> None:
        """Test the parameter merge direction."""
        child = method("put", params={"key": "child key", "extra": "child only"})
        parent = method("put", params={"key": "parent key", "value": "parent value"})

        merged = merge_documentation(child, parent)

        assert merged.params == {
            "key": "parent key",
            "extra": "child only",
            "value": "parent value",
        }

    def test_child_is_not_mutated(self) -> None:
        """Test that merging returns a new descriptor."""
        child = method("get")
        merge_documentation(child, method("get", "Gets."))

        assert child.description == ""


class TestInheritanceEnricher:
    """Tests for InheritanceEnricher.enrich()."""

    def test_undocumented_method_inherits_from_superclass(self) -> None:
        """Test the basic superclass case."""
        introspector = FakeIntrospector({"a.Child": ["a.Parent"]})
        extractor = FakeExtractor(
            {"a.Parent": descriptor("a.Parent", method("run", "Runs.", {}, "status"))}
        )
        enricher = InheritanceEnricher(introspector, extractor)

        result = enricher.enrich(descriptor("a.Child", method("run")))

        assert result.methods[0].description == "Runs."
        assert result.methods[0].returns == "status"

    def test_fully_documented_methods_are_untouched(self) -> None:
        """Test that complete documentation is never replaced or looked up."""
        full = method("run", "Own.", {"x": "own x"}, "own result")
        introspector = FakeIntrospector({"a.Child": ["a.Parent"]})
        extractor = FakeExtractor(
            {"a.Parent": descriptor("a.Parent", method("run", "Parent.", {}, "p"))}
        )
        enricher = InheritanceEnricher(introspector, extractor)
        original = descriptor("a.Child", full)

        result = enricher.enrich(original)

        assert result is original
        assert introspector.calls == []
        assert extractor.calls == []

    def test_first_ancestor_with_docs_wins(self) -> None:
        """Test ancestor order: superclass before interfaces."""
        introspector = FakeIntrospector({"a.Child": ["a.Parent", "a.Iface"]})
        extractor = FakeExtractor(
            {
                "a.Parent": descriptor("a.Parent", method("run", "From parent.")),
                "a.Iface": descriptor("a.Iface", method("run", "From iface.", {}, "r")),
            }
        )
        enricher = InheritanceEnricher(introspector, extractor)

        result = enricher.enrich(descriptor("a.Child", method("run")))

        assert result.methods[0].description == "From parent."
        assert result.methods[0].returns is None

    def test_undocumented_ancestor_method_is_skipped(self) -> None:
        """Test that an ancestor with only bare overloads is passed over."""
        introspector = FakeIntrospector({"a.Child": ["a.Parent", "a.Iface"]})
        extractor = FakeExtractor(
            {
                "a.Parent": descriptor("a.Parent", method("run")),
                "a.Iface": descriptor("a.Iface", method("run", "From iface.")),
            }
        )
        enricher = InheritanceEnricher(introspector, extractor)

        result = enricher.enrich(descriptor("a.Child", method("run")))

        assert result.methods[0].description == "From iface."

    def test_first_documented_overload_within_ancestor(self) -> None:
        """Test that overloads are matched by name only."""
        introspector = FakeIntrospector({"a.Child": ["a.Parent"]})
        extractor = FakeExtractor(
            {
                "a.Parent": descriptor(
                    "a.Parent",
                    method("add", declaration="public void add(int i)"),
                    method("add", "Adds one.", declaration="public void add(Object o)"),
                    method("add", "Adds two.", declaration="public void add(int i, Object o)"),
                )
            }
        )
        enricher = InheritanceEnricher(introspector, extractor)

        result = enricher.enrich(
            descriptor("a.Child", method("add", declaration="public void add(long l)"))
        )

        assert result.methods[0].description == "Adds one."
        assert result.methods[0].declaration == "public void add(long l)"

    def test_enrichment_is_not_transitive(self) -> None:
        """Test that grandparents are never consulted."""
        introspector = FakeIntrospector(
            {"a.Child": ["a.Parent"], "a.Parent": ["a.Grandparent"]}
        )
        extractor = FakeExtractor(
            {
                "a.Parent": descriptor("a.Parent", method("run")),
                "a.Grandparent": descriptor("a.Grandparent", method("run", "Deep.")),
            }
        )
        enricher = InheritanceEnricher(introspector, extractor)

        result = enricher.enrich(descriptor("a.Child", method("run")))

        assert result.methods[0].description == ""
        assert introspector.calls == ["a.Child"]
        assert "a.Grandparent" not in extractor.calls

    def test_each_ancestor_extracted_once(self) -> None:
        """Test that several methods share one extraction per ancestor."""
        introspector = FakeIntrospector({"a.Child": ["a.Parent"]})
        extractor = FakeExtractor(
            {
                "a.Parent": descriptor(
                    "a.Parent", method("one", "One."), method("two", "Two.")
                )
            }
        )
        enricher = InheritanceEnricher(introspector, extractor)

        result = enricher.enrich(
            descriptor("a.Child", method("one"), method("two"), method("three"))
        )

        assert [m.description for m in result.methods] == ["One.", "Two.", ""]
        assert extractor.calls == ["a.Parent"]

    def test_failing_ancestor_is_skipped(self) -> None:
        """Test that an ancestor without sources does not stop enrichment."""
        introspector = FakeIntrospector({"a.Child": ["a.Missing", "a.Iface"]})
        extractor = FakeExtractor(
            {"a.Iface": descriptor("a.Iface", method("run", "From iface."))}
        )
        enricher = InheritanceEnricher(introspector, extractor)

        result = enricher.enrich(descriptor("a.Child", method("run")))

        assert result.methods[0].description == "From iface."

    def test_ancestor_resolution_failure_returns_input(self) -> None:
        """Test that an unresolvable class is returned unchanged."""
        introspector = FakeIntrospector(
            {"a.Child": Failure.resolution("a.Child", "no class file")}
        )
        enricher = InheritanceEnricher(introspector, FakeExtractor({}))
        original = descriptor("a.Child", method("run"))

        assert enricher.enrich(original) is original

    def test_no_ancestors_returns_input(self) -> None:
        """Test a class with only the root type as ancestor."""
        enricher = InheritanceEnricher(FakeIntrospector({}), FakeExtractor({}))
        original = descriptor("a.Child", method("run"))

        assert enricher.enrich(original) is original

    def test_input_descriptor_is_not_mutated(self) -> None:
        """Test that enrichment produces a new descriptor."""
        introspector = FakeIntrospector({"a.Child": ["a.Parent"]})
        extractor = FakeExtractor(
            {"a.Parent": descriptor("a.Parent", method("run", "Runs."))}
        )
        original = descriptor("a.Child", method("run"))

        InheritanceEnricher(introspector, extractor).enrich(original)

        assert original.methods[0].description == ""
