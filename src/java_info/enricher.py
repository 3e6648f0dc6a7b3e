"""Inheritance enrichment: fill documentation gaps from direct ancestors."""

import logging
from collections.abc import Callable

from java_info.failures import Failure
from java_info.introspection import ClassIntrospector
from java_info.models import ClassDescriptor, MethodDescriptor

logger = logging.getLogger(__name__)

type ExtractFn = Callable[[str], ClassDescriptor | Failure]


def merge_documentation(
    child: MethodDescriptor, parent: MethodDescriptor
) -> MethodDescriptor:
    """Overlay a parent's documentation onto a child method.

    Only fields the parent actually supplies are taken: a non-empty
    description, its parameters (parent wins on shared names) and its
    return text when present. The child's declaration is kept.
    """
    update: dict[str, object] = {"params": {**child.params, **parent.params}}
    if parent.description:
        update["description"] = parent.description
    if parent.returns is not None:
        update["returns"] = parent.returns
    return child.model_copy(update=update)


class InheritanceEnricher:
    """Fills undocumented overrides with documentation from direct ancestors.

    Enrichment is a single level: ancestors are used as extracted, never
    themselves enriched.
    """

    def __init__(self, introspector: ClassIntrospector, extract: ExtractFn) -> None:
        """Initialise the enricher.

        Args:
            introspector: Supplies the direct ancestors of a class
            extract: Returns the un-enriched descriptor of a class by name

        """
        self._introspector = introspector
        self._extract = extract

    def enrich(self, descriptor: ClassDescriptor) -> ClassDescriptor:
        """Return a descriptor with inherited documentation merged in.

        Args:
            descriptor: Descriptor produced by extraction

        Returns:
            New descriptor, or the input unchanged when nothing needs or can
            receive enrichment

        """
        if all(method.has_full_docs for method in descriptor.methods):
            return descriptor

        ancestors = self._introspector.direct_ancestors(descriptor.name)
        if isinstance(ancestors, Failure):
            logger.warning(f"Cannot enrich {descriptor.name}: {ancestors}")
            return descriptor
        if not ancestors:
            return descriptor

        extracted: dict[str, ClassDescriptor | None] = {}
        methods = [
            self._enrich_method(method, ancestors, extracted)
            for method in descriptor.methods
        ]
        return descriptor.model_copy(update={"methods": methods})

    def _enrich_method(
        self,
        method: MethodDescriptor,
        ancestors: list[str],
        extracted: dict[str, ClassDescriptor | None],
    ) -> MethodDescriptor:
        if method.has_full_docs:
            return method

        for ancestor in ancestors:
            parent = self._ancestor_descriptor(ancestor, extracted)
            if parent is None:
                continue
            for candidate in parent.methods_named(method.name):
                if candidate.has_any_docs:
                    logger.debug(
                        f"Inheriting docs for {method.name} from {ancestor}"
                    )
                    return merge_documentation(method, candidate)
        return method

    def _ancestor_descriptor(
        self, ancestor: str, extracted: dict[str, ClassDescriptor | None]
    ) -> ClassDescriptor | None:
        """Extract an ancestor once per enrichment; failures cache as None."""
        if ancestor not in extracted:
            result = self._extract(ancestor)
            if isinstance(result, Failure):
                logger.info(f"Skipping ancestor {ancestor}: {result}")
                extracted[ancestor] = None
            else:
                extracted[ancestor] = result
        return extracted[ancestor]
