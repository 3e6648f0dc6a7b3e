"""Query facade: resolve, extract and describe classes by name."""

import logging
import re
import zipfile
from pathlib import Path

from java_info.archive import class_to_path, find_entry, read_entry, simple_name
from java_info.classpath import ARCHIVE_ERRORS, Classpath
from java_info.config import JavaInfoConfig
from java_info.enricher import InheritanceEnricher
from java_info.extractor import DocumentationExtractor, declared_methods, method_name
from java_info.failures import Failure
from java_info.index import ClasspathIndex
from java_info.introspection import ClassIntrospector, StaticClassIntrospector
from java_info.markup import normalise_indentation, strip_javadoc_comments
from java_info.models import ClassDescriptor, MethodDescriptor
from java_info.parser import JavaSourceParser, ParsedDeclaration
from java_info.sources import SourceLocator

logger = logging.getLogger(__name__)


def wildcard_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a method-name wildcard into an anchored regex.

    ``*`` matches any run of characters, ``?`` exactly one; everything else
    is literal.
    """
    translated = "".join(
        ".*" if char == "*" else "." if char == "?" else re.escape(char)
        for char in pattern
    )
    return re.compile(f"^{translated}$")


class JavaInfo:
    """Answers documentation and source queries about classes.

    The engine owns the classpath index and the cached runtime sources
    location; everything else is computed per query. Expected problems come
    back as ``Failure`` values, never as exceptions.
    """

    def __init__(
        self,
        config: JavaInfoConfig,
        *,
        classpath: Classpath | None = None,
        introspector: ClassIntrospector | None = None,
        locator: SourceLocator | None = None,
        parser: JavaSourceParser | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: Engine configuration
            classpath: Classpath to index and resolve against (built from
                config if None)
            introspector: Origin and ancestry lookups (static class file
                reader if None)
            locator: Sources archive locator (built from config if None)
            parser: Java source parser

        """
        self._config = config
        self._classpath = classpath or Classpath.from_config(config)
        self._index = ClasspathIndex(self._classpath)
        self._introspector = introspector or StaticClassIntrospector(self._classpath)
        self._locator = locator or SourceLocator(config)
        self._parser = parser or JavaSourceParser()
        self._extractor = DocumentationExtractor()
        self._enricher = InheritanceEnricher(self._introspector, self.extract_class)

    @classmethod
    def from_environment(cls, **overrides: object) -> "JavaInfo":
        """Build an engine configured from the environment plus overrides."""
        return cls(JavaInfoConfig.from_environment(dict(overrides)))

    @property
    def config(self) -> JavaInfoConfig:
        """Engine configuration."""
        return self._config

    @property
    def index(self) -> ClasspathIndex:
        """Classpath index owned by this engine."""
        return self._index

    def declaration(self, class_name: str) -> ParsedDeclaration | Failure:
        """Locate, read and parse the source declaration of a class.

        Args:
            class_name: Fully-qualified (binary) class name

        Returns:
            The parsed type declaration, or a Failure describing which step
            failed

        """
        origin = self._introspector.resolve_origin(class_name)
        archive = self._locator.sources_archive_for(origin)
        if isinstance(archive, Failure):
            logger.info(f"No sources archive for {class_name}: {archive}")
            return archive

        source = self._read_source(class_name, archive)
        if isinstance(source, Failure):
            return source

        parsed = self._parser.parse_declaration(source, simple_name(class_name))
        if parsed is None:
            return Failure.parse(
                class_name, f"No declaration of {simple_name(class_name)} in source"
            )
        return parsed

    def _read_source(self, class_name: str, archive: Path) -> bytes | Failure:
        relative_path = class_to_path(class_name)
        try:
            with zipfile.ZipFile(archive) as zf:
                entry = find_entry(zf, relative_path)
                if entry is None:
                    logger.info(f"{relative_path} not present in {archive}")
                    return Failure.not_found(
                        class_name, f"No entry {relative_path} in {archive}"
                    )
                return read_entry(zf, entry)
        except ARCHIVE_ERRORS as e:
            logger.error(f"Cannot read sources archive {archive}: {e}")
            return Failure.acquisition(str(archive), f"Unreadable sources archive: {e}")

    def extract_class(self, class_name: str) -> ClassDescriptor | Failure:
        """Extract a class's own documentation, without inheritance."""
        parsed = self.declaration(class_name)
        if isinstance(parsed, Failure):
            return parsed
        return self._extractor.extract(parsed, class_name)

    def describe_class(self, class_name: str) -> ClassDescriptor | Failure:
        """Extract a class's documentation and fill gaps from its ancestors.

        Args:
            class_name: Fully-qualified class name

        Returns:
            Enriched descriptor or a Failure

        """
        descriptor = self.extract_class(class_name)
        if isinstance(descriptor, Failure):
            return descriptor
        return self._enricher.enrich(descriptor)

    def method_source(self, class_name: str, method: str) -> str | Failure:
        """Source of every overload of a method, Javadoc removed.

        Args:
            class_name: Fully-qualified class name
            method: Method name

        Returns:
            Overload sources joined by newlines, or a Failure (NotFound when
            the class declares no such method)

        """
        parsed = self.declaration(class_name)
        if isinstance(parsed, Failure):
            return parsed

        source = parsed.source
        fragments = [
            self._fragment(node.start_byte, node.end_byte, source)
            for node in declared_methods(parsed)
            if method_name(node, source) == method
        ]
        if not fragments:
            return Failure.not_found(
                f"{class_name}.{method}", f"No method named '{method}' in {class_name}"
            )
        return "\n".join(fragments)

    def class_source(self, class_name: str) -> str | Failure:
        """Source of a class's whole declaration, Javadoc removed."""
        parsed = self.declaration(class_name)
        if isinstance(parsed, Failure):
            return parsed
        return self._fragment(parsed.node.start_byte, parsed.node.end_byte, parsed.source)

    def _fragment(self, start: int, end: int, source: bytes) -> str:
        line_start = source.rfind(b"\n", 0, start) + 1
        prefix = source[line_start:start].decode("utf-8", errors="replace")
        text = source[start:end].decode("utf-8", errors="replace")
        return strip_javadoc_comments(normalise_indentation(text, prefix))

    def parameter_doc(self, class_name: str, method: str, param: str) -> str | None:
        """Documentation of one parameter of a method.

        Args:
            class_name: Fully-qualified class name
            method: Method name
            param: Parameter name

        Returns:
            Text from the first overload documenting the parameter, or None

        """
        descriptor = self.describe_class(class_name)
        if isinstance(descriptor, Failure):
            return None
        for overload in descriptor.methods_named(method):
            if param in overload.params:
                return overload.params[param]
        return None

    def matching_methods(
        self, class_name: str, pattern: str | None = None
    ) -> list[MethodDescriptor] | Failure:
        """Described public methods whose names match a wildcard.

        Args:
            class_name: Fully-qualified class name
            pattern: Optional name wildcard (``get*``, ``is?``)

        Returns:
            Matching methods in declared order, or the Failure that stopped
            the class being described

        """
        descriptor = self.describe_class(class_name)
        if isinstance(descriptor, Failure):
            return descriptor
        regex = wildcard_to_regex(pattern) if pattern else None
        return [
            method
            for method in descriptor.methods
            if regex is None or regex.match(method.name)
        ]

    def methods_of(self, class_name: str, pattern: str | None = None) -> str:
        """Declarations of a class's public methods, one per line.

        Args:
            class_name: Fully-qualified class name
            pattern: Optional name wildcard (``get*``, ``is?``)

        Returns:
            Matching declarations in declared order, or ``""`` when the class
            cannot be described or nothing matches

        """
        methods = self.matching_methods(class_name, pattern)
        if isinstance(methods, Failure):
            return ""
        return "\n".join(method.declaration for method in methods)

    def find_classes(self, simple_class_name: str) -> list[str] | None:
        """Fully-qualified names of classes with a given simple name."""
        return self._index.lookup(simple_class_name)
