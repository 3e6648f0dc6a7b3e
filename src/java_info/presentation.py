"""Human-readable renderings of engine queries.

Every function returns display text, including a message naming the class
when nothing could be found, so callers can print results directly.
"""

from java_info.engine import JavaInfo
from java_info.failures import Failure
from java_info.markup import clean_markup, truncate
from java_info.models import ClassDescriptor, MethodDescriptor

MAX_CLASS_DOC_LENGTH = 1000
MAX_METHOD_DOC_LENGTH = 600
MAX_PARAM_DOC_LENGTH = 200
MAX_CLASS_SOURCE_LENGTH = 2000
MAX_METHOD_SOURCE_LENGTH = 1000
MAX_METHODS_LENGTH = 3000


def _method_block(
    method: MethodDescriptor, max_method_length: int, max_param_length: int
) -> str:
    lines = [clean_markup(method.declaration)]
    if method.description:
        lines.append(truncate(clean_markup(method.description), max_method_length))
    lines.extend(
        f"{name}: {truncate(clean_markup(text), max_param_length)}"
        for name, text in method.params.items()
    )
    if method.returns is not None:
        lines.append(f"Returns: {truncate(clean_markup(method.returns), max_param_length)}")
    return "\n".join(lines)


def javadoc(
    engine: JavaInfo,
    class_name: str,
    method: str | None = None,
    max_class_length: int = MAX_CLASS_DOC_LENGTH,
    max_method_length: int = MAX_METHOD_DOC_LENGTH,
    max_param_length: int = MAX_PARAM_DOC_LENGTH,
) -> str:
    """Documentation for a class, or for every overload of one of its methods.

    Args:
        engine: Query engine
        class_name: Fully-qualified class name
        method: Optional method name
        max_class_length: Cut-off for the class description
        max_method_length: Cut-off for each method description
        max_param_length: Cut-off for each parameter and return text

    Returns:
        Display text, or a "not found" message

    """
    return render_javadoc(
        engine.describe_class(class_name),
        class_name,
        method,
        max_class_length=max_class_length,
        max_method_length=max_method_length,
        max_param_length=max_param_length,
    )


def render_javadoc(  # noqa: PLR0913 - mirrors javadoc() limits
    descriptor: ClassDescriptor | Failure,
    class_name: str,
    method: str | None = None,
    max_class_length: int = MAX_CLASS_DOC_LENGTH,
    max_method_length: int = MAX_METHOD_DOC_LENGTH,
    max_param_length: int = MAX_PARAM_DOC_LENGTH,
) -> str:
    """Render an already described class the way ``javadoc`` does."""
    if method is None:
        if isinstance(descriptor, Failure) or descriptor.description is None:
            return f"No documentation found for class {class_name}"
        return truncate(clean_markup(descriptor.description), max_class_length)

    overloads = (
        [] if isinstance(descriptor, Failure) else descriptor.methods_named(method)
    )
    if not overloads:
        return f"No methods named '{method}' found in class {class_name}"
    return "\n\n".join(
        _method_block(overload, max_method_length, max_param_length)
        for overload in overloads
    )


def javasrc(
    engine: JavaInfo,
    class_name: str,
    method: str | None = None,
    max_class_length: int = MAX_CLASS_SOURCE_LENGTH,
    max_method_length: int = MAX_METHOD_SOURCE_LENGTH,
) -> str:
    """Source of a class, or of every overload of one of its methods."""
    if method is None:
        source = engine.class_source(class_name)
    else:
        source = engine.method_source(class_name, method)
    return render_source(
        source,
        class_name,
        method,
        max_length=max_class_length if method is None else max_method_length,
    )


def render_source(
    source: str | Failure,
    class_name: str,
    method: str | None = None,
    max_length: int | None = None,
) -> str:
    """Render class or method source the way ``javasrc`` does.

    Args:
        source: Source text or the failure that replaced it
        class_name: Fully-qualified class name
        method: Method name when ``source`` is a method's overloads
        max_length: Cut-off (the class or method default if None)

    Returns:
        Truncated source, or a "not found" message

    """
    if max_length is None:
        max_length = MAX_CLASS_SOURCE_LENGTH if method is None else MAX_METHOD_SOURCE_LENGTH
    if isinstance(source, Failure):
        if method is None:
            return f"Source not found for class {class_name}"
        return f"No method named '{method}' found in class {class_name}"
    return truncate(source, max_length)


def find_classes(engine: JavaInfo, simple_name: str) -> list[str] | None:
    """Fully-qualified names of classes with a given simple name."""
    return engine.find_classes(simple_name)


def methods_of(
    engine: JavaInfo,
    class_name: str,
    pattern: str | None = None,
    max_length: int = MAX_METHODS_LENGTH,
) -> str:
    """Public method declarations of a class, one per line.

    Args:
        engine: Query engine
        class_name: Fully-qualified class name
        pattern: Optional method name wildcard
        max_length: Cut-off for the whole listing

    Returns:
        Declarations, or a message when nothing matched

    """
    return render_methods(
        engine.methods_of(class_name, pattern), class_name, pattern, max_length
    )


def render_methods(
    listing: str,
    class_name: str,
    pattern: str | None = None,
    max_length: int = MAX_METHODS_LENGTH,
) -> str:
    """Render a declaration listing the way ``methods_of`` does."""
    if not listing:
        if pattern:
            return f"No methods matching pattern '{pattern}' found in class {class_name}"
        return f"No methods found in class {class_name}"
    return truncate(listing, max_length)
