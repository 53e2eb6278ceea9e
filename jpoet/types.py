"""
types.py

Responsibility: Model Java type references (primitives, classes, arrays, generics).

Type names are immutable values. They know how to emit themselves through a `CodeWriter`,
which decides whether a class is referenced by its simple or fully-qualified name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jpoet.writer import CodeWriter


_PRIMITIVE_KEYWORDS = ("void", "boolean", "byte", "short", "int", "long", "char", "float", "double")

_BOXED = {
    "void": "Void",
    "boolean": "Boolean",
    "byte": "Byte",
    "short": "Short",
    "int": "Integer",
    "long": "Long",
    "char": "Character",
    "float": "Float",
    "double": "Double",
}


@dataclass(frozen=True)
class TypeName:
    """A primitive type or `void`."""

    keyword: str

    @property
    def is_primitive(self) -> bool:
        return self.keyword in _PRIMITIVE_KEYWORDS and self.keyword != "void"

    def box(self) -> TypeName:
        boxed = _BOXED.get(self.keyword)
        if boxed is None:
            return self
        return ClassName.get("java.lang", boxed)

    def emit(self, out: CodeWriter) -> CodeWriter:
        return out.emit(self.keyword)

    def __str__(self) -> str:
        return self.keyword

    @staticmethod
    def get(value: Any) -> TypeName:
        """
        Coerce `value` into a TypeName.

        Accepts an existing TypeName, a Java type string ("int", "java.util.List<String>",
        "byte[]") or one of the Python builtins that has an obvious Java counterpart.
        """
        if isinstance(value, TypeName):
            return value
        if isinstance(value, str):
            return _parse_type(value)
        if value is None or value is type(None):
            return VOID
        if isinstance(value, type) and value in _PYTHON_TYPES:
            return _PYTHON_TYPES[value]
        raise TypeError(f"Expected a type but was {value!r}")


@dataclass(frozen=True)
class ClassName(TypeName):
    """A fully-qualified class name. Nested classes carry more than one simple name."""

    package_name: str = ""
    simple_names: tuple[str, ...] = ()

    @property
    def is_primitive(self) -> bool:
        return False

    def box(self) -> TypeName:
        return self

    @property
    def simple_name(self) -> str:
        return self.simple_names[-1]

    @property
    def canonical_name(self) -> str:
        names = ".".join(self.simple_names)
        return f"{self.package_name}.{names}" if self.package_name else names

    def top_level_class_name(self) -> ClassName:
        return ClassName.get(self.package_name, self.simple_names[0])

    def nested_class(self, name: str) -> ClassName:
        return ClassName.get(self.package_name, *self.simple_names, name)

    def emit(self, out: CodeWriter) -> CodeWriter:
        return out.emit(out.lookup_name(self))

    def __str__(self) -> str:
        return self.canonical_name

    @staticmethod
    def get(package_name: str, simple_name: str, *nested: str) -> ClassName:
        names = (simple_name, *nested)
        for name in names:
            if not name.isidentifier():
                raise ValueError(f"Invalid class name segment: {name!r}")
        canonical = ".".join((package_name, *names)) if package_name else ".".join(names)
        return ClassName(keyword=canonical, package_name=package_name, simple_names=names)

    @staticmethod
    def best_guess(class_name: str) -> ClassName:
        """
        Guess a ClassName from a dotted string, assuming packages are lowercase and classes
        start with an uppercase letter ("java.util.Map.Entry").
        """
        parts = class_name.strip().split(".")
        for i, part in enumerate(parts):
            if part[:1].isupper():
                package = ".".join(parts[:i])
                return ClassName.get(package, *parts[i:])
            if not part.isidentifier():
                break
        raise ValueError(f"Couldn't make a guess for {class_name!r}")


@dataclass(frozen=True)
class ArrayTypeName(TypeName):
    component_type: TypeName = None  # type: ignore[assignment]

    @property
    def is_primitive(self) -> bool:
        return False

    def box(self) -> TypeName:
        return self

    def emit(self, out: CodeWriter) -> CodeWriter:
        self.component_type.emit(out)
        return out.emit("[]")

    def __str__(self) -> str:
        return f"{self.component_type}[]"

    @staticmethod
    def of(component: Any) -> ArrayTypeName:
        component_type = TypeName.get(component)
        return ArrayTypeName(keyword=f"{component_type}[]", component_type=component_type)


@dataclass(frozen=True)
class ParameterizedTypeName(TypeName):
    raw_type: ClassName = None  # type: ignore[assignment]
    type_arguments: tuple[TypeName, ...] = ()

    @property
    def is_primitive(self) -> bool:
        return False

    def box(self) -> TypeName:
        return self

    def emit(self, out: CodeWriter) -> CodeWriter:
        self.raw_type.emit(out)
        out.emit("<")
        for i, argument in enumerate(self.type_arguments):
            if i:
                out.emit(", ")
            argument.emit(out)
        return out.emit(">")

    def __str__(self) -> str:
        return f"{self.raw_type}<{', '.join(str(t) for t in self.type_arguments)}>"

    @staticmethod
    def get(raw_type: Any, *type_arguments: Any) -> ParameterizedTypeName:
        raw = raw_type if isinstance(raw_type, ClassName) else TypeName.get(raw_type)
        if not isinstance(raw, ClassName):
            raise TypeError(f"Raw type must be a class: {raw_type!r}")
        if not type_arguments:
            raise ValueError("No type arguments given")
        arguments = tuple(TypeName.get(a) for a in type_arguments)
        for argument in arguments:
            if type(argument) is TypeName:
                raise ValueError(f"Primitive type arguments are not allowed: {argument}")
        keyword = f"{raw}<{', '.join(str(a) for a in arguments)}>"
        return ParameterizedTypeName(keyword=keyword, raw_type=raw, type_arguments=arguments)


VOID = TypeName("void")
BOOLEAN = TypeName("boolean")
BYTE = TypeName("byte")
SHORT = TypeName("short")
INT = TypeName("int")
LONG = TypeName("long")
CHAR = TypeName("char")
FLOAT = TypeName("float")
DOUBLE = TypeName("double")

OBJECT = ClassName.get("java.lang", "Object")
STRING = ClassName.get("java.lang", "String")

_PRIMITIVES = {t.keyword: t for t in (VOID, BOOLEAN, BYTE, SHORT, INT, LONG, CHAR, FLOAT, DOUBLE)}

# Unqualified names that resolve against java.lang when parsed from a string.
_JAVA_LANG_NAMES = frozenset(
    {
        "AutoCloseable", "Boolean", "Byte", "CharSequence", "Character", "Class", "Cloneable",
        "Comparable", "Deprecated", "Double", "Enum", "Error", "Exception", "Float",
        "FunctionalInterface", "IllegalArgumentException", "IllegalStateException",
        "IndexOutOfBoundsException", "Integer", "Iterable", "Long", "Math", "NullPointerException",
        "Number", "Object", "Override", "Runnable", "RuntimeException", "Short", "String",
        "StringBuilder", "SuppressWarnings", "System", "Thread", "Throwable",
        "UnsupportedOperationException", "Void",
    }
)

_PYTHON_TYPES: dict[type, TypeName] = {
    str: STRING,
    int: INT,
    float: DOUBLE,
    bool: BOOLEAN,
    bytes: ArrayTypeName.of(BYTE),
    object: OBJECT,
}


def _split_arguments(text: str) -> list[str]:
    """Split "A, Map<B, C>" on top-level commas only."""
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(text):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return [p.strip() for p in parts]


def _parse_type(text: str) -> TypeName:
    spec = text.strip()
    if not spec:
        raise ValueError("Empty type name")

    if spec.endswith("[]"):
        return ArrayTypeName.of(_parse_type(spec[:-2]))

    if spec in _PRIMITIVES:
        return _PRIMITIVES[spec]

    if "<" in spec:
        if not spec.endswith(">"):
            raise ValueError(f"Unbalanced type arguments in {text!r}")
        open_at = spec.index("<")
        raw = _parse_type(spec[:open_at])
        arguments = _split_arguments(spec[open_at + 1 : -1])
        return ParameterizedTypeName.get(raw, *(_parse_type(a) for a in arguments))

    if spec in _JAVA_LANG_NAMES:
        return ClassName.get("java.lang", spec)
    return ClassName.best_guess(spec)
