"""
specs.py

Responsibility: Immutable declarations (annotations, parameters, fields, methods, types) and
their mutable builders.

Builders are the staging objects that `jpoet.extensions` mutates; `build()` finalizes them into
specs that the renderer emits. Builders do not validate nesting of control flow; that is left
to rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from jpoet.code import CodeBlock
from jpoet.types import ClassName, TypeName
from jpoet.writer import CodeWriter


class SpecBuildError(ValueError):
    pass


class Modifier(Enum):
    # Declaration order is emission order.
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ABSTRACT = "abstract"
    DEFAULT = "default"
    STATIC = "static"
    FINAL = "final"
    TRANSIENT = "transient"
    VOLATILE = "volatile"
    SYNCHRONIZED = "synchronized"
    NATIVE = "native"
    STRICTFP = "strictfp"

    @staticmethod
    def of(value: Modifier | str) -> Modifier:
        if isinstance(value, Modifier):
            return value
        try:
            return Modifier(str(value).strip().lower())
        except ValueError as e:
            raise SpecBuildError(f"Unknown modifier: {value!r}") from e


_MODIFIER_ORDER = {m: i for i, m in enumerate(Modifier)}

# Java reserved words.
_JAVA_KEYWORDS = frozenset(
    """
    abstract assert boolean break byte case catch char class const continue default do double
    else enum extends final finally float for goto if implements import instanceof int interface
    long native new package private protected public return short static strictfp super switch
    synchronized this throw throws transient try void volatile while true false null
    """.split()
)


def _sorted_modifiers(modifiers: Iterable[Modifier | str]) -> tuple[Modifier, ...]:
    return tuple(sorted({Modifier.of(m) for m in modifiers}, key=_MODIFIER_ORDER.__getitem__))


def _check_name(name: str) -> str:
    if not name.isidentifier() or name in _JAVA_KEYWORDS:
        raise SpecBuildError(f"not a valid name: {name!r}")
    return name


def _class_name(value: Any) -> ClassName:
    if isinstance(value, str):
        value = TypeName.get(value)
    if not isinstance(value, ClassName):
        raise SpecBuildError(f"expected a class name but was {value!r}")
    return value


def _render(spec: Any) -> str:
    out = CodeWriter()
    spec.emit(out)
    return out.text()


# -- annotations --------------------------------------------------------------------------------


@dataclass(frozen=True)
class AnnotationSpec:
    type: ClassName
    members: dict[str, tuple[CodeBlock, ...]] = field(default_factory=dict)

    @staticmethod
    def builder(type_name: Any) -> AnnotationSpec.Builder:
        return AnnotationSpec.Builder(_class_name(type_name))

    @staticmethod
    def get(type_name: Any) -> AnnotationSpec:
        return AnnotationSpec.builder(type_name).build()

    def emit(self, out: CodeWriter) -> None:
        out.emit_format("@$T", self.type)
        if not self.members:
            return
        if list(self.members) == ["value"]:
            out.emit("(")
            self._emit_values(out, self.members["value"])
            out.emit(")")
            return
        out.emit("(")
        for i, (name, values) in enumerate(self.members.items()):
            if i:
                out.emit(", ")
            out.emit(f"{name} = ")
            self._emit_values(out, values)
        out.emit(")")

    @staticmethod
    def _emit_values(out: CodeWriter, values: tuple[CodeBlock, ...]) -> None:
        if len(values) == 1:
            out.emit_code(values[0])
            return
        out.emit("{")
        for i, value in enumerate(values):
            if i:
                out.emit(", ")
            out.emit_code(value)
        out.emit("}")

    def __str__(self) -> str:
        return _render(self)

    class Builder:
        def __init__(self, type_name: ClassName) -> None:
            self.type = type_name
            self._members: dict[str, list[CodeBlock]] = {}

        def add_member(self, name: str, fmt: str, *args: Any) -> AnnotationSpec.Builder:
            _check_name(name)
            self._members.setdefault(name, []).append(CodeBlock.of(fmt, *args))
            return self

        def build(self) -> AnnotationSpec:
            return AnnotationSpec(self.type, {k: tuple(v) for k, v in self._members.items()})


def _annotation(value: Any) -> AnnotationSpec:
    if isinstance(value, AnnotationSpec):
        return value
    return AnnotationSpec.get(value)


def _emit_annotations(out: CodeWriter, annotations: Iterable[AnnotationSpec], inline: bool) -> None:
    for annotation in annotations:
        annotation.emit(out)
        out.emit(" " if inline else "\n")


# -- parameters and fields ----------------------------------------------------------------------


@dataclass(frozen=True)
class ParameterSpec:
    type: TypeName
    name: str
    modifiers: tuple[Modifier, ...] = ()
    annotations: tuple[AnnotationSpec, ...] = ()

    @staticmethod
    def of(type_name: Any, name: str, *modifiers: Modifier | str) -> ParameterSpec:
        return ParameterSpec(TypeName.get(type_name), _check_name(name), _sorted_modifiers(modifiers))

    def emit(self, out: CodeWriter) -> None:
        _emit_annotations(out, self.annotations, inline=True)
        out.emit_modifiers(self.modifiers)
        out.emit_format("$T $L", self.type, self.name)

    def __str__(self) -> str:
        return _render(self)


@dataclass(frozen=True)
class FieldSpec:
    type: TypeName
    name: str
    modifiers: tuple[Modifier, ...] = ()
    annotations: tuple[AnnotationSpec, ...] = ()
    javadoc: CodeBlock = field(default_factory=lambda: CodeBlock.of(""))
    initializer: CodeBlock = field(default_factory=lambda: CodeBlock.of(""))

    @staticmethod
    def builder(type_name: Any, name: str, *modifiers: Modifier | str) -> FieldSpec.Builder:
        return FieldSpec.Builder(TypeName.get(type_name), _check_name(name)).add_modifiers(*modifiers)

    def emit(self, out: CodeWriter, implicit_modifiers: Iterable[Modifier] = ()) -> None:
        out.emit_javadoc(self.javadoc)
        _emit_annotations(out, self.annotations, inline=False)
        out.emit_modifiers(self.modifiers, implicit_modifiers)
        out.emit_format("$T $L", self.type, self.name)
        if not self.initializer.is_empty():
            out.emit(" = ")
            out.emit_code(self.initializer)
        out.emit(";\n")

    def __str__(self) -> str:
        return _render(self)

    class Builder:
        def __init__(self, type_name: TypeName, name: str) -> None:
            self.type = type_name
            self.name = name
            self._modifiers: list[Modifier] = []
            self._annotations: list[AnnotationSpec] = []
            self._javadoc = CodeBlock.builder()
            self._initializer: CodeBlock | None = None

        def add_modifiers(self, *modifiers: Modifier | str) -> FieldSpec.Builder:
            self._modifiers.extend(Modifier.of(m) for m in modifiers)
            return self

        def add_annotation(self, annotation: Any) -> FieldSpec.Builder:
            self._annotations.append(_annotation(annotation))
            return self

        def add_javadoc(self, fmt: str, *args: Any) -> FieldSpec.Builder:
            self._javadoc.add(fmt, *args)
            return self

        def initializer(self, fmt: str | CodeBlock, *args: Any) -> FieldSpec.Builder:
            if self._initializer is not None:
                raise SpecBuildError(f"initializer was already set for {self.name}")
            self._initializer = fmt if isinstance(fmt, CodeBlock) else CodeBlock.of(fmt, *args)
            return self

        def build(self) -> FieldSpec:
            return FieldSpec(
                type=self.type,
                name=self.name,
                modifiers=_sorted_modifiers(self._modifiers),
                annotations=tuple(self._annotations),
                javadoc=self._javadoc.build(),
                initializer=self._initializer or CodeBlock.of(""),
            )


# -- methods ------------------------------------------------------------------------------------

CONSTRUCTOR = "<init>"


@dataclass(frozen=True)
class MethodSpec:
    name: str
    modifiers: tuple[Modifier, ...] = ()
    return_type: TypeName | None = None
    parameters: tuple[ParameterSpec, ...] = ()
    annotations: tuple[AnnotationSpec, ...] = ()
    exceptions: tuple[TypeName, ...] = ()
    javadoc: CodeBlock = field(default_factory=lambda: CodeBlock.of(""))
    code: CodeBlock = field(default_factory=lambda: CodeBlock.of(""))

    @staticmethod
    def builder(name: str) -> MethodSpec.Builder:
        return MethodSpec.Builder(_check_name(name))

    @staticmethod
    def constructor_builder() -> MethodSpec.Builder:
        return MethodSpec.Builder(CONSTRUCTOR)

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR

    def has_modifier(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers

    def emit(
        self,
        out: CodeWriter,
        enclosing_name: str | None = None,
        implicit_modifiers: Iterable[Modifier] = (),
    ) -> None:
        out.emit_javadoc(self.javadoc)
        _emit_annotations(out, self.annotations, inline=False)
        out.emit_modifiers(self.modifiers, implicit_modifiers)

        if self.is_constructor:
            out.emit(enclosing_name or "Constructor")
        else:
            out.emit_format("$T $L", self.return_type or TypeName.get(None), self.name)

        out.emit("(")
        for i, parameter in enumerate(self.parameters):
            if i:
                out.emit(", ")
            parameter.emit(out)
        out.emit(")")

        if self.exceptions:
            out.emit(" throws ")
            for i, exception in enumerate(self.exceptions):
                if i:
                    out.emit(", ")
                out.emit_format("$T", exception)

        abstract = self.has_modifier(Modifier.ABSTRACT) or Modifier.ABSTRACT in set(implicit_modifiers)
        if abstract and not self.has_modifier(Modifier.DEFAULT) and not self.has_modifier(Modifier.STATIC):
            out.emit(";\n")
            return

        out.emit(" {\n")
        out.indent()
        out.emit_code(self.code)
        out.unindent()
        out.emit("}\n")

    def __str__(self) -> str:
        return _render(self)

    class Builder:
        """
        Staging object for a method. Body mutators mirror `CodeBlock.Builder` so that the
        fluent helpers in `jpoet.extensions` work against either builder.
        """

        def __init__(self, name: str) -> None:
            self.name = name
            self._modifiers: list[Modifier] = []
            self._return_type: TypeName | None = None
            self._parameters: list[ParameterSpec] = []
            self._annotations: list[AnnotationSpec] = []
            self._exceptions: list[TypeName] = []
            self._javadoc = CodeBlock.builder()
            self._code = CodeBlock.builder()

        def add_javadoc(self, fmt: str, *args: Any) -> MethodSpec.Builder:
            self._javadoc.add(fmt, *args)
            return self

        def add_annotation(self, annotation: Any) -> MethodSpec.Builder:
            self._annotations.append(_annotation(annotation))
            return self

        def add_modifiers(self, *modifiers: Modifier | str) -> MethodSpec.Builder:
            self._modifiers.extend(Modifier.of(m) for m in modifiers)
            return self

        def returns(self, type_name: Any) -> MethodSpec.Builder:
            if self.name == CONSTRUCTOR:
                raise SpecBuildError("constructor cannot have return type.")
            self._return_type = TypeName.get(type_name)
            return self

        def add_parameter(self, parameter: Any, name: str | None = None, *modifiers: Modifier | str) -> MethodSpec.Builder:
            if not isinstance(parameter, ParameterSpec):
                if name is None:
                    raise SpecBuildError("parameter name is required")
                parameter = ParameterSpec.of(parameter, name, *modifiers)
            self._parameters.append(parameter)
            return self

        def add_exception(self, exception: Any) -> MethodSpec.Builder:
            self._exceptions.append(TypeName.get(exception))
            return self

        def add_code(self, code: str | CodeBlock, *args: Any) -> MethodSpec.Builder:
            if isinstance(code, CodeBlock):
                self._code.add_code(code)
            else:
                self._code.add(code, *args)
            return self

        def add_statement(self, fmt: str, *args: Any) -> MethodSpec.Builder:
            self._code.add_statement(fmt, *args)
            return self

        def add_comment(self, fmt: str, *args: Any) -> MethodSpec.Builder:
            self._code.add_comment(fmt, *args)
            return self

        def begin_control_flow(self, control_flow: str, *args: Any) -> MethodSpec.Builder:
            self._code.begin_control_flow(control_flow, *args)
            return self

        def next_control_flow(self, control_flow: str, *args: Any) -> MethodSpec.Builder:
            self._code.next_control_flow(control_flow, *args)
            return self

        def end_control_flow(self, control_flow: str | None = None, *args: Any) -> MethodSpec.Builder:
            self._code.end_control_flow(control_flow, *args)
            return self

        def build(self) -> MethodSpec:
            modifiers = _sorted_modifiers(self._modifiers)
            code = self._code.build()
            if Modifier.ABSTRACT in modifiers and not code.is_empty():
                raise SpecBuildError(f"abstract method {self.name} cannot have code")
            return MethodSpec(
                name=self.name,
                modifiers=modifiers,
                return_type=None if self.name == CONSTRUCTOR else (self._return_type or TypeName.get(None)),
                parameters=tuple(self._parameters),
                annotations=tuple(self._annotations),
                exceptions=tuple(self._exceptions),
                javadoc=self._javadoc.build(),
                code=code,
            )


# -- types --------------------------------------------------------------------------------------


class Kind(Enum):
    CLASS = "class"
    INTERFACE = "interface"


_INTERFACE_METHOD_MODIFIERS = (Modifier.PUBLIC, Modifier.ABSTRACT)
_INTERFACE_FIELD_MODIFIERS = (Modifier.PUBLIC, Modifier.STATIC, Modifier.FINAL)


@dataclass(frozen=True)
class TypeSpec:
    kind: Kind
    name: str
    modifiers: tuple[Modifier, ...] = ()
    annotations: tuple[AnnotationSpec, ...] = ()
    javadoc: CodeBlock = field(default_factory=lambda: CodeBlock.of(""))
    superclass: TypeName | None = None
    superinterfaces: tuple[TypeName, ...] = ()
    fields: tuple[FieldSpec, ...] = ()
    methods: tuple[MethodSpec, ...] = ()
    type_specs: tuple[TypeSpec, ...] = ()

    @staticmethod
    def class_builder(name: str) -> TypeSpec.Builder:
        return TypeSpec.Builder(Kind.CLASS, _check_name(name))

    @staticmethod
    def interface_builder(name: str) -> TypeSpec.Builder:
        return TypeSpec.Builder(Kind.INTERFACE, _check_name(name))

    def declared_names(self) -> set[str]:
        names = {self.name}
        for nested in self.type_specs:
            names |= nested.declared_names()
        return names

    def emit(self, out: CodeWriter, implicit_modifiers: Iterable[Modifier] = ()) -> None:
        out.emit_javadoc(self.javadoc)
        _emit_annotations(out, self.annotations, inline=False)
        out.emit_modifiers(self.modifiers, implicit_modifiers)
        out.emit(f"{self.kind.value} {self.name}")

        if self.kind is Kind.CLASS:
            if self.superclass is not None:
                out.emit_format(" extends $T", self.superclass)
            self._emit_supertypes(out, " implements ")
        else:
            self._emit_supertypes(out, " extends ")
        out.emit(" {\n")

        interface = self.kind is Kind.INTERFACE
        out.indent()
        first_member = True
        for field_spec in self.fields:
            field_spec.emit(out, _INTERFACE_FIELD_MODIFIERS if interface else ())
            first_member = False
        for method in self.methods:
            if not first_member:
                out.emit("\n")
            method.emit(out, self.name, _INTERFACE_METHOD_MODIFIERS if interface else ())
            first_member = False
        for nested in self.type_specs:
            if not first_member:
                out.emit("\n")
            nested.emit(out)
            first_member = False
        out.unindent()
        out.emit("}\n")

    def _emit_supertypes(self, out: CodeWriter, keyword_text: str) -> None:
        for i, supertype in enumerate(self.superinterfaces):
            out.emit(keyword_text if i == 0 else ", ")
            out.emit_format("$T", supertype)

    def __str__(self) -> str:
        return _render(self)

    class Builder:
        def __init__(self, kind: Kind, name: str) -> None:
            self.kind = kind
            self.name = name
            self._modifiers: list[Modifier] = []
            self._annotations: list[AnnotationSpec] = []
            self._javadoc = CodeBlock.builder()
            self._superclass: TypeName | None = None
            self._superinterfaces: list[TypeName] = []
            self._fields: list[FieldSpec] = []
            self._methods: list[MethodSpec] = []
            self._type_specs: list[TypeSpec] = []

        def add_javadoc(self, fmt: str, *args: Any) -> TypeSpec.Builder:
            self._javadoc.add(fmt, *args)
            return self

        def add_annotation(self, annotation: Any) -> TypeSpec.Builder:
            self._annotations.append(_annotation(annotation))
            return self

        def add_modifiers(self, *modifiers: Modifier | str) -> TypeSpec.Builder:
            self._modifiers.extend(Modifier.of(m) for m in modifiers)
            return self

        def superclass(self, type_name: Any) -> TypeSpec.Builder:
            if self.kind is not Kind.CLASS:
                raise SpecBuildError(f"only classes have super classes, not {self.kind.value}")
            self._superclass = TypeName.get(type_name)
            return self

        def add_superinterface(self, type_name: Any) -> TypeSpec.Builder:
            self._superinterfaces.append(TypeName.get(type_name))
            return self

        def add_field(self, field_spec: FieldSpec) -> TypeSpec.Builder:
            self._fields.append(field_spec)
            return self

        def add_method(self, method: MethodSpec) -> TypeSpec.Builder:
            self._methods.append(method)
            return self

        def add_type(self, type_spec: TypeSpec) -> TypeSpec.Builder:
            self._type_specs.append(type_spec)
            return self

        def build(self) -> TypeSpec:
            if self.kind is Kind.INTERFACE:
                for method in self._methods:
                    if method.is_constructor:
                        raise SpecBuildError(f"interface {self.name} cannot have a constructor")
                    if not method.code.is_empty() and not (
                        method.has_modifier(Modifier.DEFAULT) or method.has_modifier(Modifier.STATIC)
                    ):
                        raise SpecBuildError(
                            f"interface method {self.name}.{method.name} has a body but is neither default nor static"
                        )
            return TypeSpec(
                kind=self.kind,
                name=self.name,
                modifiers=_sorted_modifiers(self._modifiers),
                annotations=tuple(self._annotations),
                javadoc=self._javadoc.build(),
                superclass=self._superclass,
                superinterfaces=tuple(self._superinterfaces),
                fields=tuple(self._fields),
                methods=tuple(self._methods),
                type_specs=tuple(self._type_specs),
            )
