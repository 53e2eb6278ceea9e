"""
assembler.py

Responsibility: Turn a parsed `ClassDef` into a renderable `JavaFile`.

Method bodies are replayed item by item through the fluent helpers in `jpoet.extensions`, so
the generated control flow is exactly what those helpers produce.
"""

from __future__ import annotations

from typing import Any, Iterable

from jpoet.class_spec import AnnotationDef, ClassDef, FieldDef, MethodDef, body_kind
from jpoet.code import CodeBlock
from jpoet.extensions import (
    CodeMethod,
    annotation,
    begin_control,
    break_,
    comment,
    continue_,
    do,
    else_,
    else_if,
    end,
    for_,
    if_,
    return_,
    returns,
    statement,
    switch,
    throw_new,
    while_,
)
from jpoet.renderer import JavaFile
from jpoet.specs import AnnotationSpec, FieldSpec, MethodSpec, TypeSpec
from jpoet.types import TypeName


def _args(raw: Any) -> tuple[Any, ...]:
    if not raw:
        return ()
    return tuple(TypeName.get(a["type"]) if isinstance(a, dict) and "type" in a else a for a in raw)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _body(items: Iterable[Any] | None) -> CodeMethod:
    return lambda builder: emit_body(builder, items or ())


def _cases(cases: Iterable[dict[str, Any]] | None) -> CodeMethod:
    def build(builder: CodeBlock.Builder) -> CodeBlock.Builder:
        for case in cases or ():
            if "default" in case:
                builder.add("default:\n")
                items = case["default"]
            else:
                builder.add("case $L:\n", case["case"])
                items = case.get("body")
            builder.indent()
            emit_body(builder, items or ())
            builder.unindent()
        return builder

    return build


def emit_item(builder: Any, item: Any) -> Any:
    """Apply one body item to `builder` and return the builder."""
    if isinstance(item, str):
        return statement(builder, item)

    kind = body_kind(item)
    args = _args(item.get("args"))

    if kind == "statement":
        return statement(builder, _text(item["statement"]), *args)
    if kind == "comment":
        return comment(builder, _text(item["comment"]))
    if kind == "return":
        return return_(builder, _text(item["return"]), *args)
    if kind == "break":
        return break_(builder)
    if kind == "continue":
        return continue_(builder)
    if kind == "throw":
        spec = item["throw"]
        return throw_new(builder, spec["type"], _text(spec.get("message")), *args)
    if kind == "if":
        if_(builder, _text(item["if"]), *args, body=_body(item.get("then")))
        for branch in item.get("else_if") or ():
            else_if(builder, _text(branch["if"]), *_args(branch.get("args")), body=_body(branch.get("then")))
        if "else" in item:
            else_(builder, body=_body(item["else"]))
        return end(builder)
    if kind == "for":
        return for_(builder, _text(item["for"]), *args, body=_body(item.get("body")))
    if kind == "while":
        begin_control(builder, "while", _text(item["while"]), *args, body=_body(item.get("body")))
        return end(builder)
    if kind == "do":
        do(builder, body=_body(item["do"]))
        return while_(builder, _text(item["while"]), *args)
    # switch
    return switch(builder, _text(item["switch"]), *args, body=_cases(item.get("cases")))


def emit_body(builder: Any, items: Iterable[Any]) -> Any:
    for item in items:
        emit_item(builder, item)
    return builder


def _annotation_spec(annotation_def: AnnotationDef) -> AnnotationSpec:
    return _fill_members(AnnotationSpec.builder(annotation_def.type), annotation_def).build()


def _javadoc(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"


def build_method(method_def: MethodDef) -> MethodSpec:
    builder = MethodSpec.constructor_builder() if method_def.constructor else MethodSpec.builder(method_def.name)
    if method_def.javadoc:
        builder.add_javadoc("$L", _javadoc(method_def.javadoc))
    for annotation_def in method_def.annotations:
        if annotation_def.members:
            annotation(builder, annotation_def.type, lambda b, d=annotation_def: _fill_members(b, d))
        else:
            annotation(builder, annotation_def.type)
    builder.add_modifiers(*method_def.modifiers)
    if not method_def.constructor:
        returns(builder, method_def.returns)
    for parameter in method_def.parameters:
        builder.add_parameter(parameter.type, parameter.name, *parameter.modifiers)
    for exception in method_def.exceptions:
        builder.add_exception(exception)
    emit_body(builder, method_def.body)
    return builder.build()


def _fill_members(builder: AnnotationSpec.Builder, annotation_def: AnnotationDef) -> AnnotationSpec.Builder:
    for name, value in annotation_def.members.items():
        builder.add_member(name, "$L", value)
    return builder


def build_field(field_def: FieldDef) -> FieldSpec:
    builder = FieldSpec.builder(field_def.type, field_def.name, *field_def.modifiers)
    for annotation_def in field_def.annotations:
        builder.add_annotation(_annotation_spec(annotation_def))
    if field_def.initializer:
        builder.initializer("$L", field_def.initializer)
    return builder.build()


def build_type(class_def: ClassDef) -> TypeSpec:
    if class_def.kind == "interface":
        builder = TypeSpec.interface_builder(class_def.name)
    else:
        builder = TypeSpec.class_builder(class_def.name)
    if class_def.javadoc:
        builder.add_javadoc("$L", _javadoc(class_def.javadoc))
    for annotation_def in class_def.annotations:
        builder.add_annotation(_annotation_spec(annotation_def))
    builder.add_modifiers(*class_def.modifiers)
    if class_def.superclass:
        builder.superclass(class_def.superclass)
    for interface in class_def.interfaces:
        builder.add_superinterface(interface)
    for field_def in class_def.fields:
        builder.add_field(build_field(field_def))
    for method_def in class_def.methods:
        builder.add_method(build_method(method_def))
    return builder.build()


def assemble_java_file(class_def: ClassDef, *, indent: str | None = None) -> JavaFile:
    return JavaFile(
        package_name=class_def.package,
        type_spec=build_type(class_def),
        file_comment=class_def.file_comment,
        indent=class_def.indent if indent is None else indent,
    )
