from __future__ import annotations

import pytest

from jpoet.specs import (
    AnnotationSpec,
    FieldSpec,
    MethodSpec,
    Modifier,
    SpecBuildError,
    TypeSpec,
)
from jpoet.types import ClassName


def test_annotation_rendering() -> None:
    assert str(AnnotationSpec.get("java.lang.Override")) == "@java.lang.Override"

    suppress = AnnotationSpec.builder("SuppressWarnings").add_member("value", "$S", "unchecked").build()
    assert str(suppress) == '@java.lang.SuppressWarnings("unchecked")'

    route = (
        AnnotationSpec.builder(ClassName.get("com.example", "Route"))
        .add_member("path", "$S", "/x")
        .add_member("methods", "$S", "GET")
        .add_member("methods", "$S", "POST")
        .build()
    )
    assert str(route) == '@com.example.Route(path = "/x", methods = {"GET", "POST"})'


def test_annotation_type_must_be_a_class() -> None:
    with pytest.raises(SpecBuildError):
        AnnotationSpec.builder("int")


def test_modifiers_are_emitted_in_declaration_order() -> None:
    field = FieldSpec.builder(int, "MAX", "static", "final", Modifier.PUBLIC).initializer("$L", 10).build()
    assert str(field) == "public static final int MAX = 10;\n"


def test_unknown_modifier() -> None:
    with pytest.raises(SpecBuildError):
        MethodSpec.builder("run").add_modifiers("sometimes")


def test_method_with_javadoc_parameters_and_exceptions() -> None:
    method = (
        MethodSpec.builder("load")
        .add_javadoc("Loads it.\n")
        .add_modifiers("public")
        .returns(str)
        .add_parameter(ClassName.get("java.nio.file", "Path"), "path", "final")
        .add_exception(ClassName.get("java.io", "IOException"))
        .add_statement("return $T.readString(path)", ClassName.get("java.nio.file", "Files"))
        .build()
    )
    assert str(method) == (
        "/**\n"
        " * Loads it.\n"
        " */\n"
        "public java.lang.String load(final java.nio.file.Path path) throws java.io.IOException {\n"
        "  return java.nio.file.Files.readString(path);\n"
        "}\n"
    )


def test_method_validation() -> None:
    with pytest.raises(SpecBuildError):
        MethodSpec.builder("class")
    with pytest.raises(SpecBuildError):
        MethodSpec.constructor_builder().returns(int)
    with pytest.raises(SpecBuildError):
        MethodSpec.builder("run").add_modifiers("abstract").add_statement("work()").build()
    with pytest.raises(SpecBuildError):
        MethodSpec.builder("run").add_parameter(int)


def test_abstract_method_has_no_body() -> None:
    method = MethodSpec.builder("area").add_modifiers("public", "abstract").returns(float).build()
    assert str(method) == "public abstract double area();\n"


def test_class_with_field_constructor_and_method() -> None:
    type_spec = (
        TypeSpec.class_builder("Counter")
        .add_modifiers("public", "final")
        .add_field(FieldSpec.builder(int, "count", "private").initializer("$L", 0).build())
        .add_method(
            MethodSpec.constructor_builder()
            .add_modifiers("public")
            .add_parameter(int, "count")
            .add_statement("this.count = count")
            .build()
        )
        .add_method(MethodSpec.builder("increment").add_modifiers("public").add_statement("count++").build())
        .build()
    )
    assert str(type_spec) == (
        "public final class Counter {\n"
        "  private int count = 0;\n"
        "\n"
        "  public Counter(int count) {\n"
        "    this.count = count;\n"
        "  }\n"
        "\n"
        "  public void increment() {\n"
        "    count++;\n"
        "  }\n"
        "}\n"
    )


def test_interface_omits_implicit_modifiers() -> None:
    shape = (
        TypeSpec.interface_builder("Shape")
        .add_modifiers("public")
        .add_method(MethodSpec.builder("area").add_modifiers("public", "abstract").returns(float).build())
        .add_method(
            MethodSpec.builder("name").add_modifiers("default").returns(str).add_statement("return $S", "shape").build()
        )
        .build()
    )
    assert str(shape) == (
        "public interface Shape {\n"
        "  double area();\n"
        "\n"
        "  default java.lang.String name() {\n"
        '    return "shape";\n'
        "  }\n"
        "}\n"
    )


def test_interface_rules() -> None:
    with pytest.raises(SpecBuildError):
        TypeSpec.interface_builder("Shape").superclass("java.lang.Object")
    with pytest.raises(SpecBuildError):
        TypeSpec.interface_builder("Shape").add_method(MethodSpec.constructor_builder().build()).build()
    with pytest.raises(SpecBuildError):
        TypeSpec.interface_builder("Task").add_method(MethodSpec.builder("run").add_statement("work()").build()).build()

    static = MethodSpec.builder("create").add_modifiers("static").add_statement("work()").build()
    assert "  static void create() {\n    work();\n  }\n" in str(TypeSpec.interface_builder("Task").add_method(static).build())


def test_class_supertypes_and_nested_type() -> None:
    type_spec = (
        TypeSpec.class_builder("Task")
        .superclass("com.example.Base")
        .add_superinterface("Runnable")
        .add_superinterface("java.io.Serializable")
        .add_type(TypeSpec.class_builder("Result").add_modifiers("static").build())
        .build()
    )
    assert str(type_spec) == (
        "class Task extends com.example.Base implements java.lang.Runnable, java.io.Serializable {\n"
        "  static class Result {\n"
        "  }\n"
        "}\n"
    )
    assert type_spec.declared_names() == {"Task", "Result"}
