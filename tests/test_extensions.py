from __future__ import annotations

import pytest

from jpoet.code import CodeBlock, FormatError
from jpoet.extensions import (
    Args,
    annotation,
    begin_control,
    break_,
    code,
    comment,
    continue_,
    do,
    else_,
    else_if,
    end,
    end_control,
    for_,
    if_,
    next_control,
    return_,
    returns,
    statement,
    switch,
    throw_new,
    while_,
)
from jpoet.specs import AnnotationSpec, MethodSpec
from jpoet.types import INT, ClassName

String = ClassName.get("java.lang", "String")


def _text(builder: CodeBlock.Builder) -> str:
    return str(builder.build())


def test_if_then_end_matches_primitives() -> None:
    sugared = CodeBlock.builder()
    if_(sugared, "x > $L", 0, body=lambda b: b.add_statement("y = x"))
    end(sugared)

    manual = CodeBlock.builder().begin_control_flow("if (x > $L)", 0).add_statement("y = x").end_control_flow()
    assert _text(sugared) == _text(manual) == "if (x > 0) {\n  y = x;\n}\n"


def test_else_if_chain_matches_primitives() -> None:
    sugared = CodeBlock.builder()
    if_(sugared, "a", body=lambda b: b.add_statement("one()"))
    else_if(sugared, "b == $S", "two", body=lambda b: b.add_statement("two()"))
    else_(sugared, body=lambda b: b.add_statement("three()"))
    end(sugared)

    manual = (
        CodeBlock.builder()
        .begin_control_flow("if (a)")
        .add_statement("one()")
        .next_control_flow("else if (b == $S)", "two")
        .add_statement("two()")
        .next_control_flow("else")
        .add_statement("three()")
        .end_control_flow()
    )
    assert _text(sugared) == _text(manual)


def test_do_while_matches_primitives() -> None:
    sugared = CodeBlock.builder()
    do(sugared, body=lambda b: b.add_statement("x--"))
    while_(sugared, "x > $L", 0)

    manual = CodeBlock.builder().begin_control_flow("do").add_statement("x--").end_control_flow("while (x > $L)", 0)
    assert _text(sugared) == _text(manual) == "do {\n  x--;\n} while (x > 0);\n"


def test_while_accepts_args_and_end_accepts_a_closing_statement() -> None:
    with_args = CodeBlock.builder()
    do(with_args, body=lambda b: None)
    while_(with_args, Args.of("running"))

    with_end = CodeBlock.builder()
    do(with_end, body=lambda b: None)
    end(with_end, "while ($L)", "running")

    assert _text(with_args) == _text(with_end) == "do {\n} while (running);\n"


def test_for_and_switch_close_themselves() -> None:
    loop = for_(CodeBlock.builder(), "int i = 0; i < $L; i++", 3, body=lambda b: b.add_statement("work(i)"))
    assert _text(loop) == "for (int i = 0; i < 3; i++) {\n  work(i);\n}\n"

    def cases(b: CodeBlock.Builder) -> CodeBlock.Builder:
        b.add("case 1:\n").indent()
        break_(b)
        return b.unindent()

    branch = switch(CodeBlock.builder(), "value", body=cases)
    manual = (
        CodeBlock.builder()
        .begin_control_flow("switch (value)")
        .add("case 1:\n")
        .indent()
        .add_statement("break")
        .unindent()
        .end_control_flow()
    )
    assert _text(branch) == _text(manual) == "switch (value) {\n  case 1:\n    break;\n}\n"


def test_generic_control_helpers() -> None:
    block = CodeBlock.builder()
    begin_control(block, "synchronized", "lock", body=lambda b: b.add_statement("count++"))
    next_control(block, "finally", body=lambda b: b.add_statement("done()"))
    end(block)
    assert _text(block) == "synchronized (lock) {\n  count++;\n} finally {\n  done();\n}\n"

    closed = CodeBlock.builder().begin_control_flow("do")
    end_control(closed, "while", Args.of("$N", "ok"))
    assert _text(closed) == "do {\n} while (ok);\n"

    with_args = CodeBlock.builder().begin_control_flow("do")
    end(with_args, Args.of("while ($L > $L)", "n", 0))
    assert _text(with_args) == "do {\n} while (n > 0);\n"


def test_statement_appends_one_formatted_statement() -> None:
    assert _text(statement(CodeBlock.builder(), "int x = $L", 5)) == "int x = 5;\n"
    assert _text(statement(CodeBlock.builder(), Args.of("$T y = $S", String, "z"))) == 'java.lang.String y = "z";\n'

    system = ClassName.get("java.lang", "System")
    built = statement(CodeBlock.builder(), lambda b: b.add("$T.gc()", system))
    assert _text(built) == "java.lang.System.gc();\n"


def test_return_prepends_return() -> None:
    assert _text(return_(CodeBlock.builder(), "$L + 1", "x")) == "return x + 1;\n"
    assert _text(return_(CodeBlock.builder(), Args.of("$S", "ok"))) == 'return "ok";\n'


def test_simple_statements() -> None:
    assert _text(break_(CodeBlock.builder())) == "break;\n"
    assert _text(continue_(CodeBlock.builder())) == "continue;\n"
    assert _text(comment(CodeBlock.builder(), "hello")) == "// hello\n"
    assert (
        _text(throw_new(CodeBlock.builder(), "IllegalStateException", "closed"))
        == 'throw new java.lang.IllegalStateException("closed");\n'
    )
    assert (
        _text(throw_new(CodeBlock.builder(), ClassName.get("com.example", "Oops"), "bad $L", 7))
        == 'throw new com.example.Oops("bad 7");\n'
    )


def test_code_appends_block_verbatim() -> None:
    built = code(CodeBlock.builder(), lambda b: b.add("a();\n").add("b();\n"))
    assert _text(built) == "a();\nb();\n"


def test_annotation_without_members() -> None:
    method = annotation(MethodSpec.builder("run"), "java.lang.Override").build()
    assert method.annotations == (AnnotationSpec.get(ClassName.get("java.lang", "Override")),)
    assert method.annotations[0].members == {}


def test_annotation_with_members() -> None:
    method = annotation(
        MethodSpec.builder("run"),
        "SuppressWarnings",
        lambda a: a.add_member("value", "$S", "unchecked"),
    ).build()
    assert len(method.annotations) == 1
    assert str(method.annotations[0]) == '@java.lang.SuppressWarnings("unchecked")'


def test_returns() -> None:
    assert returns(MethodSpec.builder("size"), int).build().return_type == INT


def test_every_helper_returns_the_same_builder() -> None:
    def body(b: CodeBlock.Builder) -> None:
        return None

    method = MethodSpec.builder("run")
    assert returns(method, "void") is method
    assert annotation(method, "Override") is method
    assert statement(method, "a()") is method
    assert comment(method, "note") is method
    assert code(method, body) is method
    assert if_(method, "a", body=body) is method
    assert else_if(method, "b", body=body) is method
    assert else_(method, body=body) is method
    assert end(method) is method
    assert for_(method, ";;", body=body) is method
    assert switch(method, "x", body=body) is method
    assert do(method, body=body) is method
    assert while_(method, "x") is method
    assert return_(method, "") is method
    assert break_(method) is method
    assert continue_(method) is method
    assert throw_new(method, "RuntimeException", "boom") is method

    block = CodeBlock.builder()
    assert if_(block, "a", body=body) is block
    assert end(block) is block


def test_if_else_method_end_to_end() -> None:
    sugared = MethodSpec.builder("abs").add_modifiers("public", "static").returns(int).add_parameter(int, "x")
    if_(sugared, "x > 0", body=lambda b: return_(b, "x"))
    else_(sugared, body=lambda b: return_(b, "-x"))
    end(sugared)

    manual = (
        MethodSpec.builder("abs")
        .add_modifiers("public", "static")
        .returns(int)
        .add_parameter(int, "x")
        .begin_control_flow("if (x > 0)")
        .add_statement("return x")
        .next_control_flow("else")
        .add_statement("return -x")
        .end_control_flow()
    )

    expected = (
        "public static int abs(int x) {\n"
        "  if (x > 0) {\n"
        "    return x;\n"
        "  } else {\n"
        "    return -x;\n"
        "  }\n"
        "}\n"
    )
    assert str(sugared.build()) == str(manual.build()) == expected


def test_nested_bodies() -> None:
    block = for_(
        CodeBlock.builder(),
        "String name : names",
        body=lambda b: end(if_(b, "name.isEmpty()", body=continue_)),
    )
    assert _text(block) == "for (String name : names) {\n  if (name.isEmpty()) {\n    continue;\n  }\n}\n"


def test_unpaired_end_is_reported_when_rendering() -> None:
    block = end(CodeBlock.builder())
    with pytest.raises(FormatError):
        _text(block)
