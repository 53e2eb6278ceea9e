"""
extensions.py

Responsibility: Short, chainable spellings for common builder mutations.

Every function takes a builder (`MethodSpec.Builder` or `CodeBlock.Builder`), applies exactly one
mutation through the builder's own API and returns that same builder instance:

    method = MethodSpec.builder("abs").returns(int).add_parameter(int, "x")
    if_(method, "x > 0", body=lambda b: return_(b, "x"))
    else_(method, body=lambda b: return_(b, "-x"))
    end(method)

Bodies (`body=`) receive a fresh `CodeBlock.Builder` and may return it or nothing. Block
nesting is not checked here: each begin/next must be paired by the caller, and mismatches only
surface when the code is rendered.

Names that are Python keywords carry a trailing underscore (`if_`, `else_`, `return_`, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from jpoet.code import CodeBlock
from jpoet.specs import AnnotationSpec, MethodSpec

Builder = TypeVar("Builder", MethodSpec.Builder, CodeBlock.Builder)

CodeMethod = Callable[[CodeBlock.Builder], Optional[CodeBlock.Builder]]
AnnotationMethod = Callable[[AnnotationSpec.Builder], Optional[AnnotationSpec.Builder]]


@dataclass(frozen=True)
class Args:
    """A format string bundled with its arguments, passed around as one statement."""

    code: str
    args: tuple[Any, ...] = ()

    @staticmethod
    def of(code: str, *args: Any) -> Args:
        return Args(code, args)


def _build(function: CodeMethod) -> CodeBlock:
    builder = CodeBlock.builder()
    result = function(builder)
    return (builder if result is None else result).build()


def _unpack(statement: str | Args, args: tuple[Any, ...]) -> tuple[str, tuple[Any, ...]]:
    if isinstance(statement, Args):
        return statement.code, statement.args
    return statement or "", args


def _control(name: str, statement: str) -> str:
    return f"{name} ({statement})" if statement else name


def returns(builder: MethodSpec.Builder, type_name: Any) -> MethodSpec.Builder:
    return builder.returns(type_name)


def code(builder: Builder, function: CodeMethod) -> Builder:
    """Append the block built by `function` as-is."""
    return builder.add_code(_build(function))


def statement(builder: Builder, code_or_function: str | Args | CodeMethod, *args: Any) -> Builder:
    """
    Append one statement. Accepts a format string plus arguments, an `Args`, or a function
    that builds the statement text into a fresh code block.
    """
    if isinstance(code_or_function, Args):
        return builder.add_statement(code_or_function.code, *code_or_function.args)
    if callable(code_or_function):
        return builder.add_statement("$L", _build(code_or_function))
    return builder.add_statement(code_or_function, *args)


def comment(builder: Builder, text: str) -> Builder:
    return builder.add_comment(text)


def annotation(
    builder: MethodSpec.Builder,
    type_name: Any,
    function: AnnotationMethod | None = None,
) -> MethodSpec.Builder:
    """Add an annotation of `type_name`; `function` may add members to it first."""
    if function is None:
        return builder.add_annotation(type_name)
    annotation_builder = AnnotationSpec.builder(type_name)
    result = function(annotation_builder)
    return builder.add_annotation((annotation_builder if result is None else result).build())


# control flow


def if_(builder: Builder, statement: str, *args: Any, body: CodeMethod) -> Builder:
    return begin_control(builder, "if", statement, *args, body=body)


def do(builder: Builder, statement: str = "", *args: Any, body: CodeMethod) -> Builder:
    return begin_control(builder, "do", statement, *args, body=body)


def while_(builder: Builder, statement: str | Args, *args: Any) -> Builder:
    """Close a `do` block with `} while (statement);`."""
    return end_control(builder, "while", statement, *args)


def else_(builder: Builder, body: CodeMethod) -> Builder:
    return next_control(builder, "else", body=body)


def else_if(builder: Builder, statement: str, *args: Any, body: CodeMethod) -> Builder:
    return next_control(builder, "else if", statement, *args, body=body)


def end(builder: Builder, statement: str | Args = "", *args: Any) -> Builder:
    code_text, code_args = _unpack(statement, args)
    if code_text.strip():
        return builder.end_control_flow(code_text, *code_args)
    return builder.end_control_flow()


def for_(builder: Builder, statement: str, *args: Any, body: CodeMethod) -> Builder:
    return begin_control(builder, "for", statement, *args, body=body).end_control_flow()


def switch(builder: Builder, statement: str, *args: Any, body: CodeMethod) -> Builder:
    return begin_control(builder, "switch", statement, *args, body=body).end_control_flow()


def return_(builder: Builder, statement: str | Args, *args: Any) -> Builder:
    code_text, code_args = _unpack(statement, args)
    return builder.add_statement(f"return {code_text}", *code_args)


def break_(builder: Builder) -> Builder:
    return builder.add_statement("break")


def continue_(builder: Builder) -> Builder:
    return builder.add_statement("continue")


def throw_new(builder: Builder, type_name: Any, message: str, *args: Any) -> Builder:
    """Append `throw new <type>("<message>");`. The message is inserted into the format as-is."""
    return builder.add_statement(f'throw new $T("{message}")', type_name, *args)


def next_control(builder: Builder, name: str, statement: str = "", *args: Any, body: CodeMethod) -> Builder:
    return builder.next_control_flow(_control(name, statement), *args).add_code(_build(body))


def begin_control(builder: Builder, name: str, statement: str = "", *args: Any, body: CodeMethod) -> Builder:
    return builder.begin_control_flow(_control(name, statement), *args).add_code(_build(body))


def end_control(builder: Builder, name: str, statement: str | Args = "", *args: Any) -> Builder:
    code_text, code_args = _unpack(statement, args)
    return builder.end_control_flow(_control(name, code_text), *code_args)
