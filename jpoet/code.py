"""
code.py

Responsibility: Format-driven fragments of Java code.

A `CodeBlock` is an immutable list of format parts plus the arguments those parts consume.
Placeholders:
- `$L` literal, `$S` string literal, `$T` type, `$N` name
- `$$` dollar sign, `$>`/`$<` indent/unindent, `$[`/`$]` statement begin/end, `$W` space
- `$1L`, `$2T`, ... positional forms (1-based); these cannot be mixed with relative forms

Argument errors are raised when a block is built. Nesting errors (unindenting past zero) only
show up when the block is rendered.
"""

from __future__ import annotations

from typing import Any, Iterable

from jpoet.types import TypeName


class FormatError(ValueError):
    pass


_NO_ARG_PLACEHOLDERS = frozenset("$><[]W")
_ARG_PLACEHOLDERS = frozenset("LSTN")


class CodeBlock:
    """An immutable fragment of Java code. Build one with `CodeBlock.of` or `CodeBlock.builder()`."""

    __slots__ = ("format_parts", "args")

    def __init__(self, format_parts: tuple[str, ...], args: tuple[Any, ...]) -> None:
        self.format_parts = format_parts
        self.args = args

    @staticmethod
    def of(fmt: str, *args: Any) -> CodeBlock:
        return CodeBlock.Builder().add(fmt, *args).build()

    @staticmethod
    def builder() -> CodeBlock.Builder:
        return CodeBlock.Builder()

    @staticmethod
    def join(blocks: Iterable[CodeBlock], separator: str) -> CodeBlock:
        builder = CodeBlock.Builder()
        for i, block in enumerate(blocks):
            if i:
                builder.add(separator)
            builder.add_code(block)
        return builder.build()

    def is_empty(self) -> bool:
        return not self.format_parts

    def to_builder(self) -> CodeBlock.Builder:
        builder = CodeBlock.Builder()
        builder._parts.extend(self.format_parts)
        builder._args.extend(self.args)
        return builder

    def __str__(self) -> str:
        from jpoet.writer import CodeWriter

        return CodeWriter().emit_code(self).text()

    def __repr__(self) -> str:
        return f"CodeBlock({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeBlock):
            return NotImplemented
        return self.format_parts == other.format_parts and self.args == other.args

    def __hash__(self) -> int:
        return hash(self.format_parts)

    class Builder:
        """Mutable staging area for a CodeBlock. Every mutator returns the builder itself."""

        def __init__(self) -> None:
            self._parts: list[str] = []
            self._args: list[Any] = []

        def is_empty(self) -> bool:
            return not self._parts

        def add(self, fmt: str, *args: Any) -> CodeBlock.Builder:
            parts, consumed = _parse_format(fmt, args)
            self._parts.extend(parts)
            self._args.extend(consumed)
            return self

        def add_code(self, code_block: CodeBlock) -> CodeBlock.Builder:
            self._parts.extend(code_block.format_parts)
            self._args.extend(code_block.args)
            return self

        def add_statement(self, fmt: str, *args: Any) -> CodeBlock.Builder:
            self.add("$[")
            self.add(fmt, *args)
            return self.add(";\n$]")

        def add_comment(self, fmt: str, *args: Any) -> CodeBlock.Builder:
            return self.add("// " + fmt + "\n", *args)

        def begin_control_flow(self, control_flow: str, *args: Any) -> CodeBlock.Builder:
            """Open a block, e.g. `begin_control_flow("if (x > $L)", 0)` emits `if (x > 0) {`."""
            self.add(control_flow + " {\n", *args)
            return self.indent()

        def next_control_flow(self, control_flow: str, *args: Any) -> CodeBlock.Builder:
            self.unindent()
            self.add("} " + control_flow + " {\n", *args)
            return self.indent()

        def end_control_flow(self, control_flow: str | None = None, *args: Any) -> CodeBlock.Builder:
            """Close a block; with a flow, emit `} <flow>;` (do/while)."""
            self.unindent()
            if control_flow is None:
                return self.add("}\n")
            return self.add("} " + control_flow + ";\n", *args)

        def indent(self) -> CodeBlock.Builder:
            return self.add("$>")

        def unindent(self) -> CodeBlock.Builder:
            return self.add("$<")

        def build(self) -> CodeBlock:
            return CodeBlock(tuple(self._parts), tuple(self._args))


def _parse_format(fmt: str, args: tuple[Any, ...]) -> tuple[list[str], list[Any]]:
    """
    Split `fmt` into literal chunks and placeholders, pairing each argument-consuming
    placeholder with its (coerced) argument in emission order.
    """
    parts: list[str] = []
    consumed: list[Any] = []
    has_relative = False
    has_indexed = False
    relative_index = 0
    used_indexes: set[int] = set()

    p = 0
    while p < len(fmt):
        if fmt[p] != "$":
            next_p = fmt.find("$", p + 1)
            if next_p == -1:
                next_p = len(fmt)
            parts.append(fmt[p:next_p])
            p = next_p
            continue

        p += 1
        if p >= len(fmt):
            raise FormatError(f"dangling format characters in {fmt!r}")

        c = fmt[p]
        if c in _NO_ARG_PLACEHOLDERS:
            parts.append("$" + c)
            p += 1
            continue

        index_start = p
        while p < len(fmt) and fmt[p].isdigit():
            p += 1
        if p >= len(fmt):
            raise FormatError(f"dangling format characters in {fmt!r}")
        c = fmt[p]
        if c not in _ARG_PLACEHOLDERS:
            raise FormatError(f"invalid format string: {fmt!r}")

        if p > index_start:
            index = int(fmt[index_start:p]) - 1
            if index < 0 or index >= len(args):
                raise FormatError(f"index {index + 1} for {fmt!r} not in range (received {len(args)} arguments)")
            has_indexed = True
            used_indexes.add(index)
        else:
            index = relative_index
            if index >= len(args):
                raise FormatError(f"not enough arguments for {fmt!r}")
            has_relative = True
            relative_index += 1

        consumed.append(_coerce_arg(c, args[index]))
        parts.append("$" + c)
        p += 1

    if has_relative and has_indexed:
        raise FormatError(f"cannot mix indexed and positional parameters in {fmt!r}")
    if has_relative and relative_index < len(args):
        raise FormatError(f"unused arguments: expected {relative_index}, received {len(args)}")
    if not has_relative:
        unused = [str(i + 1) for i in range(len(args)) if i not in used_indexes]
        if unused:
            raise FormatError(f"unused argument{'s' if len(unused) > 1 else ''}: ${', $'.join(unused)}")

    return parts, consumed


def _coerce_arg(kind: str, value: Any) -> Any:
    if kind == "L":
        return value
    if kind == "S":
        if value is None or isinstance(value, str):
            return value
        return str(value)
    if kind == "T":
        try:
            return TypeName.get(value)
        except (TypeError, ValueError) as e:
            raise FormatError(f"expected type but was {value!r}") from e
    # $N
    if isinstance(value, str):
        return value
    name = getattr(value, "name", None)
    if isinstance(name, str):
        return name
    raise FormatError(f"expected name but was {value!r}")
