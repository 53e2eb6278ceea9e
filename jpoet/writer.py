"""
writer.py

Responsibility: Turn code blocks and specs into Java text.

The writer tracks indentation, statement continuation lines and javadoc prefixes. It also resolves
class names: a first pass over a file collects importable types, and a second pass, given the
resulting import map, emits simple names wherever that is unambiguous.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from jpoet.code import CodeBlock, FormatError
from jpoet.types import ClassName, TypeName

if TYPE_CHECKING:
    from jpoet.specs import Modifier


class CodeWriter:
    def __init__(
        self,
        indent: str = "  ",
        *,
        package_name: str = "",
        imported_types: dict[str, ClassName] | None = None,
        reserved_names: Iterable[str] = (),
    ) -> None:
        self._indent = indent
        self._package_name = package_name
        self._imported_types = dict(imported_types or {})
        self._out: list[str] = []
        self._indent_level = 0
        self._trailing_newline = True
        self._statement_line = -1
        self._javadoc = False
        # Simple names that must never be imported because they would shadow something.
        self._referenced_names: set[str] = set(reserved_names)
        self._importable_types: dict[str, ClassName] = {}

    # -- output -----------------------------------------------------------------------------

    def text(self) -> str:
        return "".join(self._out)

    def indent(self, levels: int = 1) -> CodeWriter:
        self._indent_level += levels
        return self

    def unindent(self, levels: int = 1) -> CodeWriter:
        if self._indent_level - levels < 0:
            raise FormatError(f"cannot unindent {levels} from {self._indent_level}")
        self._indent_level -= levels
        return self

    def _emit_indentation(self) -> None:
        self._out.append(self._indent * self._indent_level)

    def emit(self, s: str) -> CodeWriter:
        """
        Emit `s`, indenting every line that starts after a newline.
        Inside a statement, continuation lines are indented two extra levels.
        """
        first = True
        for line in s.split("\n"):
            if not first:
                if self._javadoc and self._trailing_newline:
                    self._emit_indentation()
                    self._out.append(" *")
                self._out.append("\n")
                self._trailing_newline = True
                if self._statement_line != -1:
                    if self._statement_line == 0:
                        self.indent(2)
                    self._statement_line += 1
            first = False
            if not line:
                continue
            if self._trailing_newline:
                self._emit_indentation()
                if self._javadoc:
                    self._out.append(" * ")
            self._out.append(line)
            self._trailing_newline = False
        return self

    # -- statements -------------------------------------------------------------------------

    def begin_statement(self) -> None:
        if self._statement_line != -1:
            raise FormatError("statement enter $[ followed by statement enter $[")
        self._statement_line = 0

    def end_statement(self) -> None:
        if self._statement_line == -1:
            raise FormatError("statement exit $] has no matching statement enter $[")
        if self._statement_line > 0:
            self.unindent(2)
        self._statement_line = -1

    # -- code -------------------------------------------------------------------------------

    def emit_code(self, code_block: CodeBlock) -> CodeWriter:
        args = iter(code_block.args)
        for part in code_block.format_parts:
            if part == "$L":
                self._emit_literal(next(args))
            elif part == "$N":
                self.emit(next(args))
            elif part == "$S":
                value = next(args)
                self.emit("null" if value is None else string_literal(value))
            elif part == "$T":
                next(args).emit(self)
            elif part == "$$":
                self.emit("$")
            elif part == "$>":
                self.indent()
            elif part == "$<":
                self.unindent()
            elif part == "$[":
                self.begin_statement()
            elif part == "$]":
                self.end_statement()
            elif part == "$W":
                self.emit(" ")
            else:
                self.emit(part)
        return self

    def emit_format(self, fmt: str, *args: Any) -> CodeWriter:
        return self.emit_code(CodeBlock.of(fmt, *args))

    def _emit_literal(self, value: Any) -> None:
        if isinstance(value, CodeBlock):
            self.emit_code(value)
        elif hasattr(value, "emit") and not isinstance(value, TypeName):
            value.emit(self)
        elif isinstance(value, bool):
            self.emit("true" if value else "false")
        elif value is None:
            self.emit("null")
        else:
            self.emit(str(value))

    def emit_javadoc(self, code_block: CodeBlock) -> None:
        if code_block.is_empty():
            return
        self.emit("/**\n")
        self._javadoc = True
        try:
            self.emit_code(code_block)
        finally:
            self._javadoc = False
        self.emit(" */\n")

    def emit_modifiers(self, modifiers: Iterable[Modifier], implicit: Iterable[Modifier] = ()) -> None:
        skip = set(implicit)
        for modifier in modifiers:
            if modifier in skip:
                continue
            self.emit(modifier.value)
            self.emit(" ")

    # -- names ------------------------------------------------------------------------------

    def lookup_name(self, class_name: ClassName) -> str:
        top = class_name.top_level_class_name()
        simple = top.simple_name
        nested = ".".join(class_name.simple_names)

        if self._imported_types.get(simple) == top:
            return nested

        if class_name.package_name == self._package_name:
            self._referenced_names.add(simple)
            return nested

        if not self._javadoc:
            self._importable_type(top)
        return class_name.canonical_name

    def _importable_type(self, class_name: ClassName) -> None:
        if not class_name.package_name:
            return
        self._importable_types.setdefault(class_name.simple_name, class_name)

    def suggested_imports(self) -> dict[str, ClassName]:
        """Importable types collected so far, minus simple names that are already taken."""
        return {
            simple: class_name
            for simple, class_name in self._importable_types.items()
            if simple not in self._referenced_names
        }


def string_literal(value: Any) -> str:
    """Return `value` as a double-quoted, escaped Java string literal."""
    text = str(value)
    out = ['"']
    for ch in text:
        if ch == '"':
            out.append('\\"')
        else:
            out.append(_character_literal(ch))
    out.append('"')
    return "".join(out)


_ESCAPES = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    "\\": "\\\\",
}


def _character_literal(ch: str) -> str:
    escaped = _ESCAPES.get(ch)
    if escaped is not None:
        return escaped
    if ord(ch) < 0x20 or ord(ch) == 0x7F:
        return f"\\u{ord(ch):04x}"
    return ch
