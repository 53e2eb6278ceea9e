"""
renderer.py

Responsibility: Render a type into a complete Java compilation unit and write it to disk.

Rules:
- The type body is emitted twice: the first pass only collects importable types, the second
  emits simple names for everything that was imported.
- Imports are sorted; `java.lang` types are referenced by simple name without an import line.
- The file layout (comment, package, imports, body) comes from a jinja2 template.
- Output always uses `\\n` newlines so that generated files are stable across platforms.

This module does not know about class description files or CLI parsing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, StrictUndefined, TemplateError

from jpoet.specs import TypeSpec
from jpoet.types import ClassName
from jpoet.writer import CodeWriter

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    pass


_FILE_TEMPLATE = (
    "{% for line in comment_lines %}{{ line }}\n{% endfor %}"
    "{% if comment_lines %}\n{% endif %}"
    "{% if package_name %}package {{ package_name }};\n\n{% endif %}"
    "{% for name in imports %}import {{ name }};\n{% endfor %}"
    "{% if imports %}\n{% endif %}"
    "{{ body }}"
)

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


@dataclass(frozen=True)
class JavaFile:
    """A Java source file holding a single top-level type."""

    package_name: str
    type_spec: TypeSpec
    file_comment: str = ""
    indent: str = "  "
    skip_java_lang_imports: bool = True

    @property
    def relative_path(self) -> Path:
        path = Path(*self.package_name.split(".")) if self.package_name else Path()
        return path / f"{self.type_spec.name}.java"

    def _emit_body(self, imported_types: dict[str, ClassName]) -> CodeWriter:
        out = CodeWriter(
            self.indent,
            package_name=self.package_name,
            imported_types=imported_types,
            reserved_names=self.type_spec.declared_names(),
        )
        self.type_spec.emit(out)
        return out

    def _imports(self) -> tuple[dict[str, ClassName], list[str]]:
        suggested = self._emit_body({}).suggested_imports()
        lines = sorted(
            class_name.canonical_name
            for class_name in suggested.values()
            if not (self.skip_java_lang_imports and class_name.package_name == "java.lang")
        )
        return suggested, lines

    def to_string(self) -> str:
        imported_types, import_lines = self._imports()
        body = self._emit_body(imported_types).text()
        comment_lines = [f"// {line}".rstrip() for line in self.file_comment.splitlines()]
        try:
            return _env.from_string(_FILE_TEMPLATE).render(
                comment_lines=comment_lines,
                package_name=self.package_name,
                imports=import_lines,
                body=body,
            )
        except TemplateError as e:
            raise RenderError(f"Failed rendering {self.relative_path}") from e

    def __str__(self) -> str:
        return self.to_string()

    def write_to(self, directory: str | Path) -> Path:
        """
        Write the file under `directory`, creating package directories as needed.
        Returns the path of the written file.
        """
        dst_path = Path(directory).resolve() / self.relative_path
        text = self.to_string()
        try:
            dst_path.parent.mkdir(parents=True, exist_ok=True)
            dst_path.write_text(text, encoding="utf-8", newline="\n")
        except OSError as e:
            raise RenderError(f"Failed writing {dst_path}") from e
        logger.debug("Wrote %s (%d bytes)", dst_path, len(text))
        return dst_path
