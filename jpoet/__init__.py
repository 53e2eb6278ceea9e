"""
jpoet package

Java source generation with chainable builders and infix-style helpers.

Key responsibilities are split across modules:
- `types.py`: type names (primitives, classes, arrays, generics)
- `code.py`: format-driven code blocks (`$L`, `$S`, `$T`, `$N`)
- `writer.py`: text emission, indentation and import resolution
- `specs.py`: annotation / parameter / field / method / type declarations and their builders
- `extensions.py`: fluent helpers over the builders (`if_`, `else_`, `return_`, `statement`, ...)
- `renderer.py`: compilation-unit rendering and writing to disk
- `class_spec.py` / `assembler.py`: YAML class descriptions -> builders
- `cli.py`: CLI entrypoint (parse -> assemble -> render)
"""

from __future__ import annotations

from jpoet.code import CodeBlock, FormatError
from jpoet.renderer import JavaFile, RenderError
from jpoet.specs import AnnotationSpec, FieldSpec, MethodSpec, Modifier, ParameterSpec, SpecBuildError, TypeSpec
from jpoet.types import ArrayTypeName, ClassName, ParameterizedTypeName, TypeName

__all__ = [
    "AnnotationSpec",
    "ArrayTypeName",
    "ClassName",
    "CodeBlock",
    "FieldSpec",
    "FormatError",
    "JavaFile",
    "MethodSpec",
    "Modifier",
    "ParameterSpec",
    "ParameterizedTypeName",
    "RenderError",
    "SpecBuildError",
    "TypeName",
    "TypeSpec",
    "__version__",
]

__version__ = "0.1.0"
