"""
cli.py

Responsibility: CLI entrypoint for jpoet.

High-level flow (single command `generate`):
1) Parse class description -> `ClassDef`
2) Assemble builders -> `JavaFile`
3) Render and either print it or write it under the output directory

This module should orchestrate behavior but keep concerns isolated:
- Description parsing: `class_spec.py`
- Builder assembly: `assembler.py`
- Rendering / writing: `renderer.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from jpoet.assembler import assemble_java_file
from jpoet.class_spec import parse_class_spec

logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    pass


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _indent_override(value: int | None) -> str | None:
    if value is None:
        return None
    if value < 0:
        raise CLIError("--indent must not be negative")
    return " " * value


def generate_cmd(args: argparse.Namespace) -> int:
    class_def = parse_class_spec(args.spec_path)
    logger.debug("Parsed %s: %s %s.%s", args.spec_path, class_def.kind, class_def.package, class_def.name)

    java_file = assemble_java_file(class_def, indent=_indent_override(args.indent))

    if args.stdout:
        sys.stdout.write(java_file.to_string())
        return 0

    out_dir = Path(args.out).resolve()
    target = out_dir / java_file.relative_path
    if target.exists() and not args.overwrite:
        raise CLIError(f"Refusing to replace existing file: {target} (use --overwrite to allow)")

    written = java_file.write_to(out_dir)
    logger.info("Generated %s", written)
    print(written)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="jpoet", description="jpoet - generate Java source from class descriptions")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Render a Java source file from a class description")
    g.add_argument("spec_path", help="Path to the class description (markdown with YAML frontmatter, or YAML)")
    g.add_argument("--out", default="generated", help="Output source root (default: generated)")
    g.add_argument("--stdout", action="store_true", help="Print the rendered file instead of writing it")
    g.add_argument("--overwrite", action="store_true", help="Allow replacing an existing file")
    g.add_argument("--indent", type=int, default=None, help="Spaces per indent level (overrides the description)")

    g.set_defaults(func=generate_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose))
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
