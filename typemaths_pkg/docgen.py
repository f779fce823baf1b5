"""Markdown documentation generator.

Renders one Markdown page per module from its docstrings: the module
docstring's first paragraph becomes a quoted introduction, the rest its
description, and every public function or class gets a ``###`` section
with its docstring and signature. Inline TeX written as ``$...$`` is
turned into an image link rendered by codecogs. Objects whose docstring
contains ``:nodoc:`` are skipped.

Usage:
    python -m typemaths_pkg.docgen --output-dir doc
    python -m typemaths_pkg.docgen combinators generators --output-dir doc
"""

from __future__ import annotations

import argparse
import importlib
import inspect
import re
import sys
from pathlib import Path
from types import ModuleType
from urllib.parse import quote

from .logging_config import get_logger

logger = get_logger("docgen")

TEX_REGEX = re.compile(r"\$((?:[^$\\]|\\\$|\\.)*)\$")

NODOC = ":nodoc:"

DEFAULT_MODULES = (
    "types",
    "combinators",
    "generators",
    "tokenizer",
    "parsing",
    "expression",
    "handlers",
    "differential",
    "numerical_analysis",
)


def render_tex(text: str) -> str:
    """Replace ``$formula$`` spans with codecogs image links."""

    def replace(match: re.Match) -> str:
        content = match.group(1)
        title = content.replace("\n", "")
        return f"![${title}$](http://latex.codecogs.com/png.latex?{quote(content)}) "

    return TEX_REGEX.sub(replace, text)


def _fence_examples(text: str) -> str:
    """Wrap indented ``>>>`` example blocks in Python code fences."""
    out: list[str] = []
    in_block = False
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith(">>>") and not in_block:
            out.append("```python")
            in_block = True
        elif in_block and not stripped:
            out.append("```")
            in_block = False
        out.append(stripped if in_block else line)
    if in_block:
        out.append("```")
    return "\n".join(out)


def _signature(name: str, obj: object) -> str:
    keyword = "class" if inspect.isclass(obj) else "def"
    try:
        return f"{keyword} {name}{inspect.signature(obj)}"
    except (TypeError, ValueError):
        return f"{keyword} {name}"


def _public_members(module: ModuleType) -> list[tuple[str, object]]:
    members = []
    for name, obj in vars(module).items():
        if name.startswith("_"):
            continue
        if not (inspect.isfunction(obj) or inspect.isclass(obj)):
            continue
        if getattr(obj, "__module__", None) != module.__name__:
            continue
        members.append((name, obj))

    def line_of(item: tuple[str, object]) -> int:
        try:
            return inspect.getsourcelines(item[1])[1]
        except (OSError, TypeError):
            return 0

    return sorted(members, key=line_of)


def render_module(module: ModuleType) -> str:
    """Render the Markdown page for ``module``."""
    title = module.__name__.rsplit(".", 1)[-1].replace("_", " ").capitalize()
    lines = [f"# {title}", ""]

    doc = inspect.getdoc(module) or ""
    if doc:
        intro, _, description = doc.partition("\n\n")
        intro = render_tex(intro).replace("\n", "\n> ")
        lines += [f"> {intro}", ""]
        if description:
            lines += [_fence_examples(render_tex(description)), ""]

    for name, obj in _public_members(module):
        member_doc = inspect.getdoc(obj) or ""
        if NODOC in member_doc:
            continue
        lines += [f"### {name}", ""]
        if member_doc:
            lines += [_fence_examples(render_tex(member_doc)), ""]
        lines += ["```python", _signature(name, obj), "```", ""]

    return "\n".join(lines)


def render_file(module_name: str, output: str | Path) -> Path:
    """Render ``typemaths_pkg.<module_name>`` into the file ``output``."""
    if "." not in module_name:
        module_name = f"{__package__}.{module_name}"
    module = importlib.import_module(module_name)
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_module(module), encoding="utf-8")
    logger.info("Wrote %s documentation to %s", module_name, path)
    return path


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="typemaths-doc", description="Generate Markdown documentation"
    )
    parser.add_argument(
        "modules",
        nargs="*",
        default=list(DEFAULT_MODULES),
        help="Modules to document (default: all)",
    )
    parser.add_argument("-o", "--output-dir", default="doc", help="Output directory")
    args = parser.parse_args(argv)

    for name in args.modules:
        short = name.rsplit(".", 1)[-1]
        try:
            render_file(name, Path(args.output_dir) / f"{short}.md")
        except ImportError as e:
            print(f"Error: cannot import module {name!r}: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
