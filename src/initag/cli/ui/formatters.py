from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from initag.core.models import Binding, DecodeReport, ScalarKind, SchemaTree


def _short(s: str, max_len: int = 140) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "…"


def _plain(value: Any) -> Any:
    # json/yaml safe scalar
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


# ----------------------------
# Record values
# ----------------------------


def schema_values(schema: SchemaTree) -> Dict[str, Any]:
    """
    Current values keyed by INI tags:
      {"[Mysql]": {"cache_size": 2000}, "[Top]": "x"}
    """
    out: Dict[str, Any] = {}
    for tag, b in schema.items():
        if b.kind == ScalarKind.RECORD:
            out[tag] = schema_values(b.children)
        else:
            out[tag] = _plain(b.getter())
    return out


def dump_values(schema: SchemaTree, fmt: str) -> str:
    values = schema_values(schema)
    if fmt == "yaml":
        return yaml.safe_dump(values, sort_keys=False, allow_unicode=True)
    return json.dumps(values, indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class ValuesRenderOptions:
    title: Optional[str] = None
    max_value_len: int = 120


def render_values_table(
    console: Console,
    schema: SchemaTree,
    *,
    opts: Optional[ValuesRenderOptions] = None,
) -> None:
    opts = opts or ValuesRenderOptions()

    table = Table(title=escape(opts.title or "Decoded values"), show_lines=False)
    table.add_column("Section", style="section", no_wrap=True)
    table.add_column("Key", style="key", no_wrap=True)
    table.add_column("Type", style="muted", no_wrap=True)
    table.add_column("Value")

    rows = 0
    for tag, b in schema.items():
        if b.kind != ScalarKind.RECORD:
            table.add_row("-", Text(tag), b.type_label(), Text(_short(repr(b.getter()), opts.max_value_len)))
            rows += 1
            continue
        for key, child in b.children.items():
            table.add_row(Text(tag), Text(key), child.type_label(), Text(_short(repr(child.getter()), opts.max_value_len)))
            rows += 1

    if not rows:
        console.print("[warn]⚠️  Model declares no ini-tagged fields.[/warn]")
        return
    console.print(table)


# ----------------------------
# Schema tree
# ----------------------------


def _binding_label(b: Binding) -> Text:
    style = "section" if b.kind == ScalarKind.RECORD else "key"
    label = Text(b.tag, style=style)
    label.append(f"  {b.name}: {b.type_label()}", style="muted")
    return label


def _add_children(node: Tree, children: Dict[str, Binding]) -> None:
    for b in children.values():
        child = node.add(_binding_label(b))
        if b.children:
            _add_children(child, b.children)


def render_schema_tree(console: Console, schema: SchemaTree, *, title: str = "Bindings") -> None:
    if not schema:
        console.print("[warn]⚠️  Model declares no ini-tagged fields.[/warn]")
        return
    root = Tree(Text(title, style="bold"))
    _add_children(root, schema)
    console.print(root)


# ----------------------------
# Decode report
# ----------------------------


def render_report(
    console: Console,
    report: DecodeReport,
    *,
    header: str = "Summary",
    max_items: int = 25,
) -> None:
    cols: List[str] = [
        "lines",
        "sections",
        "assigned",
        "comments",
        "blank",
        "outside_section",
        "no_delimiter",
        "dropped",
    ]
    vals: List[str] = [
        str(report.lines),
        str(report.sections),
        str(report.assignments),
        str(report.comments),
        str(report.blank),
        str(report.outside_section),
        str(report.no_delimiter),
        str(report.dropped),
    ]

    table = Table(title=header, show_header=True, show_lines=False)
    for c in cols:
        table.add_column(c, style="bold", no_wrap=True)
    table.add_row(*vals)

    console.print()
    console.print(table)

    for label, items in (("Unknown sections", report.unknown_sections), ("Unknown keys", report.unknown_keys)):
        if not items:
            continue
        console.print(f"[warn]{label} ({len(items)}):[/warn]")
        for item in items[:max_items]:
            console.print(f"  - {escape(item)}")
        if len(items) > max_items:
            console.print(f"[muted]… and {len(items) - max_items} more[/muted]")
