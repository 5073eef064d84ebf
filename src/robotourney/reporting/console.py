"""Rich presenter — turns a render tree into terminal renderables."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table as RichTable
from rich.text import Text

from robotourney.reporting.tree import Document, Heading, Item, ItemList, Node, Paragraph, Table


def _item_text(item: Item, prefix: str) -> Text:
    text = Text(prefix)
    for span in item.spans:
        text.append(span.text, style="bold" if span.strong else None)
    return text


def _heading(node: Heading) -> RenderableType:
    if node.level == 1:
        return Panel(Text(node.text, style="bold white", justify="center"), border_style="bright_white")
    if node.level == 2:
        return Rule(Text(node.text, style="bold cyan"), align="left")
    return Text(node.text, style="bold underline")


def _item_list(node: ItemList) -> RenderableType:
    if not node.items:
        return Text("  --", style="dim")
    lines = []
    for index, item in enumerate(node.items, 1):
        prefix = f"  {index}. " if node.ordered else "  • "
        lines.append(_item_text(item, prefix))
    return Group(*lines)


def _table(node: Table) -> RenderableType:
    table = RichTable(show_edge=False, pad_edge=False, header_style="bold")
    for i, column in enumerate(node.columns):
        table.add_column(column, justify="left" if i == 0 else "right")
    for row in node.rows:
        table.add_row(*(Text(cell) for cell in row))
    return table


def _node(node: Node) -> RenderableType:
    if isinstance(node, Heading):
        return _heading(node)
    if isinstance(node, ItemList):
        return _item_list(node)
    if isinstance(node, Table):
        return _table(node)
    if isinstance(node, Paragraph):
        return Text(node.text, style="dim italic")
    raise TypeError(f"unknown render node {type(node).__name__}")


def to_renderable(document: Document | None) -> RenderableType:
    """Build the terminal display; an absent document renders as nothing."""
    if document is None:
        return Text("")
    return Group(*(_node(n) for n in document.children))
