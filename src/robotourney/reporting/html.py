"""Static HTML presenter for the results view.

Produces one self-contained page; the competition server (or any static
file host) can serve it as-is.
"""

from __future__ import annotations

import html
from pathlib import Path

from robotourney.reporting.tree import Document, Heading, Item, ItemList, Node, Paragraph, Table


def _item(item: Item) -> str:
    parts = []
    for span in item.spans:
        text = html.escape(span.text)
        parts.append(f"<b>{text}</b>" if span.strong else text)
    return f"<li>{''.join(parts)}</li>"


def _node(node: Node) -> str:
    if isinstance(node, Heading):
        level = min(max(node.level, 1), 6)
        return f"<h{level}>{html.escape(node.text)}</h{level}>"
    if isinstance(node, Paragraph):
        return f"<div>{html.escape(node.text)}</div>"
    if isinstance(node, ItemList):
        tag = "ol" if node.ordered else "ul"
        return f"<{tag}>{''.join(_item(i) for i in node.items)}</{tag}>"
    if isinstance(node, Table):
        head = "".join(f"<th>{html.escape(c)}</th>" for c in node.columns)
        body = "".join(
            "<tr>" + "".join(f"<td>{html.escape(cell)}</td>" for cell in row) + "</tr>"
            for row in node.rows
        )
        return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"
    raise TypeError(f"unknown render node {type(node).__name__}")


def render_html(document: Document | None) -> str:
    """Render a full page. An absent document gives an empty body."""
    if document is None:
        title = ""
        body = ""
    else:
        title = html.escape(document.title)
        body = "\n".join(_node(n) for n in document.children)
    page = _TEMPLATE.replace("<!--TITLE-->", title)
    return page.replace("<!--BODY-->", body)


def write_html(document: Document | None, output_path: str | Path) -> Path:
    """Write the page and return its path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html(document))
    return output_path


_TEMPLATE = r"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title><!--TITLE--></title>
<style>
body { font-family: sans-serif; max-width: 960px; margin: 0 auto; padding: 24px; }
h1 { border-bottom: 3px solid #ff6b35; padding-bottom: 8px; }
table { border-collapse: collapse; }
th, td { padding: 4px 12px; text-align: right; }
th:first-child, td:first-child { text-align: left; }
tbody tr:nth-child(odd) { background: #f4f4f8; }
</style>
</head>
<body>
<!--BODY-->
</body>
</html>
"""
