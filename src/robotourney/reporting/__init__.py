"""Presenters for the results view.

Usage:
    from robotourney.reporting import to_renderable, write_html

    document = view.render()
    console.print(to_renderable(document))
    write_html(document, "output/results.html")
"""

from .tree import Document, Heading, Item, ItemList, Paragraph, Span, Table
from .console import to_renderable
from .html import render_html, write_html

__all__ = [
    "Document",
    "Heading",
    "Item",
    "ItemList",
    "Paragraph",
    "Span",
    "Table",
    "to_renderable",
    "render_html",
    "write_html",
]
