"""Render tree — presentation-neutral description of the results view.

The view builds these nodes from derived data only; presenters
(console, html) turn them into something a person can look at.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Span:
    text: str
    strong: bool = False


@dataclass(frozen=True)
class Item:
    spans: tuple[Span, ...]

    @classmethod
    def of(cls, text: str) -> Item:
        return cls(spans=(Span(text),))

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.spans)


@dataclass(frozen=True)
class Heading:
    text: str
    level: int = 1


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class ItemList:
    items: tuple[Item, ...] = ()
    ordered: bool = False


@dataclass(frozen=True)
class Table:
    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()


Node = Heading | Paragraph | ItemList | Table


@dataclass(frozen=True)
class Document:
    title: str
    children: tuple[Node, ...] = field(default_factory=tuple)

    def headings(self, level: int | None = None) -> list[str]:
        return [
            n.text for n in self.children
            if isinstance(n, Heading) and (level is None or n.level == level)
        ]
