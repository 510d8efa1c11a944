"""Minimal SVG element builder.

Shapes are plain frozen records collected into an SvgDocument and turned
into markup once, at the end. Attribute values and text go through
html.escape, and every number goes through fmt(), so no renderer ever
formats markup by hand.
"""

from __future__ import annotations

import html
import math
from dataclasses import dataclass, field, fields

_SVG_NS = "http://www.w3.org/2000/svg"


def fmt(value: float) -> str:
    """Compact number formatting: integers bare, others to 4 decimals."""
    if not math.isfinite(value):
        raise ValueError(f"non-finite coordinate in SVG output: {value!r}")
    if float(value).is_integer():
        return str(int(value))
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _attr_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return fmt(value)
    return html.escape(str(value), quote=True)


@dataclass(frozen=True)
class _Shape:
    """Base for shapes. Field names map to attributes, `_` → `-`."""

    tag = ""

    def attributes(self) -> list[tuple[str, object]]:
        return [
            (f.name.replace("_", "-"), getattr(self, f.name))
            for f in fields(self)
            if f.name != "text" and getattr(self, f.name) is not None
        ]

    def to_markup(self) -> str:
        attrs = " ".join(f'{k}="{_attr_value(v)}"' for k, v in self.attributes())
        return f"<{self.tag} {attrs}/>"


@dataclass(frozen=True)
class Rect(_Shape):
    tag = "rect"
    width: float
    height: float
    fill: str
    x: float | None = None
    y: float | None = None


@dataclass(frozen=True)
class Circle(_Shape):
    tag = "circle"
    cx: float
    cy: float
    r: float
    fill: str
    stroke: str | None = None
    stroke_width: float | None = None
    opacity: float | None = None


@dataclass(frozen=True)
class Line(_Shape):
    tag = "line"
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    opacity: float | None = None
    stroke_width: float | None = None


@dataclass(frozen=True)
class Path(_Shape):
    tag = "path"
    d: str
    fill: str


@dataclass(frozen=True)
class Text(_Shape):
    tag = "text"
    x: float
    y: float
    text: str
    fill: str
    opacity: float | None = None
    font_size: float | None = None

    def to_markup(self) -> str:
        attrs = " ".join(f'{k}="{_attr_value(v)}"' for k, v in self.attributes())
        return f"<{self.tag} {attrs}>{html.escape(self.text, quote=False)}</{self.tag}>"


class PathBuilder:
    """Accumulates SVG path commands with formatted numbers."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def move_to(self, x: float, y: float) -> PathBuilder:
        self._parts.append(f"M {fmt(x)} {fmt(y)}")
        return self

    def line_to(self, x: float, y: float) -> PathBuilder:
        self._parts.append(f"L {fmt(x)} {fmt(y)}")
        return self

    def arc_to(
        self,
        rx: float,
        ry: float,
        large_arc: int,
        sweep: int,
        x: float,
        y: float,
    ) -> PathBuilder:
        self._parts.append(
            f"A {fmt(rx)} {fmt(ry)} 0 {large_arc} {sweep} {fmt(x)} {fmt(y)}"
        )
        return self

    def close(self) -> PathBuilder:
        self._parts.append("Z")
        return self

    def build(self) -> str:
        return " ".join(self._parts)


@dataclass
class SvgDocument:
    """A fixed-size SVG canvas with a list of shapes drawn in order."""

    width: int
    height: int
    elements: list[_Shape] = field(default_factory=list)

    def add(self, *shapes: _Shape) -> SvgDocument:
        self.elements.extend(shapes)
        return self

    def render(self) -> str:
        body = "".join(el.to_markup() for el in self.elements)
        return (
            f'<svg width="{self.width}" height="{self.height}"'
            f' viewBox="0 0 {self.width} {self.height}" xmlns="{_SVG_NS}">'
            f"{body}</svg>"
        )
