"""Plain 2D geometry used to place and hit-test on-screen elements."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A touch or screen point; ``z`` carries touch pressure."""

    x: int
    y: int
    z: int = 0


@dataclass(frozen=True)
class Translation:
    """An offset between two reference frames."""

    x: int
    y: int


@dataclass(frozen=True)
class Box:
    """An axis-aligned rectangle with its origin at the top left."""

    x: int
    y: int
    w: int
    h: int


def translate(p: Point, t: Translation) -> Point:
    """Move ``p`` by ``t``, keeping its pressure."""
    return Point(p.x + t.x, p.y + t.y, p.z)


def inverse_translate(p: Point, t: Translation) -> Point:
    """Move ``p`` back by ``t``, keeping its pressure."""
    return Point(p.x - t.x, p.y - t.y, p.z)


def box_intersect(p: Point, box: Box) -> bool:
    """Return whether ``p`` lies in ``box``; the right and bottom edges are excluded."""
    x_in_range = box.x <= p.x < box.x + box.w
    y_in_range = box.y <= p.y < box.y + box.h
    return x_in_range and y_in_range