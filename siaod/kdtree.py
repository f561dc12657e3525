"""A k-d tree for nearest-neighbour queries over points of equal dimension."""

from __future__ import annotations

import csv
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from operator import itemgetter
from pathlib import Path

Point = tuple[float, ...]


@dataclass
class KDNode:
    """A tree node holding one point and the axis it splits on."""

    point: Point
    axis: int
    left: KDNode | None = None
    right: KDNode | None = None


def euclidean_distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Return the Euclidean distance between two points of equal dimension."""
    return math.dist(p1, p2)


def _as_point(values: Iterable[float]) -> Point:
    return tuple(float(value) for value in values)


def _build(points: list[Point], axis: int, dims: int) -> KDNode | None:
    if not points:
        return None
    points = sorted(points, key=itemgetter(axis))
    median = len(points) // 2
    next_axis = (axis + 1) % dims
    return KDNode(
        point=points[median],
        axis=axis,
        left=_build(points[:median], next_axis, dims),
        right=_build(points[median + 1 :], next_axis, dims),
    )


def _sides(node: KDNode, target: Point) -> tuple[KDNode | None, KDNode | None]:
    if target[node.axis] < node.point[node.axis]:
        return node.left, node.right
    return node.right, node.left


class KDTree:
    """A k-d tree built by splitting on the median of each axis in turn."""

    def __init__(self, points: Iterable[Sequence[float]], axis: int = 0) -> None:
        prepared = [_as_point(point) for point in points]
        self.root: KDNode | None = None
        if not prepared:
            return
        dims = len(prepared[0])
        if dims == 0:
            raise ValueError("points must have at least one coordinate")
        if any(len(point) != dims for point in prepared):
            raise ValueError("all points must have the same dimension")
        if not 0 <= axis < dims:
            raise ValueError(f"axis must be between 0 and {dims - 1}")
        self.root = _build(prepared, axis, dims)

    def nearest_neighbor(self, target: Sequence[float]) -> tuple[Point | None, float]:
        """Return the point closest to ``target`` and its distance.

        An empty tree gives ``(None, inf)``.
        """
        if self.root is None:
            return None, math.inf
        goal = _as_point(target)
        best_point: Point = self.root.point
        best_dist = math.inf

        def visit(node: KDNode | None) -> None:
            nonlocal best_point, best_dist
            if node is None:
                return
            dist = euclidean_distance(goal, node.point)
            if dist < best_dist:
                best_point, best_dist = node.point, dist
            near, far = _sides(node, goal)
            visit(near)
            if abs(goal[node.axis] - node.point[node.axis]) < best_dist:
                visit(far)

        visit(self.root)
        return best_point, best_dist

    def nearest_n_neighbors(
        self, target: Sequence[float], n: int
    ) -> tuple[list[Point], list[float]]:
        """Return up to ``n`` closest points and their distances, nearest first."""
        if self.root is None:
            return [], []
        if n <= 0:
            raise ValueError("n must be positive")
        goal = _as_point(target)
        found: list[tuple[float, Point]] = []

        def visit(node: KDNode | None) -> None:
            if node is None:
                return
            dist = euclidean_distance(goal, node.point)
            if len(found) < n or dist < found[-1][0]:
                found.append((dist, node.point))
                found.sort(key=itemgetter(0))
                del found[n:]
            near, far = _sides(node, goal)
            visit(near)
            if len(found) < n or abs(goal[node.axis] - node.point[node.axis]) < found[-1][0]:
                visit(far)

        visit(self.root)
        return [point for _, point in found], [dist for dist, _ in found]


def nearest_n_neighbors_linear(
    points: Iterable[Sequence[float]], target: Sequence[float], n: int
) -> tuple[list[Point], list[float]]:
    """Return up to ``n`` closest points by checking every point, nearest first."""
    prepared = [_as_point(point) for point in points]
    if not prepared or n <= 0:
        return [], []
    goal = _as_point(target)
    ranked = sorted(
        ((euclidean_distance(goal, point), point) for point in prepared),
        key=itemgetter(0),
    )[:n]
    return [point for _, point in ranked], [dist for dist, _ in ranked]


def load_csv(filename: str | Path) -> list[Point]:
    """Read points from a CSV file, skipping its header row.

    Every field must be a number and every row as long as the header.
    """
    with open(filename, newline="", encoding="utf-8") as handle:
        rows = [row for row in csv.reader(handle) if row]
    if not rows:
        raise ValueError(f"{filename}: no header row")
    width = len(rows[0])
    points: list[Point] = []
    for number, row in enumerate(rows[1:], start=2):
        if len(row) != width:
            raise ValueError(f"record {number}: wrong number of fields")
        try:
            points.append(tuple(float(value) for value in row))
        except ValueError as error:
            raise ValueError(f"record {number}: {error}") from error
    return points