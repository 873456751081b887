"""Overlap graph and two-color alternation.

Labels whose collision rectangles intersect form an undirected graph.
Inside each connected component, labels ordered left to right alternate
between the base color and a lightened variant, so neighbouring labels
in a cluster never share a color with their immediate x-order neighbour.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

from jianpu_transpose.layout.colors import lighten_color
from jianpu_transpose.layout.models import Rect


def build_overlap_graph(rects: Sequence[Rect]) -> list[list[int]]:
    """Build adjacency lists for intersecting rectangles.

    Examples
    --------
    >>> build_overlap_graph([Rect(0, 0, 10, 10), Rect(5, 0, 10, 10), Rect(50, 0, 10, 10)])
    [[1], [0], []]
    """
    adjacency: list[list[int]] = [[] for _ in rects]
    for i in range(len(rects)):
        for j in range(i + 1, len(rects)):
            if rects[i].overlaps(rects[j]):
                adjacency[i].append(j)
                adjacency[j].append(i)
    return adjacency


def connected_components(adjacency: Sequence[Sequence[int]]) -> list[list[int]]:
    """Split a graph into connected components by breadth-first search.

    Components are returned in order of their lowest node index.

    Examples
    --------
    >>> connected_components([[1], [0, 2], [1], []])
    [[0, 1, 2], [3]]
    """
    seen: set[int] = set()
    components: list[list[int]] = []

    for start in range(len(adjacency)):
        if start in seen:
            continue
        seen.add(start)
        component = []
        queue = deque([start])
        while queue:
            node = queue.popleft()
            component.append(node)
            for neighbour in adjacency[node]:
                if neighbour not in seen:
                    seen.add(neighbour)
                    queue.append(neighbour)
        components.append(sorted(component))

    return components


def alternate_colors(
    rects: Sequence[Rect],
    centers_x: Sequence[float],
    base_color: str,
    lighten_factor: float = 0.4,
) -> list[str]:
    """Assign base/lightened colors so overlapping labels stay distinct.

    Parameters
    ----------
    rects : Sequence[Rect]
        Collision rectangles, one per label.
    centers_x : Sequence[float]
        Label center x, used to order each component left to right.
    base_color : str
        Hex color for even positions and isolated labels.
    lighten_factor : float
        Blend toward white for odd positions.

    Returns
    -------
    list[str]
        One color per label, in input order.
    """
    colors = [base_color] * len(rects)
    light = lighten_color(base_color, lighten_factor)

    for component in connected_components(build_overlap_graph(rects)):
        if len(component) < 2:
            continue
        ordered = sorted(component, key=lambda i: (centers_x[i], i))
        for position, index in enumerate(ordered):
            if position % 2 == 1:
                colors[index] = light

    return colors
