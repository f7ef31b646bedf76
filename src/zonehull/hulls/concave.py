"""
Concave Hull Module (Edge Relaxation)

Refines a convex hull into a tighter, possibly non-convex boundary by
repeatedly pulling hull edges inward onto nearby interior points, in the
manner of the concaveman algorithm:

- Hull vertices form a circular doubly linked ring
- Each edge b-c picks its nearest interior point that is closer to b-c
  than to the neighbouring edges and whose two new edges cross nothing
- The edge's cost is min(|pb|², |pc|²) / |bc|²; the insertion is accepted
  while the cost is at most (concavity / CONCAVITY_SCALE)²
- The cheapest edge is always relaxed first; concavity only decides when
  to stop

Because the insertion order never depends on concavity, the boundary for
a larger concavity continues the boundary for a smaller one: it keeps all
of its vertices and may add more.

Every convex hull vertex survives, in its original cyclic order.
"""

import heapq
import itertools
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..config import DEFAULT_CONCAVITY, DEFAULT_MIN_EDGE_LENGTH, MIN_HULL_SAMPLES
from ..core.geometry import as_points, segments_intersect

logger = logging.getLogger(__name__)


# Maximum insertion distance is |edge| * concavity / CONCAVITY_SCALE, so the
# default concavity of 2 accepts points within half the edge length
CONCAVITY_SCALE = 4.0


def refine_concave_hull(
    points,
    hull_indices: Sequence[int],
    concavity: float = DEFAULT_CONCAVITY,
    min_edge_length: float = DEFAULT_MIN_EDGE_LENGTH
) -> np.ndarray:
    """
    Relax a convex hull inward toward interior points.

    Parameters
    ----------
    points : array-like
        Point cloud of shape (N, >=2). Only x and y are used.
    hull_indices : sequence of int
        Convex hull of ``points`` as a cyclic index sequence, e.g. the
        output of build_convex_hull().
    concavity : float
        How aggressively edges are pulled inward. 0 returns the convex
        hull unchanged; larger values accept candidates further from the
        edge endpoints and never drop a vertex a smaller value keeps.
        Default 2.0.
    min_edge_length : float
        Edges shorter than this are left alone. Default 0.

    Returns
    -------
    np.ndarray
        Refined boundary vertices of shape (M, 2), starting at the first
        hull vertex, closing edge implied.
    """
    if concavity < 0:
        raise ValueError(f"concavity must be >= 0, got {concavity}")
    if min_edge_length < 0:
        raise ValueError(f"min_edge_length must be >= 0, got {min_edge_length}")

    pts = as_points(points)[:, :2]
    hull = [int(i) for i in hull_indices]
    hull_points = pts[hull] if hull else np.zeros((0, 2))

    if len(pts) < MIN_HULL_SAMPLES or len(hull) < 3 or concavity == 0:
        return hull_points.copy()

    # Circular linked ring over node ids; node i < len(hull) is hull vertex i.
    # The edge starting at a node is b-c with b = node, c = nxt[node].
    coords: List[np.ndarray] = [p for p in hull_points]
    nxt = [(i + 1) % len(hull) for i in range(len(hull))]
    prv = [(i - 1) % len(hull) for i in range(len(hull))]

    in_hull = set(hull)
    candidate_idx = np.array([i for i in range(len(pts)) if i not in in_hull], dtype=int)
    available = np.ones(len(candidate_idx), dtype=bool)

    max_cost = (concavity / CONCAVITY_SCALE) ** 2
    sq_len_threshold = min_edge_length * min_edge_length

    def edge_cost(node: int) -> Tuple[float, Optional[int]]:
        return _edge_cost(
            pts, candidate_idx, available, coords, nxt, prv, node, sq_len_threshold
        )

    # Heap entries are (cost, tiebreak, node, version); an entry is dropped
    # once its node's edge or neighbouring edges have changed
    version = [0] * len(hull)
    order = itertools.count()
    heap = []
    for node in range(len(hull)):
        cost, _ = edge_cost(node)
        heap.append((cost, next(order), node, 0))
    heapq.heapify(heap)

    inserted = 0
    while heap:
        cost, _, node, ver = heapq.heappop(heap)
        if ver != version[node]:
            continue

        # Insertions elsewhere can block or free this edge's candidates
        current, k = edge_cost(node)
        if current != cost:
            heapq.heappush(heap, (current, next(order), node, ver))
            continue

        if k is None or cost > max_cost:
            break

        # Insert p between b and c
        new_node = len(coords)
        coords.append(pts[candidate_idx[k]])
        nxt.append(nxt[node])
        prv.append(node)
        prv[nxt[node]] = new_node
        nxt[node] = new_node
        version.append(0)

        available[k] = False
        inserted += 1

        for changed in dict.fromkeys([prv[node], node, new_node, nxt[new_node]]):
            version[changed] += 1
            changed_cost, _ = edge_cost(changed)
            heapq.heappush(heap, (changed_cost, next(order), changed, version[changed]))

    logger.debug(
        f"Concave refinement inserted {inserted} of {len(candidate_idx)} "
        f"interior points into a {len(hull)}-vertex hull"
    )

    return np.array([coords[node] for node in _ring_nodes(nxt)])


def _edge_cost(
    pts: np.ndarray,
    candidate_idx: np.ndarray,
    available: np.ndarray,
    coords: List[np.ndarray],
    nxt: List[int],
    prv: List[int],
    node: int,
    sq_len_threshold: float
) -> Tuple[float, Optional[int]]:
    """
    Cost of relaxing the edge starting at ``node``, with the chosen candidate.

    Returns (inf, None) when the edge is too short or has no acceptable
    candidate.
    """
    b = coords[node]
    c = coords[nxt[node]]

    sq_len = _sq_dist(b, c)
    if sq_len == 0 or sq_len < sq_len_threshold:
        return np.inf, None

    k = _find_candidate(
        pts, candidate_idx, available,
        coords[prv[node]], b, c, coords[nxt[nxt[node]]],
        coords, nxt
    )
    if k is None:
        return np.inf, None

    p = pts[candidate_idx[k]]
    return min(_sq_dist(p, b), _sq_dist(p, c)) / sq_len, k


def _find_candidate(
    pts: np.ndarray,
    candidate_idx: np.ndarray,
    available: np.ndarray,
    a: np.ndarray,
    b: np.ndarray,
    c: np.ndarray,
    d: np.ndarray,
    coords: List[np.ndarray],
    nxt: List[int]
) -> Optional[int]:
    """
    Find the nearest acceptable interior point for edge b-c.

    Returns the position in ``candidate_idx`` of the chosen point, or None.
    A candidate must be strictly closer to b-c than to the neighbouring
    edges a-b and c-d, and the new edges b-p and p-c must not cross the
    ring. Acceptable candidates are tried nearest-first.
    """
    positions = np.flatnonzero(available)
    if len(positions) == 0:
        return None

    cand = pts[candidate_idx[positions]]
    dist = _sq_seg_dist(cand, b, c)
    closer = np.flatnonzero(
        (dist < _sq_seg_dist(cand, a, b)) & (dist < _sq_seg_dist(cand, c, d))
    )
    if len(closer) == 0:
        return None

    nodes = _ring_nodes(nxt)
    starts = np.array([coords[i] for i in nodes])
    ends = np.roll(starts, -1, axis=0)

    for j in closer[np.argsort(dist[closer], kind="stable")]:
        p = cand[j]
        if not (
            np.any(segments_intersect(starts, ends, b, p))
            or np.any(segments_intersect(starts, ends, c, p))
        ):
            return int(positions[j])

    return None


def _ring_nodes(nxt: List[int]) -> List[int]:
    """Node ids in ring order, starting at node 0."""
    nodes = [0]
    node = nxt[0]
    while node != 0:
        nodes.append(node)
        node = nxt[node]
    return nodes


def _sq_dist(p: np.ndarray, q: np.ndarray) -> float:
    dx = p[0] - q[0]
    dy = p[1] - q[1]
    return float(dx * dx + dy * dy)


def _sq_seg_dist(points: np.ndarray, p1: np.ndarray, p2: np.ndarray) -> np.ndarray:
    """Squared distance from each point of shape (K, 2) to segment p1-p2."""
    seg = p2 - p1
    seg_sq = float(seg[0] * seg[0] + seg[1] * seg[1])

    if seg_sq > 0:
        t = ((points[:, 0] - p1[0]) * seg[0] + (points[:, 1] - p1[1]) * seg[1]) / seg_sq
        t = np.clip(t, 0.0, 1.0)
    else:
        t = np.zeros(len(points))

    closest_x = p1[0] + t * seg[0]
    closest_y = p1[1] + t * seg[1]
    return (points[:, 0] - closest_x) ** 2 + (points[:, 1] - closest_y) ** 2
