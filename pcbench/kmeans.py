"""K-means clustering over dense point matrices."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

INITIAL_MIN_DIST = 1e30
INITIAL_PREV_COST = 1e30


@dataclass
class KMeansResult:
    """Final state of a K-means run."""

    centroids: np.ndarray
    assignments: np.ndarray
    cost: np.ndarray
    iterations: int


def _as_matrix(values, name: str) -> np.ndarray:
    matrix = np.asarray(values, dtype=np.float64)
    if matrix.ndim != 2:
        raise ValueError(f"{name} must be a two-dimensional array")
    return matrix


def _as_assignments(assignments, m: int, k: int) -> np.ndarray:
    labels = np.asarray(assignments, dtype=np.int64).ravel()
    if labels.size != m:
        raise ValueError(f"expected {m} assignments, got {labels.size}")
    if labels.size and (labels.min() < 0 or labels.max() >= k):
        raise ValueError(f"assignments must lie in [0, {k})")
    return labels


def _check_dims(data: np.ndarray, centroids: np.ndarray) -> None:
    if data.shape[1] != centroids.shape[1]:
        raise ValueError("data points and centroids differ in dimension")


def dist(x, y) -> float:
    """Return the Euclidean distance between two points."""
    a = np.asarray(x, dtype=np.float64)
    b = np.asarray(y, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError("points differ in dimension")
    return float(np.sqrt(np.sum((a - b) ** 2)))


def stopping_condition_met(prev_cost, curr_cost, epsilon: float) -> bool:
    """Return True when no cluster cost moved by more than ``epsilon``."""
    prev = np.asarray(prev_cost, dtype=np.float64)
    curr = np.asarray(curr_cost, dtype=np.float64)
    if prev.shape != curr.shape:
        raise ValueError("cost arrays differ in length")
    return not bool(np.any(np.abs(prev - curr) > epsilon))


def compute_assignments(data, centroids, start: int, end: int) -> np.ndarray:
    """Assign each point to the closest of centroids ``start`` to ``end - 1``.

    Ties go to the lower centroid index; a point farther than 1e30 from
    every candidate keeps the label -1.
    """
    points = _as_matrix(data, "data")
    centers = _as_matrix(centroids, "centroids")
    _check_dims(points, centers)
    if not 0 <= start <= end <= centers.shape[0]:
        raise ValueError("centroid range is out of bounds")
    m = points.shape[0]
    min_dist = np.full(m, INITIAL_MIN_DIST)
    assignments = np.full(m, -1, dtype=np.int32)
    for k in range(start, end):
        d = np.sqrt(((points - centers[k]) ** 2).sum(axis=1))
        closer = d < min_dist
        min_dist[closer] = d[closer]
        assignments[closer] = k
    return assignments


def compute_centroids(data, assignments, k: int) -> np.ndarray:
    """Return the mean of the points in each of ``k`` clusters.

    A cluster with no points gets the origin.
    """
    points = _as_matrix(data, "data")
    labels = _as_assignments(assignments, points.shape[0], k)
    sums = np.zeros((k, points.shape[1]))
    np.add.at(sums, labels, points)
    counts = np.maximum(np.bincount(labels, minlength=k), 1)
    return sums / counts[:, None]


def compute_cost(data, centroids, assignments) -> np.ndarray:
    """Return, per cluster, the summed distance of its points to its centroid."""
    points = _as_matrix(data, "data")
    centers = _as_matrix(centroids, "centroids")
    _check_dims(points, centers)
    k = centers.shape[0]
    labels = _as_assignments(assignments, points.shape[0], k)
    d = np.sqrt(((points - centers[labels]) ** 2).sum(axis=1))
    return np.bincount(labels, weights=d, minlength=k).astype(np.float64)


def k_means(data, centroids, assignments, epsilon: float) -> KMeansResult:
    """Run K-means until no cluster cost changes by more than ``epsilon``."""
    points = _as_matrix(data, "data")
    centers = _as_matrix(centroids, "centroids").copy()
    _check_dims(points, centers)
    labels = np.asarray(assignments, dtype=np.int32).copy()
    k = centers.shape[0]

    prev_cost = np.full(k, INITIAL_PREV_COST)
    curr_cost = np.zeros(k)
    iterations = 0
    while not stopping_condition_met(prev_cost, curr_cost, epsilon):
        prev_cost = curr_cost
        labels = compute_assignments(points, centers, 0, k)
        centers = compute_centroids(points, labels, k)
        curr_cost = compute_cost(points, centers, labels)
        iterations += 1
    return KMeansResult(centers, labels, curr_cost, iterations)