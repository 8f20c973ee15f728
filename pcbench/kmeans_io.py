"""Reading and writing K-means data sets and logging clustering state."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass

import numpy as np

_HEADER = struct.Struct("<iiid")
_FLOAT = np.dtype("<f8")
_INT = np.dtype("<i4")


@dataclass
class KMeansData:
    """Points, centroids, assignments and convergence threshold of a run."""

    data: np.ndarray
    centroids: np.ndarray
    assignments: np.ndarray
    epsilon: float

    def __post_init__(self) -> None:
        self.data = np.asarray(self.data, dtype=np.float64)
        self.centroids = np.asarray(self.centroids, dtype=np.float64)
        self.assignments = np.asarray(self.assignments, dtype=np.int32).ravel()
        self.epsilon = float(self.epsilon)
        if self.data.ndim != 2 or self.centroids.ndim != 2:
            raise ValueError("data and centroids must be two-dimensional")
        if self.data.shape[1] != self.centroids.shape[1]:
            raise ValueError("data points and centroids differ in dimension")
        if self.assignments.size != self.data.shape[0]:
            raise ValueError("there must be one assignment per data point")

    @property
    def m(self) -> int:
        """Number of data points."""
        return self.data.shape[0]

    @property
    def n(self) -> int:
        """Dimension of each point."""
        return self.data.shape[1]

    @property
    def k(self) -> int:
        """Number of clusters."""
        return self.centroids.shape[0]


def read_data(path) -> KMeansData:
    """Load a data set written by :func:`write_data`.

    Raises FileNotFoundError when the file is missing and ValueError when
    it is too short or its header is invalid.
    """
    print(f"Reading {os.path.basename(os.fspath(path))}...")
    with open(path, "rb") as fp:
        raw = fp.read()
    if len(raw) < _HEADER.size:
        raise ValueError("data file is too short for its header")
    m, n, k, epsilon = _HEADER.unpack_from(raw)
    if m < 0 or n < 0 or k < 0:
        raise ValueError("data file has negative sizes")
    needed = (_HEADER.size + _FLOAT.itemsize * (m * n + k * n)
              + _INT.itemsize * m)
    if len(raw) < needed:
        raise ValueError(f"data file holds {len(raw)} bytes, needs {needed}")
    offset = _HEADER.size
    data = np.frombuffer(raw, dtype=_FLOAT, count=m * n, offset=offset)
    offset += data.nbytes
    centroids = np.frombuffer(raw, dtype=_FLOAT, count=k * n, offset=offset)
    offset += centroids.nbytes
    assignments = np.frombuffer(raw, dtype=_INT, count=m, offset=offset)
    return KMeansData(
        data.reshape(m, n).astype(np.float64),
        centroids.reshape(k, n).astype(np.float64),
        assignments.astype(np.int32),
        epsilon,
    )


def write_data(path, dataset: KMeansData) -> None:
    """Write a data set in the binary layout :func:`read_data` reads."""
    with open(path, "wb") as fp:
        fp.write(_HEADER.pack(dataset.m, dataset.n, dataset.k, dataset.epsilon))
        fp.write(dataset.data.astype(_FLOAT).tobytes())
        fp.write(dataset.centroids.astype(_FLOAT).tobytes())
        fp.write(dataset.assignments.astype(_INT).tobytes())


def log_to_file(path, sample_rate: float, data, assignments, centroids,
                rng: np.random.Generator | None = None) -> None:
    """Write a text snapshot: a sample of the points, then every centroid."""
    points = np.asarray(data, dtype=np.float64)
    centers = np.asarray(centroids, dtype=np.float64)
    labels = np.asarray(assignments).ravel()
    generator = rng if rng is not None else np.random.default_rng()
    m, n = points.shape
    k = centers.shape[0]
    draws = generator.random(m)
    with open(path, "w", encoding="ascii") as fp:
        fp.write(f"{m},{n},{k}\n")
        for index in np.flatnonzero(draws < sample_rate):
            values = "".join(f"{v:g} " for v in points[index])
            fp.write(f"Example {index}, cluster {int(labels[index])}: {values}\n")
        for index, center in enumerate(centers):
            values = "".join(f"{v:g} " for v in center)
            fp.write(f"Centroid {index}: {values}\n")