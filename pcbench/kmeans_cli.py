"""Command that runs K-means on a stored data set and logs the result."""

from __future__ import annotations

import argparse
import sys

import numpy as np

from pcbench.cycletimer import current_seconds
from pcbench.kmeans import compute_assignments, k_means
from pcbench.kmeans_io import log_to_file, read_data

SEED = 7
SAMPLE_RATE = 1e-2
NUM_CENTERS = 10
NOISE_STDDEV = 0.5
CENTROID_SPREAD = 0.1


def init_data(m: int, n: int, rng: np.random.Generator) -> np.ndarray:
    """Return ``m`` points of dimension ``n`` scattered around random centers."""
    centers = rng.random((NUM_CENTERS, n))
    choice = rng.integers(0, NUM_CENTERS, size=m)
    noise = rng.normal(0.0, NOISE_STDDEV, size=(m, n))
    return centers[choice] + noise


def init_centroids(k: int, n: int, rng: np.random.Generator) -> np.ndarray:
    """Return ``k`` starting centroids placed close to one random point."""
    centroids = np.empty((k, n))
    if k == 0:
        return centroids
    centroids[0] = rng.random(n)
    for row in range(1, k):
        centroids[row] = centroids[0] + (rng.random(n) - 0.5) * CENTROID_SPREAD
    return centroids


def initial_assignments(data, centroids) -> np.ndarray:
    """Assign each point to its closest starting centroid."""
    centers = np.asarray(centroids, dtype=np.float64)
    return compute_assignments(data, centers, 0, centers.shape[0])


def main(argv=None) -> int:
    """Cluster the stored data set, timing the run; returns the exit status."""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = argparse.ArgumentParser(description="Run K-means on a data file.")
    parser.add_argument("--data", default="./data.dat")
    parser.add_argument("--start-log", default="./start.log")
    parser.add_argument("--end-log", default="./end.log")
    parser.add_argument("--seed", type=int, default=SEED)
    args = parser.parse_args(argv)

    rng = np.random.default_rng(args.seed)
    try:
        dataset = read_data(args.data)
    except FileNotFoundError:
        print("Couldn't open the file! Please make sure data.dat exists... Exiting.")
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Running K-means with: M={dataset.m}, N={dataset.n}, "
          f"K={dataset.k}, epsilon={dataset.epsilon:f}")

    log_to_file(args.start_log, SAMPLE_RATE, dataset.data, dataset.assignments,
                dataset.centroids, rng)

    start = current_seconds()
    result = k_means(dataset.data, dataset.centroids, dataset.assignments,
                     dataset.epsilon)
    elapsed = current_seconds() - start
    print(f"[Total Time]: {elapsed * 1000:.3f} ms")

    log_to_file(args.end_log, SAMPLE_RATE, dataset.data, result.assignments,
                result.centroids, rng)
    return 0


if __name__ == "__main__":
    sys.exit(main())