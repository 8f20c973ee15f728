import struct

import numpy as np
import pytest

from pcbench.kmeans_io import KMeansData, log_to_file, read_data, write_data


def _dataset():
    rng = np.random.default_rng(5)
    return KMeansData(
        rng.random((6, 3)),
        rng.random((2, 3)),
        np.array([0, 1, 0, 1, 1, 0]),
        0.1,
    )


def test_round_trip(tmp_path):
    path = tmp_path / "data.dat"
    original = _dataset()
    write_data(path, original)
    loaded = read_data(path)
    assert np.array_equal(loaded.data, original.data)
    assert np.array_equal(loaded.centroids, original.centroids)
    assert np.array_equal(loaded.assignments, original.assignments)
    assert loaded.epsilon == original.epsilon
    assert (loaded.m, loaded.n, loaded.k) == (6, 3, 2)


def test_binary_layout(tmp_path):
    path = tmp_path / "data.dat"
    dataset = _dataset()
    write_data(path, dataset)
    raw = path.read_bytes()
    assert struct.unpack_from("<iiid", raw) == (6, 3, 2, 0.1)
    assert len(raw) == 12 + 8 + 8 * 6 * 3 + 8 * 2 * 3 + 4 * 6


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_data(tmp_path / "absent.dat")


def test_truncated_file(tmp_path):
    path = tmp_path / "data.dat"
    write_data(path, _dataset())
    path.write_bytes(path.read_bytes()[:-4])
    with pytest.raises(ValueError):
        read_data(path)


def test_dataset_shape_checks():
    with pytest.raises(ValueError):
        KMeansData(np.zeros((3, 2)), np.zeros((2, 3)), [0, 0, 0], 0.1)
    with pytest.raises(ValueError):
        KMeansData(np.zeros((3, 2)), np.zeros((2, 2)), [0, 0], 0.1)


def test_log_with_no_samples_lists_centroids(tmp_path):
    path = tmp_path / "start.log"
    log_to_file(path, 0.0, np.zeros((4, 2)), [0, 0, 1, 1],
                np.array([[1.5, 2.0], [0.25, -3.0]]), np.random.default_rng(1))
    lines = path.read_text().splitlines()
    assert lines == ["4,2,2", "Centroid 0: 1.5 2 ", "Centroid 1: 0.25 -3 "]


def test_log_with_full_sampling_lists_every_point(tmp_path):
    path = tmp_path / "end.log"
    data = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
    log_to_file(path, 1.0, data, [1, 0, 1], np.zeros((2, 2)),
                np.random.default_rng(1))
    lines = path.read_text().splitlines()
    assert lines[0] == "3,2,2"
    assert lines[1:4] == [
        "Example 0, cluster 1: 1 2 ",
        "Example 1, cluster 0: 3 4 ",
        "Example 2, cluster 1: 5 6 ",
    ]
    assert len(lines) == 6