[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcbench"
version = "0.1.0"
description = "Small compute benchmarks: Mandelbrot, a simulated vector unit, square root, SAXPY and k-means"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "benchmark",
    "mandelbrot",
    "simd",
    "vector",
    "saxpy",
    "kmeans",
    "parallel",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pcbench-vecintrin = "pcbench.vector_programs:main"
pcbench-sqrt = "pcbench.sqrt:main"
pcbench-saxpy = "pcbench.saxpy:main"
pcbench-kmeans = "pcbench.kmeans_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pcbench"]

[tool.hatch.build.targets.sdist]
include = [
    "pcbench",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
