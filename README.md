# pcbench

Small compute benchmarks. Each one has a plain serial kernel, a way to time it
and a way to check its result:

- **Mandelbrot** (`pcbench.mandelbrot`): escape-count images of the Mandelbrot
  set. You can compute them serially or split the rows between worker threads.
  `pcbench.ppm` writes the results as grey-scale PPM images.
- **Vector unit** (`pcbench.vecintrin`): a simulated fixed-width SIMD unit with
  masked lanes. It logs every instruction and the lanes it used.
  `pcbench.vector_programs` has kernels written against it: absolute value,
  clamped exponent and array sum.
- **Square root** (`pcbench.sqrt`): square roots by Newton iteration on the
  inverse square root.
- **SAXPY** (`pcbench.saxpy`): `scale * X + Y`, reported as time, bandwidth and
  GFLOPS.
- **k-means** (`pcbench.kmeans`, `pcbench.kmeans_io`): clustering of a data set
  stored in a binary file, with text logs of the state before and after.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Commands

### pcbench-vecintrin

```
pcbench-vecintrin [-s N | --size N] [-l | --log]
```

Draws `N` random values (default 16) and runs the clamped-exponent kernel on
them with the simulated vector unit. It checks the result against the serial
version and prints vector-unit statistics. `--log` also prints the lane
occupancy of each instruction. When `N` is a multiple of the vector width (4),
it also checks the vector array sum against the serial sum. A size of zero or
less is an error.

### pcbench-sqrt

```
pcbench-sqrt [-n N | --size N]
```

Computes square roots of `N` random values in `[0.001, 2.999]` (default
20,000,000). It reports the best time of three runs and prints any element that
differs from the exact square root by more than 1e-4.

### pcbench-saxpy

```
pcbench-saxpy [-n N | --size N]
```

Runs SAXPY on vectors of `N` elements (default 20,000,000). It reports the best
time of three runs, the bandwidth in GB/s and the GFLOPS.

### pcbench-kmeans

```
pcbench-kmeans [--data PATH] [--start-log PATH] [--end-log PATH] [--seed INT]
```

Reads a data set (default `./data.dat`), runs k-means until it converges and
reports the time taken. It writes a start log and an end log (default
`./start.log` and `./end.log`). Each log holds a random sample of about 1% of
the points, with their clusters, followed by every centroid. If the data file
is missing or malformed, the command exits with status 1.

## Using the library

```python
from pcbench.mandelbrot import mandelbrot_serial, mandelbrot_thread
from pcbench.ppm import write_ppm_image

serial = mandelbrot_serial(-2.0, -1.0, 1.0, 1.0, 320, 240, 0, 240, 256)
threaded = mandelbrot_thread(4, -2.0, -1.0, 1.0, 1.0, 320, 240, 256)
assert (serial == threaded).all()
write_ppm_image(serial, 320, 240, "out.ppm", 256)
```

`mandelbrot_thread` allows at most 32 threads.

```python
from pcbench.vecintrin import VectorUnit

unit = VectorUnit()
ones = unit.init_ones()
a = unit.broadcast(2.0)
b = unit.broadcast(3.0)
result = unit.broadcast(0.0)
unit.vmult(result, a, b, ones)
print(unit.logger.format_stats())
```

```python
from pcbench.kmeans_io import read_data
from pcbench.kmeans import k_means

dataset = read_data("data.dat")
result = k_means(dataset.data, dataset.centroids, dataset.assignments, dataset.epsilon)
print(result.iterations, result.cost)
```

`pcbench.kmeans_io.write_data` writes a `KMeansData` in the same binary layout
that `read_data` reads. `pcbench.kmeans_cli` provides `init_data`,
`init_centroids` and `initial_assignments` for generating a synthetic data set.

Timing uses the helpers in `pcbench.cycletimer`: `current_seconds`,
`current_ticks`, `seconds_per_tick`, `ticks_per_second`, `ms_per_tick` and
`tick_units`. `parse_cpuinfo` reads a nominal cycle time from `/proc/cpuinfo`
text.

## What is not included

- There is no command for the Mandelbrot benchmark. To time the serial and
  threaded versions, write the images and compare them, call
  `pcbench.mandelbrot` and `pcbench.ppm` from your own code.
- The `pcbench-sqrt` and `pcbench-saxpy` commands time only the serial kernel.
  They have no parallel variant to report a speedup against.