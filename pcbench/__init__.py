"""Compute benchmark kernels: Mandelbrot, a simulated vector unit, square root, SAXPY and k-means."""

__version__ = "0.1.0"