"""Radix-2 fast Fourier transform."""
from __future__ import annotations

import numpy as np

from tonelab.dsp.generator import is_power_of_two
from tonelab.errors import InvalidArgument


def _bit_reverse_indices(n: int) -> np.ndarray:
    levels = n.bit_length() - 1
    idx = np.arange(n, dtype=np.int64)
    rev = np.zeros(n, dtype=np.int64)
    for b in range(levels):
        rev |= ((idx >> b) & 1) << (levels - 1 - b)
    return rev


def fft_radix2(x: np.ndarray, *, normalize: bool = False) -> np.ndarray:
    """
    Iterative decimation-in-time Cooley-Tukey FFT.

    Each stage runs its butterflies for all blocks at once on a
    (blocks, size) view, so the cost is O(N log N) numpy operations.

    Args:
        x: 1D real or complex input, length a power of two
        normalize: Divide the output by N

    Returns:
        Complex spectrum of length N
    """
    a = np.asarray(x, dtype=np.complex128)
    if a.ndim != 1:
        raise InvalidArgument("fft_radix2 expects a 1D signal.")
    n = a.size
    if not is_power_of_two(n):
        raise InvalidArgument(f"FFT length must be a power of two, got {n}.")

    a = a[_bit_reverse_indices(n)]
    size = 2
    while size <= n:
        half = size // 2
        twiddle = np.exp(-2j * np.pi * np.arange(half) / size)
        blocks = a.reshape(-1, size)
        even = blocks[:, :half]
        odd = blocks[:, half:] * twiddle
        a = np.concatenate((even + odd, even - odd), axis=1).ravel()
        size *= 2

    if normalize:
        a = a / n
    return a
