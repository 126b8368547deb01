"""Escape-time evaluation of the quadratic recurrence ``z -> z*z + c``.

The recurrence starts from ``z = c`` rather than from zero, so the first bound
check tests ``|c|`` itself before any squaring step.

``|z| > bound`` is evaluated as ``(re/bound)**2 + (im/bound)**2 > 1``, which stays
inside the float64 range for any finite positive bound. A magnitude that is not
provably within the bound (including NaN from overflowing components) counts as
escaped.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import tensorflow as tf


def escape_iterations(c: complex, bound: float, max_iterations: int) -> int:
    """Return the step at which ``|z|`` first exceeds ``bound``, or ``max_iterations``."""

    z = c
    for i in range(max_iterations):
        ur = z.real / bound
        ui = z.imag / bound
        if not ur * ur + ui * ui <= 1.0:
            return i
        z = z * z + c
    return max_iterations


def _within_bound(zr: tf.Tensor, zi: tf.Tensor, bound: tf.Tensor) -> tf.Tensor:
    ur = zr / bound
    ui = zi / bound
    return ur * ur + ui * ui <= tf.constant(1.0, dtype=ur.dtype)


@tf.function
def _escape_step(
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    ns: tf.Tensor,
    active: tf.Tensor,
    bound: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every point that has not escaped by a single recurrence step."""

    # Same operation order as Python's complex multiply followed by the add.
    zr_new = zr * zr - zi * zi + cr
    zi_new = zr * zi + zi * zr + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    ns = ns + tf.cast(active, tf.int32)
    new_active = tf.logical_and(active, _within_bound(zr, zi, bound))
    return zr, zi, ns, new_active


@tf.function
def _escape_run(cr: tf.Tensor, ci: tf.Tensor, bound: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Iterate the recurrence with a TensorFlow while loop and return the escape counts."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(cr, tf.int32)
    active = _within_bound(cr, ci, bound)

    def cond(i, zr, zi, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, zr, zi, ns, active):
        zr, zi, ns, active = _escape_step(zr, zi, cr, ci, ns, active, bound)
        return i + 1, zr, zi, ns, active

    _, _, _, ns, _ = tf.while_loop(cond, body, (i, tf.identity(cr), tf.identity(ci), ns, active))
    return ns


def escape_grid(points: np.ndarray, bound: float, max_iterations: int, *, device: Optional[str] = None) -> np.ndarray:
    """Evaluate :func:`escape_iterations` for every element of ``points`` at once."""

    points = np.asarray(points, dtype=np.complex128)
    if points.size == 0:
        return np.zeros(points.shape, dtype=np.int32)

    with tf.device(device if device is not None else "/CPU:0"):
        cr = tf.convert_to_tensor(np.ascontiguousarray(points.real), dtype=tf.float64)
        ci = tf.convert_to_tensor(np.ascontiguousarray(points.imag), dtype=tf.float64)
        ns = _escape_run(
            cr,
            ci,
            tf.constant(bound, dtype=tf.float64),
            tf.constant(max_iterations, dtype=tf.int32),
        )
    return ns.numpy()
