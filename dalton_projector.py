# -*- coding: utf-8 -*-
"""
Dalton: Simulating colour vision deficiency in the CIE chromaticity plane
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: dalton_projector.py — Brettel–Viénot–Mollon dichromat projection.

Geometry (CIE 1931 xy plane):
─────────────────────────────
  Confusion line through the source (x₀, y₀) and the confusion point (xc, yc):
        s = (y₀ − yc) / (x₀ − xc)
        b = y₀ − s·x₀

  Intersection with the colour axis y = m·x + yi:
        x₁ = (yi − b) / (s − m)
        y₁ = s·x₁ + b

  Reconstruction at constant luminance Y:
        X₁ = x₁·Y / y₁
        Z₁ = (1 − x₁ − y₁)·Y / y₁

Degenerate geometry is resolved explicitly:
  * Y = 0 (black) projects to black.
  * x₀ = xc gives a vertical confusion line; the intersection is x₁ = xc.
  * s = m gives parallel lines; the source is already on its own axis
    direction and is returned unchanged.
  * |y₁| < 1e-12 has no luminance-preserving reconstruction. A
    ``DegenerateProjectionWarning`` is issued and the source is returned.
    Within the sRGB gamut this is unreachable for the protan, deutan and
    tritan axes.
"""

import logging
import warnings
from typing import Final, Tuple

import numpy as np
from numba import njit

from dalton_colorengine import ArrayFloat, ColorSpaceEngine
from dalton_deficiency import ConfusionAxis

__all__ = [
    "DegenerateProjectionWarning",
    "DichromacyProjector",
    "Y_EPSILON",
]

log = logging.getLogger(__name__)

Y_EPSILON: Final[float] = 1e-12

_STATUS_OK: Final[int] = 0
_STATUS_PARALLEL: Final[int] = 1


class DegenerateProjectionWarning(RuntimeWarning):
    """The confusion-line intersection has no usable luminance direction."""


# fastmath stays off: the equality tests below rely on strict IEEE compares.
@njit(cache=True, fastmath=False)
def _confusion_intersection(x0: float, y0: float,
                            xc: float, yc: float,
                            m: float, yi: float) -> Tuple[float, float, int]:
    """
    Intersects the confusion line through (x0, y0) and (xc, yc) with the
    colour axis ``y = m·x + yi``.

    Returns:
        (x1, y1, status) where status is ``_STATUS_PARALLEL`` when the lines
        never meet; (x1, y1) is then the unchanged source.
    """
    dx = x0 - xc
    if dx == 0.0:
        return xc, m * xc + yi, _STATUS_OK

    s = (y0 - yc) / dx
    if s == m:
        return x0, y0, _STATUS_PARALLEL

    b = y0 - s * x0
    x1 = (yi - b) / (s - m)
    return x1, s * x1 + b, _STATUS_OK


class DichromacyProjector:
    """Projects colours onto the colour axis of a dichromat family."""

    @staticmethod
    def project_chromaticity(xyY: ArrayFloat, axis: ConfusionAxis) -> Tuple[float, float, bool]:
        """
        Simulated chromaticity of one source colour.

        Args:
            xyY: Source chromaticity and luminance, shape (3,).
            axis: Confusion geometry of the family.

        Returns:
            (x1, y1, moved). ``moved`` is False when the source lies on a line
            parallel to the colour axis and is kept as is.
        """
        x0, y0 = float(xyY[0]), float(xyY[1])
        x1, y1, status = _confusion_intersection(
            x0, y0, axis.x, axis.y, axis.m, axis.yi
        )
        if status == _STATUS_PARALLEL:
            log.debug("Confusion line parallel to colour axis at (%.6f, %.6f)", x0, y0)
            return x0, y0, False
        return float(x1), float(y1), True

    @staticmethod
    def project_xyz(xyz: ArrayFloat, axis: ConfusionAxis) -> ArrayFloat:
        """
        Simulated XYZ of one colour, holding its luminance Y fixed.

        Args:
            xyz: Source XYZ, shape (3,).
            axis: Confusion geometry of the family.

        Returns:
            XYZ of shape (3,) whose Y equals the source Y.
        """
        xyz = np.asarray(xyz, dtype=np.float64)
        if xyz.shape != (3,):
            raise ValueError(f"Expected a single XYZ triplet, got shape {xyz.shape}")

        Y = float(xyz[1])
        if Y == 0.0:
            return np.zeros(3, dtype=np.float64)

        xyY = ColorSpaceEngine.xyz_to_xyY(xyz)
        x1, y1, moved = DichromacyProjector.project_chromaticity(xyY, axis)
        if not moved:
            return xyz.copy()

        if abs(y1) < Y_EPSILON:
            warnings.warn(
                f"Confusion line from ({xyY[0]:.6f}, {xyY[1]:.6f}) meets the "
                f"colour axis at y = {y1:.3e}; keeping the source colour.",
                DegenerateProjectionWarning,
                stacklevel=2,
            )
            return xyz.copy()

        return ColorSpaceEngine.xyY_to_xyz(np.array([x1, y1, Y], dtype=np.float64))
