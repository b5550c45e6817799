# -*- coding: utf-8 -*-
"""
Dalton: Simulating colour vision deficiency in the CIE chromaticity plane
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: dalton_blend.py — Achromatic conversion and anomalous blending.
"""

from typing import Final

import numpy as np

from dalton_colorengine import ArrayFloat, round_half_up
from dalton_deficiency import ANOMALY_WEIGHT

__all__ = ["LUMA_WEIGHTS", "achromatic", "anomalize"]

# Y row of the RGB -> XYZ matrix, rounded to six places (sums to 1).
LUMA_WEIGHTS: Final[ArrayFloat] = np.array([0.212656, 0.715158, 0.072186], dtype=np.float64)


def achromatic(rgb: ArrayFloat) -> np.ndarray:
    """
    Luminance-weighted grayscale of code values.

    The weights are applied to the encoded channels directly, not to linear
    light; the result is replicated and rounded.

    Args:
        rgb: Code values, shape (3,) or (N, 3).

    Returns:
        int64 array of the same shape with equal channels.
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    luma = np.dot(rgb, LUMA_WEIGHTS)
    gray = round_half_up(luma)
    return np.repeat(gray[..., np.newaxis], 3, axis=-1)


def anomalize(simulated: ArrayFloat, original: ArrayFloat,
              weight: float = ANOMALY_WEIGHT) -> ArrayFloat:
    """
    Blends a full-deficiency result back toward the original colour.

    ``(weight·simulated + original) / (weight + 1)`` per channel. The result
    is left unrounded; the caller clamps and rounds once at the end.
    """
    simulated = np.asarray(simulated, dtype=np.float64)
    original = np.asarray(original, dtype=np.float64)
    return (weight * simulated + original) / (weight + 1.0)
