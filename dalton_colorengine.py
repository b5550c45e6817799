# -*- coding: utf-8 -*-
"""
Dalton: Simulating colour vision deficiency in the CIE chromaticity plane
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Colour Engine
=============
Transfer curves, linear colour-space transforms and gamut mapping used by
the dichromat simulation pipeline.

The sRGB/D65 matrices are full-precision inverses of each other (their Y row
doubles as the luma weights of the achromatic path), so that a value decoded,
converted and re-encoded lands back on the same 8-bit code.

Components:
    - ``GammaCodec``: 8-bit code values <-> linear RGB (sRGB piecewise curve
      or a plain power law).
    - ``ColorSpaceEngine``: linear RGB <-> CIE XYZ, XYZ <-> xyY.
    - ``GamutMapping``: pulls out-of-gamut linear RGB toward the neutral axis
      with one shared scalar.

References:
    - IEC 61966-2-1:1999 (sRGB Standard)
    - CIE 15:2004 "Colorimetry"
"""

import functools
from enum import Enum
from typing import Any, Callable, Final, TypeAlias, Union

import numpy as np
import numpy.typing as npt
from numba import njit

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",

    # --- Constants ---
    "M_SRGB_TO_XYZ_T",
    "M_XYZ_TO_SRGB_T",
    "WHITE_D65_XY",
    "SRGB_DECODE_THRESHOLD",
    "SRGB_ENCODE_THRESHOLD",
    "CHANNEL_MAX",

    # --- Decorators ---
    "handle_shapes",

    # --- Functions ---
    "round_half_up",

    # --- Classes ---
    "ColorProfile",
    "GammaCodec",
    "ColorSpaceEngine",
    "GamutMapping",
]

# --- Type Aliases ---
ArrayFloat: TypeAlias = npt.NDArray[np.floating]

# --- Constants & Pre-Transposed Matrices ---

# sRGB primaries with the D65 white. Row-major "matrix @ column" form; the
# module keeps the transposes so colours can stay row vectors.
_M_SRGB_TO_XYZ_BASE = np.array([
    [0.41242371206635076, 0.3575793401363035,  0.1804662232369621],
    [0.21265606784927693, 0.715157818248362,   0.0721864539171564],
    [0.019331987577444885, 0.11919267420354762, 0.9504491124870351],
], dtype=np.float64)
M_SRGB_TO_XYZ_T: Final[ArrayFloat] = _M_SRGB_TO_XYZ_BASE.T.copy()

_M_XYZ_TO_SRGB_BASE = np.array([
    [ 3.240712470389558,   -1.5372626602963142,  -0.49857440415943116],
    [-0.969259258688888,    1.875996969313966,    0.041556132211625726],
    [ 0.05563600315398933, -0.2039948802843549,   1.0570636917433989],
], dtype=np.float64)
M_XYZ_TO_SRGB_T: Final[ArrayFloat] = _M_XYZ_TO_SRGB_BASE.T.copy()

# D65 chromaticity used as the neutral point of the gamut mapper.
WHITE_D65_XY: Final[tuple[float, float]] = (0.312713, 0.329016)

SRGB_DECODE_THRESHOLD: Final[float] = 0.04045
SRGB_ENCODE_THRESHOLD: Final[float] = 0.0031308
CHANNEL_MAX: Final[float] = 255.0


class ColorProfile(str, Enum):
    """Transfer curve applied between 8-bit code values and linear light."""
    SRGB = "sRGB"
    GENERIC = "generic"


# =============================================================================
# 1. ROBUST DECORATORS
# =============================================================================

def handle_shapes(func: Callable[..., ArrayFloat]) -> Callable[..., ArrayFloat]:
    """
    Decorator to normalize inputs to (N, 3) and safeguard shape.

    Single colours (3,) are treated as a batch of one internally so that the
    kernels only ever see 2D arrays.

    Returns:
        The wrapped function with shape handling.
        - If input is (3,), returns (3,)
        - If input is (N, 3), returns (N, 3)
    """
    @functools.wraps(func)
    def wrapper(arr: Union[ArrayFloat, Any], *args: Any, **kwargs: Any) -> ArrayFloat:
        arr = np.asarray(arr, dtype=np.float64)
        arr_in = np.ascontiguousarray(np.atleast_2d(arr))

        if arr_in.shape[-1] != 3:
            raise ValueError(f"Expected last dimension size 3, got {arr_in.shape[-1]}")

        res = func(arr_in, *args, **kwargs)

        if arr.ndim == 1:
            return res[0]
        return res
    return wrapper


# =============================================================================
# 2. LOW-LEVEL TRANSFER KERNELS (Numba Optimized)
# =============================================================================
# The kernels assume their input is already inside [0, 1]; GammaCodec clamps
# before encoding and decoding only ever sees normalised code values.

@njit(cache=True, fastmath=True)
def _fast_gamma_srgb(linear: ArrayFloat) -> ArrayFloat:
    """
    Applies sRGB OETF (linear -> encoded).

    Standard: IEC 61966-2-1
    """
    out = np.empty_like(linear)
    linear_flat = linear.ravel()
    out_flat = out.ravel()

    for i in range(linear.size):
        v = linear_flat[i]
        if v <= SRGB_ENCODE_THRESHOLD:
            out_flat[i] = 12.92 * v
        else:
            out_flat[i] = 1.055 * (v ** (1.0 / 2.4)) - 0.055
    return out


@njit(cache=True, fastmath=True)
def _fast_inverse_gamma_srgb(srgb: ArrayFloat) -> ArrayFloat:
    """
    Applies sRGB EOTF (encoded -> linear).

    Standard: IEC 61966-2-1
    """
    out = np.empty_like(srgb)
    srgb_flat = srgb.ravel()
    out_flat = out.ravel()

    for i in range(srgb.size):
        v = srgb_flat[i]
        if v <= SRGB_DECODE_THRESHOLD:
            out_flat[i] = v / 12.92
        else:
            out_flat[i] = ((v + 0.055) / 1.055) ** 2.4
    return out


@njit(cache=True, fastmath=True)
def _fast_power_curve(values: ArrayFloat, exponent: float) -> ArrayFloat:
    """Plain power law ``v ** exponent``, used by the generic profile."""
    out = np.empty_like(values)
    values_flat = values.ravel()
    out_flat = out.ravel()

    for i in range(values.size):
        out_flat[i] = values_flat[i] ** exponent
    return out


# =============================================================================
# 3. GAMMA CODEC
# =============================================================================

class GammaCodec:
    """Converts between 8-bit code values [0, 255] and linear RGB [0, 1].

    Both directions are pure; ``encode(decode(c))`` reproduces ``c`` for
    every integer code value under either profile.
    """

    @staticmethod
    def decode(channels: ArrayFloat,
               profile: ColorProfile = ColorProfile.SRGB,
               gamma: float = 2.2) -> ArrayFloat:
        """
        Code values -> linear light.

        Args:
            channels: Code values in [0, 255], any shape.
            profile: Transfer curve to invert.
            gamma: Exponent of the generic profile (ignored for sRGB).

        Returns:
            float64 array of linear values in [0, 1].
        """
        v = np.ascontiguousarray(channels, dtype=np.float64) / CHANNEL_MAX
        if ColorProfile(profile) is ColorProfile.SRGB:
            return _fast_inverse_gamma_srgb(v)
        return _fast_power_curve(v, float(gamma))

    @staticmethod
    def encode(linear: ArrayFloat,
               profile: ColorProfile = ColorProfile.SRGB,
               gamma: float = 2.2) -> np.ndarray:
        """
        Linear light -> rounded code values.

        Linear values are clamped to [0, 1] before the curve is applied, so
        out-of-gamut input never reaches the kernels.

        Returns:
            int64 array of code values in [0, 255].
        """
        v = np.clip(np.ascontiguousarray(linear, dtype=np.float64), 0.0, 1.0)
        if ColorProfile(profile) is ColorProfile.SRGB:
            encoded = _fast_gamma_srgb(v)
        else:
            encoded = _fast_power_curve(v, 1.0 / float(gamma))
        return round_half_up(encoded * CHANNEL_MAX)


def round_half_up(values: ArrayFloat) -> np.ndarray:
    """Rounds non-negative values to the nearest integer, halves upward."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5).astype(np.int64)


# =============================================================================
# 4. COLOR SPACE ENGINE
# =============================================================================

class ColorSpaceEngine:
    """Static utility class for the linear transforms of the pipeline.

    All transforms are plain matrix products on row vectors and have no
    failure modes besides shape validation.
    """

    @staticmethod
    @handle_shapes
    def linear_rgb_to_xyz(rgb_array: ArrayFloat) -> ArrayFloat:
        """
        Converts linear sRGB to CIE XYZ (D65 relative, Y of white = 1).

        Args:
            rgb_array: Linear RGB, shape (N, 3) or (3,).

        Returns:
            XYZ coordinates.
        """
        return np.dot(rgb_array, M_SRGB_TO_XYZ_T)

    @staticmethod
    @handle_shapes
    def xyz_to_linear_rgb(xyz_array: ArrayFloat) -> ArrayFloat:
        """
        Converts CIE XYZ to linear sRGB.

        No clipping is applied: callers that need the gamut boundary (see
        ``GamutMapping``) inspect the raw values.
        """
        return np.dot(xyz_array, M_XYZ_TO_SRGB_T)

    @staticmethod
    @handle_shapes
    def xyz_to_xyY(xyz_array: ArrayFloat) -> ArrayFloat:
        """
        Converts XYZ to xyY (Chromaticity + Luminance).

        Standard formula:
            x = X / (X+Y+Z)
            y = Y / (X+Y+Z)
            Y = Y

        Design Decision - Black-Pixel Handling:
            For X+Y+Z = 0 the result is (0, 0, 0) rather than a division by
            zero. This is the convention of ``colour-science`` (>= 0.4.4),
            not a substituted white point; the projector treats Y = 0 as
            black before it ever reads the chromaticity.

        Args:
            xyz_array: Input XYZ data, shape (N, 3) or (3,).

        Returns:
            xyY coordinates.
        """
        sum_xyz = np.sum(xyz_array, axis=-1)
        mask = sum_xyz != 0.0
        xyY = np.zeros_like(xyz_array)

        if np.any(mask):
            inv_sum = 1.0 / sum_xyz[mask]
            xyY[mask, 0] = xyz_array[mask, 0] * inv_sum
            xyY[mask, 1] = xyz_array[mask, 1] * inv_sum
            xyY[mask, 2] = xyz_array[mask, 1]
        return xyY

    @staticmethod
    @handle_shapes
    def xyY_to_xyz(xyY_array: ArrayFloat) -> ArrayFloat:
        """
        Converts xyY to XYZ.

        Rows with y = 0 carry no recoverable luminance direction and map to
        (0, 0, 0).
        """
        x, y, Y = xyY_array[..., 0], xyY_array[..., 1], xyY_array[..., 2]
        xyz = np.zeros_like(xyY_array)
        mask = y != 0.0
        if np.any(mask):
            factor = Y[mask] / y[mask]
            xyz[mask, 0] = x[mask] * factor
            xyz[mask, 1] = Y[mask]
            xyz[mask, 2] = (1.0 - x[mask] - y[mask]) * factor
        return xyz

    @staticmethod
    def neutral_xyz(luminance: Union[float, ArrayFloat]) -> ArrayFloat:
        """
        XYZ of the D65 neutral at the given luminance.

        Returns (3,) for a scalar luminance and (N, 3) for an (N,) array.
        """
        Y = np.asarray(luminance, dtype=np.float64)
        xw, yw = WHITE_D65_XY
        return np.stack((xw * Y / yw, Y, (1.0 - xw - yw) * Y / yw), axis=-1)


# =============================================================================
# 5. GAMUT MAPPING
# =============================================================================

class GamutMapping:
    @staticmethod
    @handle_shapes
    def shift_scalars(rgb: ArrayFloat, delta: ArrayFloat) -> ArrayFloat:
        """
        Per-row scalar ``t`` that brings every channel of ``rgb`` back into
        [0, 1] when moving along ``delta``.

        For each channel the boundary is 0 when the value is negative and 1
        otherwise; ``t = (boundary - value) / delta``. Channels with a zero
        delta cannot move and contribute ``t = 0``, as does any ``t`` outside
        [0, 1]. The row scalar is the largest surviving channel ``t``.

        Args:
            rgb: Linear RGB, shape (N, 3) or (3,).
            delta: Direction toward the neutral point, same shape as ``rgb``.

        Returns:
            The row scalar repeated across the channel axis, same shape as
            ``rgb``.
        """
        delta = np.ascontiguousarray(np.atleast_2d(delta), dtype=np.float64)
        if delta.shape != rgb.shape:
            raise ValueError(f"Delta shape {delta.shape} does not match colour shape {rgb.shape}")

        target = np.where(rgb < 0.0, 0.0, 1.0)
        movable = delta != 0.0
        t = np.zeros_like(rgb)
        t[movable] = (target[movable] - rgb[movable]) / delta[movable]
        t[(t < 0.0) | (t > 1.0)] = 0.0
        return np.max(t, axis=-1)[:, np.newaxis].repeat(3, axis=-1)

    @staticmethod
    def toward_neutral(rgb: ArrayFloat, xyz: ArrayFloat) -> ArrayFloat:
        """
        Desaturates ``rgb`` toward the D65 neutral of equal luminance until
        every channel lies in [0, 1].

        The neutral is taken at the luminance of ``xyz`` (the colour whose
        linear RGB is ``rgb``). One shared scalar moves all three channels,
        keeping the hue direction instead of clipping channels one by one.

        Args:
            rgb: Linear RGB, (3,) or (N, 3).
            xyz: The same colour(s) in XYZ.

        Returns:
            Linear RGB of the same shape as ``rgb``.
        """
        rgb = np.asarray(rgb, dtype=np.float64)
        xyz = np.asarray(xyz, dtype=np.float64)
        neutral = ColorSpaceEngine.neutral_xyz(xyz[..., 1])
        delta = ColorSpaceEngine.xyz_to_linear_rgb(neutral - xyz)
        # shift_scalars repeats t across the channel axis
        t = GamutMapping.shift_scalars(rgb, delta)
        return rgb + t * delta
