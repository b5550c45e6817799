# -*- coding: utf-8 -*-
"""
Dalton: Simulating colour vision deficiency in the CIE chromaticity plane
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: dalton_io.py — Colour input parsing and hex formatting.

Accepted inputs (all equivalent):
    "#FF8000" / "ff8000"        six hex digits, optional leading '#'
    [255, 128, 0] / (255, ...)  any three-element sequence or ndarray
    {"R": 255, "G": 128, "B": 0} mapping with R, G, B keys
    RGBColor(255, 128, 0)       the record itself
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TypeAlias, Union

import numpy as np

from dalton_colorengine import CHANNEL_MAX, round_half_up

HEX_REGEX = re.compile(r"[0-9A-Fa-f]{6}")

__all__ = [
    "ColorInput",
    "InvalidFormatError",
    "RGBColor",
    "parse_color_input",
    "rgb_to_hex",
]


class InvalidFormatError(ValueError):
    """Raised for colour inputs that cannot be read as RGB."""


@dataclass(slots=True, frozen=True)
class RGBColor:
    """Three channel values on the 0–255 scale."""
    R: float
    G: float
    B: float

    def as_array(self) -> np.ndarray:
        return np.array([self.R, self.G, self.B], dtype=np.float64)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> RGBColor:
        """Builds a record of clamped, rounded integer channels."""
        arr = np.clip(np.asarray(values, dtype=np.float64), 0.0, CHANNEL_MAX)
        r, g, b = (int(v) for v in round_half_up(arr))
        return cls(r, g, b)


ColorInput: TypeAlias = Union[str, RGBColor, Mapping[str, float], Sequence[float], np.ndarray]


def _channel(value: object, name: str) -> float:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidFormatError(f"Channel {name} must be a number, got {value!r}")
    try:
        v = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidFormatError(f"Channel {name} must be a number, got {value!r}") from None
    if not math.isfinite(v):
        raise InvalidFormatError(f"Channel {name} must be finite, got {value!r}")
    return min(max(v, 0.0), CHANNEL_MAX)


def _parse_hex(text: str) -> RGBColor:
    hex_digits = text.strip()
    if hex_digits.startswith("#"):
        hex_digits = hex_digits[1:]
    if not HEX_REGEX.fullmatch(hex_digits):
        raise InvalidFormatError(f"Invalid hex color format: {text!r}")
    r, g, b = (int(hex_digits[i:i + 2], 16) for i in (0, 2, 4))
    return RGBColor(r, g, b)


def parse_color_input(color: ColorInput) -> RGBColor:
    """
    Normalises any accepted input form to an ``RGBColor``.

    Channels are converted to float and clamped to [0, 255]; they are not
    rounded here.

    Raises:
        InvalidFormatError: wrong hex length or digits, a sequence that does
            not hold exactly three values, a mapping without R/G/B, a
            non-numeric or non-finite channel, or an unsupported type.
    """
    if isinstance(color, RGBColor):
        return RGBColor(*(_channel(v, n) for v, n in zip(
            (color.R, color.G, color.B), "RGB")))

    if isinstance(color, str):
        return _parse_hex(color)

    if isinstance(color, Mapping):
        try:
            values = (color["R"], color["G"], color["B"])
        except KeyError as exc:
            raise InvalidFormatError(f"RGB mapping is missing key {exc}") from None
        return RGBColor(*(_channel(v, n) for v, n in zip(values, "RGB")))

    if isinstance(color, (Sequence, np.ndarray)) and not isinstance(color, (bytes, bytearray)):
        values = list(np.ravel(color)) if isinstance(color, np.ndarray) else list(color)
        if len(values) != 3:
            raise InvalidFormatError(
                f"RGB array must contain exactly 3 values, got {len(values)}"
            )
        return RGBColor(*(_channel(v, n) for v, n in zip(values, "RGB")))

    raise InvalidFormatError(f"Unsupported color input type: {type(color).__name__}")


def rgb_to_hex(rgb: RGBColor) -> str:
    """Formats a colour as ``#RRGGBB`` (uppercase), clamping and rounding first."""
    arr = np.nan_to_num(rgb.as_array(), nan=0.0)
    r, g, b = round_half_up(np.clip(arr, 0.0, CHANNEL_MAX))
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"
