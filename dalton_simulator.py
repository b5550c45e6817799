# -*- coding: utf-8 -*-
"""
Dalton: Simulating colour vision deficiency in the CIE chromaticity plane
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: dalton_simulator.py — Simulation pipeline and convenience API.

One call is one linear pass with no retained state:

    parse -> decode gamma -> (achromatic | dichromatic) -> [anomalous blend]
          -> clamp + round -> format

Dichromatic path:
    linear RGB -> XYZ -> xyY -> confusion-line projection (Y fixed)
    -> linear RGB -> gamut mapping toward D65 -> XYZ -> encode

The achromatic kinds ignore the confusion geometry and work on the code
values directly. ``anomalize`` is honoured after either path.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from dalton_blend import achromatic, anomalize as blend_anomalous
from dalton_colorengine import (
    ColorProfile,
    ColorSpaceEngine,
    GammaCodec,
    GamutMapping,
)
from dalton_deficiency import (
    ACHROMATIC_KINDS,
    ANOMALOUS_KINDS,
    CONFUSION_AXES,
    ConfusionAxis,
    DeficiencyKind,
    as_kind,
    family_for_kind,
)
from dalton_io import ColorInput, RGBColor, parse_color_input, rgb_to_hex
from dalton_projector import DichromacyProjector

__all__ = [
    "SimulationOptions",
    "SimulationResult",
    "simulate_dichromacy",
    "simulate_rgb",
    "simulate_color",
    "simulate",
    "protanopia",
    "protanomaly",
    "deuteranopia",
    "deuteranomaly",
    "tritanopia",
    "tritanomaly",
    "achromatopsia",
    "achromatomaly",
]

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1.  Options and results
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class SimulationOptions:
    """Transfer curve used around the linear-light stages."""
    color_profile:    ColorProfile = ColorProfile.SRGB
    gamma_correction: float = 2.2

    def __post_init__(self) -> None:
        object.__setattr__(self, "color_profile", ColorProfile(self.color_profile))
        gamma = float(self.gamma_correction)
        if not math.isfinite(gamma) or gamma <= 0.0:
            raise ValueError(f"gamma_correction must be a finite value > 0, got {self.gamma_correction}")
        object.__setattr__(self, "gamma_correction", gamma)


DEFAULT_OPTIONS = SimulationOptions()


@dataclass(slots=True, frozen=True)
class SimulationResult:
    original:   RGBColor
    simulated:  RGBColor
    kind:       DeficiencyKind
    anomalized: bool

    @property
    def hex(self) -> str:
        """Simulated colour as ``#RRGGBB``."""
        return rgb_to_hex(self.simulated)


# ---------------------------------------------------------------------------
# 2.  Pipeline
# ---------------------------------------------------------------------------
def simulate_dichromacy(rgb: np.ndarray, axis: ConfusionAxis,
                        options: SimulationOptions = DEFAULT_OPTIONS) -> np.ndarray:
    """
    Full dichromat simulation of one colour.

    Args:
        rgb: Code values, shape (3,).
        axis: Confusion geometry of the family.
        options: Transfer curve settings.

    Returns:
        int64 code values, shape (3,).
    """
    profile, gamma = options.color_profile, options.gamma_correction

    linear = GammaCodec.decode(rgb, profile, gamma)
    xyz = ColorSpaceEngine.linear_rgb_to_xyz(linear)
    simulated_xyz = DichromacyProjector.project_xyz(xyz, axis)

    simulated_rgb = ColorSpaceEngine.xyz_to_linear_rgb(simulated_xyz)
    mapped_rgb = GamutMapping.toward_neutral(simulated_rgb, simulated_xyz)

    final_xyz = ColorSpaceEngine.linear_rgb_to_xyz(mapped_rgb)
    return GammaCodec.encode(ColorSpaceEngine.xyz_to_linear_rgb(final_xyz), profile, gamma)


def simulate_rgb(rgb: RGBColor,
                 kind: Union[DeficiencyKind, str],
                 anomalize: bool = False,
                 color_profile: Union[ColorProfile, str] = ColorProfile.SRGB,
                 gamma_correction: float = 2.2) -> RGBColor:
    """
    Simulates one colour as seen with the given deficiency.

    Args:
        rgb: Source colour, channels in [0, 255].
        kind: One of the eight deficiency tags (member or string value).
        anomalize: Blend the result back toward the source (-omaly variants).
        color_profile: ``"sRGB"`` or ``"generic"``.
        gamma_correction: Exponent of the generic profile.

    Returns:
        The simulated colour with integer channels in [0, 255].

    Raises:
        UnsupportedKindError: ``kind`` is not a known tag.
    """
    kind = as_kind(kind)
    options = SimulationOptions(color_profile, gamma_correction)
    original = rgb.as_array()

    if kind in ACHROMATIC_KINDS:
        log.debug("Simulating %s via achromatic path", kind.value)
        simulated = achromatic(original)
    else:
        family = family_for_kind(kind)
        log.debug("Simulating %s via %s confusion axis", kind.value, family.value)
        simulated = simulate_dichromacy(original, CONFUSION_AXES[family], options)

    if anomalize:
        simulated = blend_anomalous(simulated, original)

    return RGBColor.from_array(simulated)


def simulate_color(color: ColorInput,
                   kind: Union[DeficiencyKind, str],
                   anomalize: bool = False,
                   options: Optional[SimulationOptions] = None) -> SimulationResult:
    """
    Parses ``color`` and simulates it, keeping the source alongside.

    Raises:
        InvalidFormatError: ``color`` cannot be read as RGB.
        UnsupportedKindError: ``kind`` is not a known tag.
    """
    options = options or DEFAULT_OPTIONS
    kind = as_kind(kind)
    original = parse_color_input(color)
    simulated = simulate_rgb(
        original, kind, anomalize,
        options.color_profile, options.gamma_correction,
    )
    return SimulationResult(
        original=original,
        simulated=simulated,
        kind=kind,
        anomalized=bool(anomalize),
    )


def simulate(color: ColorInput,
             kind: Union[DeficiencyKind, str],
             anomalize: bool = False,
             options: Optional[SimulationOptions] = None) -> str:
    """Simulated colour as an uppercase ``#RRGGBB`` string."""
    return simulate_color(color, kind, anomalize, options).hex


# ---------------------------------------------------------------------------
# 3.  Named conditions
# ---------------------------------------------------------------------------
def _named(color: ColorInput, kind: DeficiencyKind) -> str:
    """Runs a named condition; the anomalous kinds blend back toward the source."""
    return simulate(color, kind, anomalize=kind in ANOMALOUS_KINDS)


def protanopia(color: ColorInput) -> str:
    """Red-blind dichromacy (no L cones)."""
    return _named(color, DeficiencyKind.PROTANOPIA)


def protanomaly(color: ColorInput) -> str:
    """Reduced red sensitivity."""
    return _named(color, DeficiencyKind.PROTANOMALY)


def deuteranopia(color: ColorInput) -> str:
    """Green-blind dichromacy (no M cones)."""
    return _named(color, DeficiencyKind.DEUTERANOPIA)


def deuteranomaly(color: ColorInput) -> str:
    """Reduced green sensitivity."""
    return _named(color, DeficiencyKind.DEUTERANOMALY)


def tritanopia(color: ColorInput) -> str:
    """Blue-blind dichromacy (no S cones)."""
    return _named(color, DeficiencyKind.TRITANOPIA)


def tritanomaly(color: ColorInput) -> str:
    """Reduced blue sensitivity."""
    return _named(color, DeficiencyKind.TRITANOMALY)


def achromatopsia(color: ColorInput) -> str:
    """Complete colour blindness (luminance only)."""
    return _named(color, DeficiencyKind.ACHROMATOPSIA)


def achromatomaly(color: ColorInput) -> str:
    """Partial colour blindness."""
    return _named(color, DeficiencyKind.ACHROMATOMALY)
