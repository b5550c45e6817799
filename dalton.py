# -*- coding: utf-8 -*-
"""
Dalton: Simulating colour vision deficiency in the CIE chromaticity plane
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Public API.

    >>> import dalton
    >>> dalton.protanopia("#FF0000")          # doctest: +SKIP
    >>> dalton.simulate([0, 128, 255], "tritanomaly", anomalize=True)  # doctest: +SKIP

Based on:
    Brettel, H., Viénot, F. & Mollon, J.D., "Computerized simulation of color
    appearance for dichromats", JOSA A 14(10), 2647-2655 (1997).
    DOI: 10.1364/JOSAA.14.002647
"""

from dalton_about import __version__
from dalton_colorengine import ColorProfile
from dalton_deficiency import DeficiencyKind, UnsupportedKindError
from dalton_io import ColorInput, InvalidFormatError, RGBColor, parse_color_input, rgb_to_hex
from dalton_projector import DegenerateProjectionWarning
from dalton_simulator import (
    SimulationOptions,
    SimulationResult,
    achromatomaly,
    achromatopsia,
    deuteranomaly,
    deuteranopia,
    protanomaly,
    protanopia,
    simulate,
    simulate_color,
    simulate_rgb,
    tritanomaly,
    tritanopia,
)

__all__ = [
    "__version__",
    "ColorInput",
    "ColorProfile",
    "DeficiencyKind",
    "DegenerateProjectionWarning",
    "InvalidFormatError",
    "RGBColor",
    "SimulationOptions",
    "SimulationResult",
    "UnsupportedKindError",
    "parse_color_input",
    "rgb_to_hex",
    "simulate",
    "simulate_color",
    "simulate_rgb",
    "protanopia",
    "protanomaly",
    "deuteranopia",
    "deuteranomaly",
    "tritanopia",
    "tritanomaly",
    "achromatopsia",
    "achromatomaly",
]
