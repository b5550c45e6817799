# -*- coding: utf-8 -*-
"""
Dalton: Simulating colour vision deficiency in the CIE chromaticity plane
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: dalton_deficiency.py — Deficiency kinds and confusion-axis geometry.

Each dichromat family is described by a confusion point (the copunctal point
all of its confusion lines radiate from) and a colour axis ``y = m·x + yi``
holding the hues that family still perceives. The dichromatic (-opia) and
anomalous (-omaly) kinds of a family share one axis; anomaly is a blend
applied after the projection, not a separate geometry.

The constants are the empirical values of Brettel, Viénot & Mollon and must
only change together with a re-derivation from the paper.

References:
    [1] Brettel, H., Viénot, F. & Mollon, J.D., "Computerized simulation of
        color appearance for dichromats", JOSA A 14(10), 2647-2655 (1997)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping, Union

__all__ = [
    "DeficiencyKind",
    "ConfusionFamily",
    "ConfusionAxis",
    "CONFUSION_AXES",
    "FAMILY_BY_KIND",
    "ACHROMATIC_KINDS",
    "ANOMALOUS_KINDS",
    "ANOMALY_WEIGHT",
    "UnsupportedKindError",
    "as_kind",
    "family_for_kind",
    "axis_for_kind",
]


class UnsupportedKindError(ValueError):
    """Raised when a deficiency kind is not one of the known tags."""


class DeficiencyKind(str, Enum):
    """The eight simulated conditions."""
    PROTANOPIA = "protanopia"
    PROTANOMALY = "protanomaly"
    DEUTERANOPIA = "deuteranopia"
    DEUTERANOMALY = "deuteranomaly"
    TRITANOPIA = "tritanopia"
    TRITANOMALY = "tritanomaly"
    ACHROMATOPSIA = "achromatopsia"
    ACHROMATOMALY = "achromatomaly"


class ConfusionFamily(str, Enum):
    PROTAN = "protan"
    DEUTAN = "deutan"
    TRITAN = "tritan"
    CUSTOM = "custom"


@dataclass(slots=True, frozen=True)
class ConfusionAxis:
    """Confusion point ``(x, y)`` and colour axis ``y = m·x + yi``."""
    x:  float
    y:  float
    m:  float
    yi: float

    def axis_y(self, x: float) -> float:
        """Ordinate of the colour axis at abscissa ``x``."""
        return self.m * x + self.yi


CONFUSION_AXES: Final[Mapping[ConfusionFamily, ConfusionAxis]] = MappingProxyType({
    ConfusionFamily.PROTAN: ConfusionAxis(x=0.7465,  y=0.2535,   m=1.273463,  yi=-0.073894),
    ConfusionFamily.DEUTAN: ConfusionAxis(x=1.02274, y=-0.02274, m=0.968437,  yi=0.003331),
    ConfusionFamily.TRITAN: ConfusionAxis(x=0.1748,  y=0.0,      m=0.062921,  yi=0.292119),
    # Experimental axis; no enumerated kind maps here.
    ConfusionFamily.CUSTOM: ConfusionAxis(x=0.735,   y=0.265,    m=-1.059259, yi=1.026914),
})

FAMILY_BY_KIND: Final[Mapping[DeficiencyKind, ConfusionFamily]] = MappingProxyType({
    DeficiencyKind.PROTANOPIA:    ConfusionFamily.PROTAN,
    DeficiencyKind.PROTANOMALY:   ConfusionFamily.PROTAN,
    DeficiencyKind.DEUTERANOPIA:  ConfusionFamily.DEUTAN,
    DeficiencyKind.DEUTERANOMALY: ConfusionFamily.DEUTAN,
    DeficiencyKind.TRITANOPIA:    ConfusionFamily.TRITAN,
    DeficiencyKind.TRITANOMALY:   ConfusionFamily.TRITAN,
})

ACHROMATIC_KINDS: Final[frozenset[DeficiencyKind]] = frozenset({
    DeficiencyKind.ACHROMATOPSIA,
    DeficiencyKind.ACHROMATOMALY,
})

ANOMALOUS_KINDS: Final[frozenset[DeficiencyKind]] = frozenset({
    DeficiencyKind.PROTANOMALY,
    DeficiencyKind.DEUTERANOMALY,
    DeficiencyKind.TRITANOMALY,
    DeficiencyKind.ACHROMATOMALY,
})

# Weight of the simulated colour against the original in anomalous blends:
# result = (k·simulated + original) / (k + 1), i.e. ~64 % toward dichromacy.
ANOMALY_WEIGHT: Final[float] = 1.75


def as_kind(kind: Union[DeficiencyKind, str]) -> DeficiencyKind:
    """Coerces a tag or its string value to ``DeficiencyKind``."""
    if isinstance(kind, DeficiencyKind):
        return kind
    try:
        return DeficiencyKind(str(kind).strip().lower())
    except ValueError:
        valid = ", ".join(k.value for k in DeficiencyKind)
        raise UnsupportedKindError(
            f"Unsupported color blindness type: {kind!r} (expected one of: {valid})"
        ) from None


def family_for_kind(kind: Union[DeficiencyKind, str]) -> ConfusionFamily:
    """
    Confusion family of a kind.

    Kinds without a dichromat family (the achromatic ones) fall back to
    ``ConfusionFamily.CUSTOM``; the pipeline never asks for them.
    """
    return FAMILY_BY_KIND.get(as_kind(kind), ConfusionFamily.CUSTOM)


def axis_for_kind(kind: Union[DeficiencyKind, str]) -> ConfusionAxis:
    return CONFUSION_AXES[family_for_kind(kind)]
