"""
Damage unit resolution.

NOAA records a damage estimate as a magnitude plus a unit indicator. The
indicator is either a letter (H, K, M, B in any case) or a digit used as a
literal power of ten. Anything else (blank, '+', '-', '?', NA) has no effect.
"""

import re

import numpy as np
import pandas as pd

from .constants import UNIT_EXPONENTS

_DIGIT = re.compile(r"^[0-9]$")

# Combined strings from StormEvents files, e.g. '10.00K', '5M', '0'
_COMBINED_DAMAGE = re.compile(r"^\s*\$?\s*([0-9]*\.?[0-9]+)\s*([A-Za-z0-9]?)\s*$")


def _unit_to_digit(unit) -> str:
    """Substitute letter codes for their digit equivalents."""
    if unit is None or (not isinstance(unit, str) and pd.isna(unit)):
        return ""
    text = str(unit).strip().upper()
    if text in UNIT_EXPONENTS:
        return str(UNIT_EXPONENTS[text])
    return text


def resolve_exponent(unit) -> int:
    """
    Resolve a unit indicator to a power-of-ten exponent.

    Letters are mapped before the numeric parse because digit exponents
    and letter codes share the same field. Unparseable input gives 0.
    """
    digit = _unit_to_digit(unit)
    if _DIGIT.match(digit):
        return int(digit)
    return 0


def _clean_magnitude(magnitude) -> float:
    try:
        value = float(magnitude)
    except (TypeError, ValueError):
        return 0.0
    if np.isnan(value) or value < 0:
        return 0.0
    return value


def resolve_amount(magnitude, unit) -> float:
    """
    Resolve a damage magnitude and unit indicator to an absolute amount.

    Examples:
        resolve_amount(2.5, 'K')  -> 2500.0
        resolve_amount(2.5, '3')  -> 2500.0
        resolve_amount(2.5, '')   -> 2.5
        resolve_amount(2.5, 'b')  -> 2500000000.0
    """
    return _clean_magnitude(magnitude) * 10.0 ** resolve_exponent(unit)


def resolve_exponents(units: pd.Series) -> pd.Series:
    """Vectorised resolve_exponent over a column of unit indicators."""
    return units.map(resolve_exponent).astype(int)


def resolve_amounts(magnitudes: pd.Series, units: pd.Series) -> pd.Series:
    """Vectorised resolve_amount over aligned magnitude and unit columns."""
    values = pd.to_numeric(magnitudes, errors="coerce").fillna(0.0).astype(float)
    values = values.clip(lower=0.0)
    exponents = resolve_exponents(units)
    return values * np.power(10.0, exponents.astype(float))


def split_combined_damage(damage_str):
    """
    Split a combined damage string like '10.00K' into (magnitude, unit).

    Returns (0.0, '') for blank or unparseable strings.
    """
    if damage_str is None or (not isinstance(damage_str, str) and pd.isna(damage_str)):
        return 0.0, ""

    match = _COMBINED_DAMAGE.match(str(damage_str))
    if not match:
        return 0.0, ""
    return float(match.group(1)), match.group(2)
