"""Unit conversion helpers for the surfaces drainage designers work in."""

PERCENT = 100.0
LPS_PER_CMS = 1000.0
CMS_PER_LPS: float = 1 / LPS_PER_CMS


def percent_to_decimal(value: float) -> float:
    """Convert a slope in percent into metres per metre."""
    return value / PERCENT


def decimal_to_percent(value: float) -> float:
    """Convert a slope in metres per metre into percent."""
    return value * PERCENT


def litres_per_second_to_cms(value: float) -> float:
    """Convert litres per second into cubic metres per second."""
    return value * CMS_PER_LPS


def cms_to_litres_per_second(value: float) -> float:
    """Convert cubic metres per second into litres per second."""
    return value * LPS_PER_CMS
