"""
Minor-unit money helpers.

Every stored amount is an integer number of minor units (kobo for NGN).
Conversion to major units only happens at presentation boundaries.
"""

from decimal import Decimal

from django.conf import settings


def to_major_units(amount_minor: int) -> Decimal:
    """Convert an integer minor-unit amount to a Decimal in major units."""
    scale = Decimal(settings.CURRENCY_MINOR_UNITS)
    places = Decimal(1) / scale
    return (Decimal(amount_minor) / scale).quantize(places)
