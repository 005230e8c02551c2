"""Constants for Indigenous Protected Areas data."""

from ipa_data.constants.authorities import AUTHORITY_LABELS
from ipa_data.constants.regions import (
    ALL_STATES,
    AUSTRALIAN_STATES,
    REFERENCE_TOWNS,
)

__all__ = [
    "ALL_STATES",
    "AUSTRALIAN_STATES",
    "AUTHORITY_LABELS",
    "REFERENCE_TOWNS",
]
