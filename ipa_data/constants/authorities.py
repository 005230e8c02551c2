"""Managing authority codes and placeholder values for IPA records."""

# Human-readable labels for AUTHORITY codes in the IPA dataset.
# The codes describe management types, not specific organisations.
AUTHORITY_LABELS = {
    "IMG": "Indigenous Management Group",
    "LALC": "Local Aboriginal Land Council",
    "TSRA": "Torres Strait Regional Authority",
}

UNKNOWN_AUTHORITY = "Unknown"

# Placeholders for properties missing from a feature
UNNAMED_AREA = "Unnamed Area"
UNKNOWN_STATE = "Unknown"
UNKNOWN_TYPE = "Unknown Type"
