"""Shared constants for classification and display."""

# Variant sold exclusively through buy orders; always classified as a buy.
PURE_PRIORITY_LABEL = "Pure Priority"

# Badge families, checked in order against the lower-cased material name
MATERIAL_FAMILIES = ["gold", "silver", "platinum", "palladium"]
DEFAULT_MATERIAL_FAMILY = "other"

MS_PER_DAY = 1000 * 60 * 60 * 24

PRODUCT_URL_TEMPLATE = "https://www.collectpure.com/marketplace/product/{sku}"
