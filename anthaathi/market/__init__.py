"""Market price board."""

from anthaathi.market.prices import SAMPLE_PRICES, search_prices

__all__ = [
    "SAMPLE_PRICES",
    "search_prices",
]
