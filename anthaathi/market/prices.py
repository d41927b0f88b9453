"""
Mandi price board.

Prices are static sample rows (INR per quintal) until a live market
feed is wired in; search runs over them in memory.
"""

from anthaathi.models.advisory import MarketPrice


def _row(id: str, crop: str, market: str, low: int, high: int, modal: int) -> MarketPrice:
    return MarketPrice(
        id=id,
        crop=crop,
        market=market,
        min_price=low,
        max_price=high,
        modal_price=modal,
    )


SAMPLE_PRICES: tuple[MarketPrice, ...] = (
    _row("1", "Rice (Paddy)", "Koyambedu", 2100, 2350, 2200),
    _row("2", "Wheat", "Chennai", 2500, 2800, 2650),
    _row("3", "Tomato", "Madurai", 800, 1200, 1000),
    _row("4", "Onion", "Koyambedu", 1500, 2000, 1750),
    _row("5", "Potato", "Salem", 1200, 1600, 1400),
    _row("6", "Cotton", "Coimbatore", 6200, 6800, 6500),
    _row("7", "Sugarcane", "Tiruchirappalli", 3100, 3500, 3300),
    _row("8", "Groundnut", "Villupuram", 5500, 6200, 5800),
    _row("9", "Turmeric", "Erode", 8000, 9500, 8700),
    _row("10", "Banana", "Theni", 600, 900, 750),
    _row("11", "Coconut", "Pollachi", 2800, 3200, 3000),
    _row("12", "Chilli", "Guntur", 12000, 15000, 13500),
)


def search_prices(query: str = "", prices: tuple[MarketPrice, ...] = SAMPLE_PRICES) -> list[MarketPrice]:
    """
    Rows whose crop or market contains `query`, ignoring case.

    A blank query returns every row, in board order.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(prices)
    return [
        price for price in prices
        if needle in price.crop.lower() or needle in price.market.lower()
    ]
