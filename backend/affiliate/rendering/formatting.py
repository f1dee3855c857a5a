from dataclasses import dataclass
from typing import Optional

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "KRW": "₩",
    "CAD": "CA$",
    "AUD": "A$",
}

# Niche slug -> primary call to action
CTA_BY_NICHE = {
    "gaming": "Check Price",
    "tech": "Check Price",
    "electronics": "Check Price",
    "beauty": "Shop Now",
    "fashion": "Shop Now",
    "skincare": "Shop Now",
    "health": "Shop Now",
    "fitness": "Shop Now",
    "home": "Shop Now",
    "furniture": "Shop Now",
    "travel": "Book Now",
    "hotels": "Book Now",
    "software": "Get Started",
    "saas": "Get Started",
    "apps": "Download",
    "finance": "Apply Now",
}
DEFAULT_CTA = "Check Price"

RATING_VERDICTS = (
    (4.5, "Excellent"),
    (4.0, "Great"),
    (3.5, "Good"),
    (3.0, "Average"),
)


@dataclass(frozen=True)
class FormattedPrice:
    primary: Optional[str] = None
    secondary: Optional[str] = None
    text: Optional[str] = None

    def __bool__(self):
        return bool(self.primary or self.text)


def format_price(amount, currency: Optional[str] = "USD") -> Optional[str]:
    """Whole-unit currency display: ``1299.99, "USD"`` -> ``"$1,300"``."""
    if amount is None or amount == "":
        return None
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return None

    code = (currency or "USD").upper()
    number = f"{value:,.0f}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{symbol}{number}"
    return f"{code} {number}"


def format_product_price(price_from, price_to, currency, price_text) -> FormattedPrice:
    return FormattedPrice(
        primary=format_price(price_from, currency),
        secondary=format_price(price_to, currency) if price_to else None,
        text=price_text or None,
    )


def cta_text(niche_slug: Optional[str]) -> str:
    return CTA_BY_NICHE.get((niche_slug or "").lower(), DEFAULT_CTA)


def rating_verdict(rating: Optional[float]) -> Optional[str]:
    if rating is None:
        return None
    for threshold, label in RATING_VERDICTS:
        if rating >= threshold:
            return label
    return "Below Average"


def star_states(rating: Optional[float]):
    """Five entries of ``"full"``, ``"half"`` or ``"empty"`` for a star widget."""
    if rating is None:
        return ["empty"] * 5
    full = int(rating)
    half = (rating - full) >= 0.5
    states = []
    for i in range(5):
        if i < full:
            states.append("full")
        elif i == full and half:
            states.append("half")
        else:
            states.append("empty")
    return states


def truncate(text: Optional[str], max_length: int = 160) -> Optional[str]:
    if not text or len(text) <= max_length:
        return text
    return text[:max_length - 3].rstrip() + "..."
