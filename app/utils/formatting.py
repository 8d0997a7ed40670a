"""Display formatting for prices, amounts, volumes, and timestamps."""

from datetime import UTC, datetime


def format_price(price: float) -> str:
    """Format a price with precision scaled to its magnitude.

    Sub-unit prices get 4 decimals, prices under 100 get 2, and larger
    prices get 2 decimals with thousands separators.
    """
    if price < 1:
        return f"{price:.4f}"
    if price < 100:
        return f"{price:.2f}"
    return f"{price:,.2f}"


def format_amount(amount: float) -> str:
    return f"{amount:.3f}"


def format_percentage(percentage: float) -> str:
    """Signed percentage with 2 decimals, e.g. ``+1.25%``."""
    sign = "+" if percentage >= 0 else ""
    return f"{sign}{percentage:.2f}%"


def format_volume(volume: float) -> str:
    """Compact volume: ``1.5M``, ``2.3K``, or a whole number."""
    if volume >= 1_000_000:
        return f"{volume / 1_000_000:.1f}M"
    if volume >= 1_000:
        return f"{volume / 1_000:.1f}K"
    return f"{volume:.0f}"


def format_time(timestamp_ms: int) -> str:
    """24-hour ``HH:MM`` in UTC for a millisecond timestamp."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC).strftime("%H:%M")


def format_time_ago(timestamp_ms: int, now_ms: int) -> str:
    """Relative placement time, e.g. ``Placed 5mins ago``."""
    diff = now_ms - timestamp_ms
    minutes = diff // 60_000
    hours = diff // 3_600_000
    days = diff // 86_400_000

    if minutes < 60:
        return f"Placed {minutes}min{'s' if minutes != 1 else ''} ago"
    if hours < 24:
        return f"Placed {hours}hour{'s' if hours != 1 else ''} ago"
    return f"Placed {days}day{'s' if days != 1 else ''} ago"
