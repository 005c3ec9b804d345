# Define a static color class for consistent use across the app

from ath_screener.core.domain_models import MarketCapCategory


class Colors:
    # Primary / Neutral
    blue = "#2563eb"  # Royal Blue
    light_blue = "#93c5fd"

    purple = "#7c3aed"

    # Semantic: close to the high
    green = "#059669"  # Emerald 600
    light_green = "#6ee7b7"

    red = "#dc2626"

    # Semantic: further from the high
    # Pure yellow is invisible on white, use Amber.
    amber = "#d97706"

    orange = "#ea580c"
    teal = "#0d9488"
    gray = "#4b5563"
    light_gray = "#9ca3af"
    white = "#ffffff"


# Used for: "% From High" cells
HIGHLIGHT_COLORS = {
    "positive": Colors.green,
    "warning": Colors.amber,
    "neutral": "",
}

# Ordered from largest to smallest tier, unknown last
MARKET_CAP_COLOR_MAP = {
    MarketCapCategory.LARGE_CAP.value: Colors.blue,
    MarketCapCategory.MID_CAP.value: Colors.teal,
    MarketCapCategory.SMALL_CAP.value: Colors.orange,
    MarketCapCategory.MICRO_CAP.value: Colors.purple,
    MarketCapCategory.UNKNOWN.value: Colors.light_gray,
}
