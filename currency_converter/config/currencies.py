"""
Currency Configuration - Single source of truth for the built-in rate table.

Rates are expressed against the base currency: the base currency's rate is
always 1.0, and converting an amount goes source -> base -> target.
"""

# Base currency every conversion pivots through
BASE_CURRENCY = "INR"

# Built-in exchange rates (used when no rates file or database is configured)
DEFAULT_RATES = {
    "INR": 1.0,  # Base currency
    "USD": 84.08,
    "EUR": 91.51,
}
