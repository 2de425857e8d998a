def format_currency(amount: float, symbol: str = "$") -> str:
    """Format a float as currency string, e.g. '$1,234.56'."""
    return f"{symbol}{amount:,.2f}"


def amount_search_text(amount: float) -> str:
    """Shortest decimal form of an amount, e.g. 20.0 -> '20', 12.5 -> '12.5'."""
    text = repr(float(amount))
    if text.endswith(".0"):
        text = text[:-2]
    return text
