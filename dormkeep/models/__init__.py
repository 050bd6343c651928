def format_baht(satang: int) -> str:
    """Format satang as a baht string: 339000 -> '฿3,390.00'"""
    baht = satang / 100
    return f"฿{baht:,.2f}"


def parse_baht(text: str) -> int | None:
    """Parse a baht amount string into satang. Returns None on invalid input.

    Accepts formats like '3000', '3000.50', '3,000.50', '฿3,000'.
    """
    text = text.strip().lstrip("฿").strip()
    if not text:
        return None
    text = text.replace(",", "")
    try:
        return int(round(float(text) * 100))
    except ValueError:
        return None
