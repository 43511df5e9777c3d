import math


def fmt_rm(x):
    """Ringgit, no sen: 2533.43 -> 'RM2,533'. Halves round away from zero."""
    try:
        amount = float(x)
        whole = math.floor(abs(amount) + 0.5)
    except (TypeError, ValueError, OverflowError):
        return "-"
    sign = "-" if amount < 0 and whole > 0 else ""
    return f"{sign}RM{whole:,.0f}"

def fmt_pct(x):
    try:
        return f"{float(x):.1f}%"
    except (TypeError, ValueError):
        return "-"

def fmt_rate(x):
    """Interest rate as quoted by banks: 4.25 -> '4.25%', 4.4 -> '4.4%'."""
    try:
        return f"{float(x):g}%"
    except (TypeError, ValueError):
        return "-"
