import math
import re

# Leading number, like a browser's parseFloat: "4.5%" -> 4.5, "30 years" -> 30
_LEADING_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_number(text) -> float:
    """Parse a free-text form value. Empty or unparseable input counts as 0."""
    if text is None or isinstance(text, bool):
        return 0.0
    if isinstance(text, (int, float)):
        value = float(text)
        return value if math.isfinite(value) else 0.0
    cleaned = str(text).strip().replace(",", "")
    # Allow an "RM" prefix since users paste amounts straight from listings
    if cleaned[:2].upper() == "RM":
        cleaned = cleaned[2:].strip()
    m = _LEADING_NUMBER.match(cleaned)
    if not m:
        return 0.0
    value = float(m.group(0))
    return value if math.isfinite(value) else 0.0
