# utils/helpers.py
# Small helpers for coercing loosely typed tool arguments.


def clamp_int(value, default: int, minimum: int, maximum: int) -> int:
    """
    Coerce value to an int within [minimum, maximum].
    Missing or non-numeric values fall back to default.
    """
    if value is None or isinstance(value, bool):
        number = default
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            try:
                number = int(float(str(value).strip()))
            except (ValueError, OverflowError):
                number = default
    return max(minimum, min(number, maximum))


def truncate(text: str, limit: int, marker: str = "...") -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + marker
