"""Big-integer and hex helpers.

Balances, token ids and block numbers are kept as Python ints, which have
arbitrary precision, and rendered as strings at the API boundary.
"""

from typing import Any, Optional


def parse_big_int(value: Any) -> int:
    """Parse a hex (`0x`-prefixed) or decimal string as an integer.
    
    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, bool):
        raise ValueError(f"Not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not an integer: {value!r}")
    text = value.strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    return int(text, 10)


def normalize_token_id(token_id: Any) -> str:
    """Render a token id in base 10.
    
    Hex-prefixed and decimal strings and plain integers are all accepted. A
    string that cannot be parsed is passed through unchanged; a missing or
    non-numeric value becomes "".
    """
    if isinstance(token_id, int) and not isinstance(token_id, bool):
        return str(token_id)
    if not isinstance(token_id, str) or not token_id:
        return ""
    try:
        return str(parse_big_int(token_id))
    except ValueError:
        return token_id


def block_number_value(block_number: Optional[str]) -> int:
    """Numeric value of a hex block number; missing or non-hex counts as 0."""
    if not isinstance(block_number, str) or not block_number.startswith("0x"):
        return 0
    try:
        return int(block_number, 16)
    except ValueError:
        return 0


def to_hex(value: int) -> str:
    """Encode an integer as a `0x`-prefixed hex quantity."""
    return hex(value)


def format_units(raw: int, decimals: int) -> str:
    """Format a smallest-unit amount as a decimal string without rounding."""
    if decimals <= 0:
        return str(raw)
    sign = "-" if raw < 0 else ""
    whole, fraction = divmod(abs(raw), 10 ** decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0")
    if fraction_text:
        return f"{sign}{whole}.{fraction_text}"
    return f"{sign}{whole}"
