# This project was developed with assistance from AI tools.
"""Free-text money input parsing.

``is_string_number`` is the only validation gate in the calculator: a field
either reads as a number or it is shown as "Not a number" and everything that
depends on it is left out. The accepted grammar is that of a browser's
``Number()`` coercion, so the same text behaves identically in the form and
on the server.
"""

import math
import re

# WhiteSpace and LineTerminator code points stripped by String.prototype.trim.
_JS_WHITESPACE = (
    "\t\n\v\f\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_DECIMAL = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?|\.[0-9]+(?:[eE][+-]?[0-9]+)?|Infinity)",
    re.ASCII,
)
_RADIX = {
    "0x": (re.compile(r"0[xX][0-9a-fA-F]+"), 16),
    "0o": (re.compile(r"0[oO][0-7]+"), 8),
    "0b": (re.compile(r"0[bB][01]+"), 2),
}


class NotANumberError(AssertionError):
    """Raised when numeric text is required but the input gate was skipped."""


def js_trim(value: str) -> str:
    return value.strip(_JS_WHITESPACE)


def to_number(value: str) -> float:
    """Coerce text to a float; ``nan`` when it does not parse."""
    text = js_trim(value)
    if not text:
        return 0.0

    prefix = text[:2].lower()
    if prefix in _RADIX:
        pattern, base = _RADIX[prefix]
        if pattern.fullmatch(text):
            try:
                return float(int(text[2:], base))
            except OverflowError:
                return math.inf
        return math.nan

    if not _DECIMAL.fullmatch(text):
        return math.nan
    return float(text.replace("Infinity", "inf"))


def is_string_number(value: str) -> bool:
    """True when the text is non-blank and reads as a finite number."""
    if js_trim(value) == "":
        return False
    return math.isfinite(to_number(value))


def number_or_default(value: str, default: float) -> float:
    return to_number(value) if is_string_number(value) else default


def assert_number(value: str) -> float:
    """Return the numeric value of text already accepted by ``is_string_number``."""
    if not is_string_number(value):
        raise NotANumberError(f'"{value}" is not a number')
    return to_number(value)
