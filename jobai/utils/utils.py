import math
from fractions import Fraction
from typing import Iterable, Optional, Union

Number = Union[int, Fraction]


def extract_json_object(s: str) -> Optional[str]:
    """Return the first balanced ``{...}`` substring of ``s``, or None.

    Braces inside JSON string literals are ignored so that values such as
    ``"use {curly} quotes"`` do not end the object early.
    """
    if not s:
        return None
    start = s.find("{")
    while start >= 0:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(s)):
            ch = s[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return s[start:i + 1]
        # unbalanced from this brace; try the next opening brace
        start = s.find("{", start + 1)
    return None


def round_half_up(value: Number) -> int:
    # Python's round() is banker's rounding; scores round .5 upwards
    return math.floor(Fraction(value) + Fraction(1, 2))


def rounded_mean(values: Iterable[int]) -> int:
    items = list(values)
    if not items:
        return 0
    return round_half_up(Fraction(sum(items), len(items)))


def clamp(value: Number, low: int = 0, high: int = 100) -> Number:
    return max(low, min(high, value))
