"""
Base-52 counters for Fugue positions.

Counters use only letters, ordered by code point: A-Z are digits 0-25 and
a-z are digits 26-51. Since 'A' < 'Z' < 'a' < 'z' in byte order, plain string
comparison of equal-length encodings matches numeric comparison.

Digits 0-9 and the separators ',' and '.' never appear in a counter; they are
left free for waypoint names (see position_utils).
"""

BASE = 52
HALF = BASE // 2  # 26, size of each letter range

# Code point offsets: digit 0 -> 'A' (65), digit 26 -> 'a' (97)
UPPER_OFFSET = ord("A")
LOWER_OFFSET = ord("a") - HALF  # 71


def stringify_base52(n: int) -> str:
    """
    Encode a non-negative integer as a base-52 letter string.

    Negative input yields an empty string.

    Examples:
        >>> stringify_base52(0)
        'A'
        >>> stringify_base52(100)
        'Bw'
        >>> stringify_base52(55555555)
        'HfFkD'
    """
    if n == 0:
        return "A"

    chars = []
    while n > 0:
        digit = n % BASE
        offset = LOWER_OFFSET if digit >= HALF else UPPER_OFFSET
        chars.append(chr(offset + digit))
        n //= BASE
    return "".join(reversed(chars))


def parse_base52(s: str) -> int:
    """
    Parse a base-52 letter string back into an integer.

    Examples:
        >>> parse_base52('Bw')
        100
    """
    n = 0
    for char in s:
        code = ord(char)
        digit = code - (LOWER_OFFSET if code >= ord("a") else UPPER_OFFSET)
        n = BASE * n + digit
    return n


def stringify_short_name(n: int) -> str:
    """
    Encode a waypoint back-reference index.

    Base 52 for all but the last digit, which is a decimal digit, so a short
    name always ends in 0-9. Negative input falls back to 'A'.

    Examples:
        >>> stringify_short_name(7)
        '7'
        >>> stringify_short_name(10)
        'B0'
        >>> stringify_short_name(2222)
        'EO2'
    """
    if n < 0:
        return "A"
    if n < 10:
        return str(n)
    return stringify_base52(n // 10) + str(n % 10)


def _digit_count(n: int) -> int:
    """Number of base-52 digits in n (0 counts as one digit)."""
    digits = 1
    limit = BASE
    while limit <= n:
        limit *= BASE
        digits += 1
    return digits


def next_odd_value_seq(n: int) -> int:
    """
    Return the value two steps after n in the counter sequence.

    The sequence enumerates 26**d numbers with d base-52 digits for each
    d >= 1: A..Z, then aA..mz, then nAA..tZz, and so on. Only lowercase
    leading digits open a new length, so no encoding is a prefix of another
    and encodings stay in lexicographic order. The n-th value has O(log n)
    digits.

    Positions only ever store the odd (right-side) member of each pair; the
    even value in between is the left-side marker used by left_version.

    Examples:
        >>> next_odd_value_seq(1)
        3
        >>> next_odd_value_seq(25)  # 'Z', last one-digit value
        1353
    """
    d = _digit_count(n)
    # Last d-digit value in the sequence.
    if n == BASE ** d - HALF ** d - 1:
        # n -> (n + 1) * 52 opens the next length, then + 1.
        return (n + 1) * BASE + 1
    return n + 2
