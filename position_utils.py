"""
Position string grammar for Fugue positions.

A position is a chain of (waypoint name, counter) pairs read from the root:

    alice.B,bob.D0F
    ^^^^^^          first name: "<client_id>."
          ^         counter 'B'
           ^^^^^    long name: ",<client_id>."
                ^   counter 'D'
                 ^  short name '0' (back-reference to an earlier waypoint)
                  ^ counter 'F'

Waypoint names always end in '.' or a decimal digit, and counters are letters
only, so the structure can be recovered from the string alone.
"""

import logging
from typing import Optional

from base52 import parse_base52, stringify_base52

logger = logging.getLogger(__name__)

# Less than every position
FIRST = ""
# Greater than every position
LAST = "~"

WAYPOINT_SEPARATORS = ",."


class EmptyClientIDError(ValueError):
    """Raised when a client ID has nothing left after sanitization."""


def _is_waypoint_char(char: str) -> bool:
    return char == "." or "0" <= char <= "9"


def get_prefix(position: str) -> Optional[str]:
    """
    Return the position without its final counter.

    The prefix runs through the last waypoint character ('.' for long names,
    a digit for short names). The final character is always part of the
    counter, so it is never considered.

    Returns None when there is no waypoint character, e.g. for strings that
    were not produced by Fugue.

    Examples:
        >>> get_prefix('alice.B')
        'alice.'
        >>> get_prefix('alice.B,bob.D0F')
        'alice.B,bob.D0'
        >>> get_prefix('ABC') is None
        True
    """
    for i in range(len(position) - 2, -1, -1):
        if _is_waypoint_char(position[i]):
            return position[: i + 1]
    return None


def left_version(position: str) -> str:
    """
    Return the left-side marker variant of a position.

    Positions end in an odd counter; subtracting one from it (equivalently,
    from its last base-52 digit) gives the ancestor for the position's left
    descendants, which sorts just before the position itself.

    Examples:
        >>> left_version('alice.P')
        'alice.O'
        >>> left_version('')
        ''
    """
    if not position:
        return ""
    last = parse_base52(position[-1])
    return position[:-1] + stringify_base52(last - 1)


def sanitize_client_id(client_id: str) -> str:
    """
    Make a client ID safe to embed in waypoint names.

    Removes the reserved separators ',' and '.', then drops trailing
    characters until the ID compares below LAST.

    Raises:
        EmptyClientIDError: If nothing is left after sanitizing
    """
    sanitized = client_id.replace(",", "").replace(".", "")

    if len(sanitized) != len(client_id):
        logger.warning(f"client_id contains invalid characters: {client_id!r}")

    while sanitized >= LAST:
        logger.warning(f"client_id must be less than {LAST!r}: {sanitized!r}")
        sanitized = sanitized[:-1]

    if not sanitized:
        raise EmptyClientIDError(f"client_id cannot be empty (got {client_id!r})")

    return sanitized


def is_valid_position(position: Optional[str]) -> bool:
    """
    Check whether a string looks like a position produced by Fugue.

    Only checks the outer shape: strictly between FIRST and LAST, contains a
    waypoint, and ends with a counter letter.
    """
    if not position or not isinstance(position, str):
        return False
    if position >= LAST:
        return False
    if not position[-1].isascii() or not position[-1].isalpha():
        return False
    return get_prefix(position) is not None
