"""
Compilation of delimited regular expressions.

Pattern property keys are written in the delimited form ``/body/flags``
(for example ``/[A-Z]{3}/`` or ``#^x-#i``). The delimiter is the first
non-whitespace character; bracket delimiters close with their partner.
Modifiers i, m, s and x map to the matching ``re`` flags; the remaining
PCRE modifiers (u, A, D, S, U, X, J, n) are accepted and ignored.
The body is compiled with the ``re`` module so that invalid keys are
rejected when they are registered rather than when the schema is used.
"""

from __future__ import annotations

import logging
import re

from .errors import InvalidSchemaValueError

logger = logging.getLogger(__name__)

_BRACKET_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}

_MODIFIER_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,  # str patterns are already Unicode aware
    # Accepted PCRE modifiers with no `re` counterpart. They change how a
    # pattern matches, not whether it compiles.
    "A": 0,
    "D": 0,
    "S": 0,
    "U": 0,
    "X": 0,
    "J": 0,
    "n": 0,
}


class PatternSyntaxError(Exception):
    """Raised when a delimited pattern is malformed before reaching ``re``."""


def _find_closing(pattern: str, start: int, delimiter: str) -> int:
    """Return the index of the closing delimiter, or -1 if there is none."""
    closing = _BRACKET_DELIMITERS.get(delimiter)
    depth = 1
    i = start
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            i += 2
            continue
        if closing is None:
            if char == delimiter:
                return i
        elif char == closing:
            depth -= 1
            if depth == 0:
                return i
        elif char == delimiter:
            depth += 1
        i += 1
    return -1


def split_pattern(pattern: str) -> tuple[str, str]:
    """Split a delimited pattern into its body and modifier string.

    Raises:
        PatternSyntaxError: If the delimiters are missing or invalid
    """
    stripped = pattern.lstrip()
    if not stripped:
        raise PatternSyntaxError("Empty regular expression")

    delimiter = stripped[0]
    if delimiter.isalnum() or delimiter in ("\\", "\x00"):
        raise PatternSyntaxError("Delimiter must not be alphanumeric, backslash, or NUL")

    end = _find_closing(stripped, 1, delimiter)
    if end < 0:
        if delimiter in _BRACKET_DELIMITERS:
            raise PatternSyntaxError(f"No ending matching delimiter '{_BRACKET_DELIMITERS[delimiter]}' found")
        raise PatternSyntaxError(f"No ending delimiter '{delimiter}' found")

    return stripped[1:end], stripped[end + 1 :]


def _modifier_flags(modifiers: str) -> int:
    flags = 0
    for modifier in modifiers:
        if modifier in " \n\r":
            continue
        if modifier not in _MODIFIER_FLAGS:
            raise PatternSyntaxError(f"Unknown modifier '{modifier}'")
        flags |= _MODIFIER_FLAGS[modifier]
    return flags


def compile_pattern(pattern: str) -> re.Pattern:
    """Compile a delimited pattern such as ``/[A-Z]{3}/i``.

    Args:
        pattern: The delimited regular expression

    Returns:
        The compiled pattern object

    Raises:
        InvalidSchemaValueError: If the pattern cannot be compiled. The message
            embeds the diagnostic of the delimiter check or of ``re``.
    """
    try:
        body, modifiers = split_pattern(pattern)
        return re.compile(body, _modifier_flags(modifiers))
    except (PatternSyntaxError, re.error) as e:
        logger.debug("Rejected pattern %r: %s", pattern, e)
        raise InvalidSchemaValueError(f'Regex is invalid. Message: "{e}"') from e
