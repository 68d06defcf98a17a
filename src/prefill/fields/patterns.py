"""Translation of date-time patterns into ``strptime`` formats.

Defaults are declared with letter patterns such as ``yyyy-MM-dd HH:mm:ss``.
Runs of the same pattern letter are mapped onto ``strptime`` directives and
text enclosed in single quotes is matched literally (``''`` stands for a single
quote). A format that already contains a ``%`` is taken to be a ``strptime``
format and used as is.
"""

from functools import lru_cache

from prefill.exceptions import ParseError

DEFAULT_DATE_FORMAT = "yyyy-MM-dd"
DEFAULT_TIME_FORMAT = "HH:mm:ss"
DEFAULT_DATE_TIME_FORMAT = "yyyy-MM-dd HH:mm:ss"

_OFFSET = "%z"

# Directive for a run of `letter`, keyed by run length. `None` keys apply to
#   every length not listed explicitly.
_DIRECTIVES: dict[str, dict[int | None, str]] = {
    "y": {2: "%y", None: "%Y"},
    "u": {2: "%y", None: "%Y"},
    "M": {3: "%b", 4: "%B", None: "%m"},
    "L": {3: "%b", 4: "%B", None: "%m"},
    "d": {None: "%d"},
    "D": {None: "%j"},
    "H": {None: "%H"},
    "h": {None: "%I"},
    "m": {None: "%M"},
    "s": {None: "%S"},
    "S": {None: "%f"},
    "a": {None: "%p"},
    "E": {4: "%A", None: "%a"},
    "X": {None: _OFFSET},
    "x": {None: _OFFSET},
    "Z": {None: _OFFSET},
}


def _directive(letter: str, count: int, pattern: str) -> str:
    try:
        by_length = _DIRECTIVES[letter]
    except KeyError:
        raise ParseError(
            f"Unsupported pattern letter '{letter}' in '{pattern}'", format=pattern
        )

    return by_length.get(count, by_length[None])


@lru_cache(maxsize=128)
def to_strptime(pattern: str) -> str:
    """Return the ``strptime`` equivalent of a date-time pattern"""
    if "%" in pattern:
        return pattern

    parts = []
    index, length = 0, len(pattern)
    while index < length:
        char = pattern[index]

        if char == "'":
            # Quoted literal, or an escaped quote when doubled
            end = index + 1
            text = []
            while True:
                if end >= length:
                    raise ParseError(
                        f"Unterminated quote in pattern '{pattern}'", format=pattern
                    )
                if pattern[end] == "'":
                    if end + 1 < length and pattern[end + 1] == "'":
                        text.append("'")
                        end += 2
                        continue
                    break
                text.append(pattern[end])
                end += 1

            parts.append("'" if end == index + 1 else "".join(text))
            index = end + 1
        elif char.isascii() and char.isalpha():
            end = index
            while end < length and pattern[end] == char:
                end += 1
            parts.append(_directive(char, end - index, pattern))
            index = end
        else:
            parts.append(char)
            index += 1

    return "".join(parts)
