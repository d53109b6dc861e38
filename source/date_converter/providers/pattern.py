"""This module compiles letter-based date patterns into immutable tokens.

Pattern letters follow the widely used `yyyy-MM-dd` convention: ASCII letters
are reserved for fields, anything else is a literal, single quotes escape
literal text, square brackets delimit optional sections and `p` pads the next
element. Tokenizing is pure and has no side effects, so it can be used from
configuration validators as well as from the formatter.
"""

from __future__ import annotations

from dataclasses import dataclass

from date_converter.exceptions.conversion import PatternError
from date_converter.models.enums import Field

LETTER_FIELDS: dict[str, Field] = {
    "G": Field.ERA,
    "u": Field.YEAR,
    "y": Field.YEAR_OF_ERA,
    "Y": Field.WEEK_BASED_YEAR,
    "M": Field.MONTH_OF_YEAR,
    "L": Field.MONTH_OF_YEAR,
    "d": Field.DAY_OF_MONTH,
    "D": Field.DAY_OF_YEAR,
    "Q": Field.QUARTER_OF_YEAR,
    "q": Field.QUARTER_OF_YEAR,
    "w": Field.WEEK_OF_WEEK_BASED_YEAR,
    "W": Field.WEEK_OF_MONTH,
    "F": Field.ALIGNED_WEEK_OF_MONTH,
    "E": Field.DAY_OF_WEEK,
    "e": Field.LOCALIZED_DAY_OF_WEEK,
    "c": Field.LOCALIZED_DAY_OF_WEEK,
    "a": Field.AMPM_OF_DAY,
    "B": Field.DAY_PERIOD,
    "h": Field.CLOCK_HOUR_OF_AMPM,
    "K": Field.HOUR_OF_AMPM,
    "k": Field.CLOCK_HOUR_OF_DAY,
    "H": Field.HOUR_OF_DAY,
    "m": Field.MINUTE_OF_HOUR,
    "s": Field.SECOND_OF_MINUTE,
    "S": Field.FRACTION_OF_SECOND,
    "A": Field.MILLI_OF_DAY,
    "n": Field.NANO_OF_SECOND,
    "N": Field.NANO_OF_DAY,
    "V": Field.ZONE_ID,
    "v": Field.ZONE_NAME,
    "z": Field.ZONE_NAME,
    "O": Field.OFFSET,
    "X": Field.OFFSET,
    "x": Field.OFFSET,
    "Z": Field.OFFSET,
}

ALLOWED_COUNTS: dict[str, tuple[int, ...]] = {
    "G": (1, 2, 3, 4, 5),
    "u": tuple(range(1, 20)),
    "y": tuple(range(1, 20)),
    "Y": tuple(range(1, 20)),
    "M": (1, 2, 3, 4, 5),
    "L": (1, 2, 3, 4, 5),
    "d": (1, 2),
    "D": (1, 2, 3),
    "Q": (1, 2, 3, 4, 5),
    "q": (1, 2, 3, 4, 5),
    "w": (1, 2),
    "W": (1,),
    "F": (1,),
    "E": (1, 2, 3, 4, 5),
    "e": (1, 2, 3, 4, 5),
    "c": (1, 3, 4, 5),
    "a": (1,),
    "B": (1, 4, 5),
    "h": (1, 2),
    "K": (1, 2),
    "k": (1, 2),
    "H": (1, 2),
    "m": (1, 2),
    "s": (1, 2),
    "S": tuple(range(1, 10)),
    "A": tuple(range(1, 20)),
    "n": tuple(range(1, 20)),
    "N": tuple(range(1, 20)),
    "V": (2,),
    "v": (1, 4),
    "z": (1, 2, 3, 4),
    "O": (1, 4),
    "X": (1, 2, 3, 4, 5),
    "x": (1, 2, 3, 4, 5),
    "Z": (1, 2, 3, 4, 5),
}

PAD_LETTER = "p"
RESERVED_CHARS = frozenset("#{}")


@dataclass(frozen=True)
class LiteralToken:
    """Text that is printed and matched verbatim."""

    text: str

    def __str__(self) -> str:
        """Returns a quoted rendering of the literal."""
        return repr(self.text)


@dataclass(frozen=True)
class FieldToken:
    """A run of identical pattern letters referring to one field."""

    letter: str
    count: int
    field: Field

    def __str__(self) -> str:
        """Returns the field name together with the letters it came from."""
        return f"{self.field}({self.letter * self.count})"


@dataclass(frozen=True)
class PadToken:
    """Pads the wrapped token with leading spaces up to a fixed width."""

    width: int
    token: Token

    def __str__(self) -> str:
        """Returns the padded token and its width."""
        return f"Pad({self.token},{self.width})"


@dataclass(frozen=True)
class OptionalToken:
    """A section that is only printed, or matched, when it can be."""

    tokens: tuple[Token, ...]

    def __str__(self) -> str:
        """Returns the section contents between brackets."""
        return "[" + "".join(str(token) for token in self.tokens) + "]"


Token = LiteralToken | FieldToken | PadToken | OptionalToken


def _is_pattern_letter(char: str) -> bool:
    """Checks whether a character is reserved as a pattern letter.

    Args:
        char: A single character.

    Returns:
        True for ASCII letters, False otherwise.
    """
    return ("A" <= char <= "Z") or ("a" <= char <= "z")


def _field_token(letter: str, count: int, pattern: str) -> FieldToken:
    """Validates a run of letters and builds its field token.

    Args:
        letter: The pattern letter.
        count: How many times the letter is repeated.
        pattern: The whole pattern, for error reporting.

    Returns:
        The field token.

    Raises:
        PatternError: If the letter is unknown or repeated too many times.
    """
    field = LETTER_FIELDS.get(letter)
    if field is None:
        raise PatternError(f"Unknown pattern letter: {letter}", pattern)
    if count not in ALLOWED_COUNTS[letter]:
        raise PatternError(f"Invalid number of pattern letters '{letter * count}' for {field}", pattern)
    return FieldToken(letter=letter, count=count, field=field)


def _read_quoted(pattern: str, start: int) -> tuple[str, int]:
    """Reads a quoted literal that starts at the given index.

    Args:
        pattern: The whole pattern.
        start: The index of the opening quote.

    Returns:
        The unescaped literal text and the index just after the closing quote.

    Raises:
        PatternError: If the closing quote is missing.
    """
    chars: list[str] = []
    index = start + 1
    while index < len(pattern):
        if pattern[index] == "'":
            if index + 1 < len(pattern) and pattern[index + 1] == "'":
                chars.append("'")
                index += 2
                continue
            return "".join(chars), index + 1
        chars.append(pattern[index])
        index += 1
    raise PatternError(f"Pattern ends with an incomplete string literal: {pattern}", pattern)


def _append(tokens: list[Token], token: Token) -> None:
    """Appends a token, merging consecutive unpadded literals.

    Args:
        tokens: The token list of the current section.
        token: The token to append.
    """
    if isinstance(token, LiteralToken) and tokens and isinstance(tokens[-1], LiteralToken):
        tokens[-1] = LiteralToken(tokens[-1].text + token.text)
        return
    tokens.append(token)


def compile_pattern(pattern: str) -> tuple[Token, ...]:
    """Tokenizes and validates a pattern string.

    Args:
        pattern: The pattern, for example `uuuu/MM/dd` or `yyyy年MM月dd日 (E)`.

    Returns:
        The compiled tokens, in pattern order.

    Raises:
        PatternError: If the pattern is malformed.
        TypeError: If the pattern is not a string.
    """
    if not isinstance(pattern, str):
        raise TypeError(f"Pattern must be a string, got {type(pattern).__name__}")

    sections: list[list[Token]] = [[]]
    pad_width = 0
    index = 0

    while index < len(pattern):
        char = pattern[index]
        token: Token

        if _is_pattern_letter(char):
            end = index
            while end < len(pattern) and pattern[end] == char:
                end += 1
            count = end - index
            index = end
            if char == PAD_LETTER:
                if index >= len(pattern) or pattern[index] in "[]":
                    raise PatternError("Pad letter 'p' must be followed by a valid pad pattern", pattern)
                pad_width = count
                continue
            token = _field_token(char, count, pattern)
        elif char == "'":
            if index + 1 < len(pattern) and pattern[index + 1] == "'":
                token = LiteralToken("'")
                index += 2
            else:
                text, index = _read_quoted(pattern, index)
                token = LiteralToken(text)
        elif char == "[":
            sections.append([])
            index += 1
            continue
        elif char == "]":
            if len(sections) == 1:
                raise PatternError("Pattern invalid as it contains ] without previous [", pattern)
            token = OptionalToken(tuple(sections.pop()))
            index += 1
        elif char in RESERVED_CHARS:
            raise PatternError(f"Pattern includes reserved character: '{char}'", pattern)
        else:
            token = LiteralToken(char)
            index += 1

        if pad_width:
            sections[-1].append(PadToken(width=pad_width, token=token))
            pad_width = 0
        else:
            _append(sections[-1], token)

    while len(sections) > 1:
        optional = OptionalToken(tuple(sections.pop()))
        sections[-1].append(optional)

    return tuple(sections[0])


def iter_fields(tokens: tuple[Token, ...]) -> list[FieldToken]:
    """Flattens a token tree into its field tokens.

    Args:
        tokens: Compiled tokens.

    Returns:
        Every field token, including the ones inside pads and optional sections.
    """
    fields: list[FieldToken] = []
    for token in tokens:
        if isinstance(token, FieldToken):
            fields.append(token)
        elif isinstance(token, PadToken):
            fields.extend(iter_fields((token.token,)))
        elif isinstance(token, OptionalToken):
            fields.extend(iter_fields(token.tokens))
    return fields
