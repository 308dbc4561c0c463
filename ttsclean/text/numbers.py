"""English number spelling helpers for years and version segments.

Word forms come from `num2words`; hyphenated tens (`twenty-one`) are read
with a space so every token is a plain word.
"""

from __future__ import annotations

from num2words import num2words


def _words(value: int) -> str:
    """Spell one non-negative integer in English with spaces instead of hyphens."""

    return num2words(value, lang="en").replace("-", " ")


def two_digit_words(value: int) -> str:
    """Spell 1-99 as tens plus ones or a teen word; 0 yields an empty string."""

    if value == 0:
        return ""
    return _words(value)


def number_to_words(value: int) -> str:
    """Spell 0-9999 in English words; larger values are returned as digits.

    Hundreds are joined without `and` (`three hundred five`).
    """

    if value == 0:
        return "zero"
    if value >= 10_000:
        return str(value)

    thousands, rest = divmod(value, 1000)
    hundreds, remainder = divmod(rest, 100)
    parts: list[str] = []
    if thousands:
        parts.extend((_words(thousands), "thousand"))
    if hundreds:
        parts.extend((_words(hundreds), "hundred"))
    if remainder:
        parts.append(two_digit_words(remainder))
    return " ".join(parts)


def year_to_words(year: int, separator: str = " ", insert_and: bool = True) -> str:
    """Spell a year between 1000 and 2099 the American way.

    1100-1999 read as `<century> hundred` (`nineteen hundred and ninety four`),
    1000-1099 and 2000-2099 as `<one|two> thousand` (`two thousand and three`).
    Out-of-range values are returned as digits.
    """

    if year < 1000 or year > 2099:
        return str(year)

    century, remainder = divmod(year, 100)
    if century in (10, 20):
        head = f"{_words(century // 10)} thousand"
    else:
        head = f"{two_digit_words(century)} hundred"

    parts = [head]
    if remainder:
        tail = two_digit_words(remainder)
        parts.append(f"and {tail}" if insert_and else tail)
    return separator.join(parts)
