"""Identifier case conversion."""

SEPARATOR = "_"
PLACEHOLDER = "X"


def _is_ascii_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_ascii_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _continues_word(c: str) -> bool:
    return _is_ascii_lower(c) or _is_ascii_digit(c)


def to_snake_case(name: str) -> str:
    """Convert CamelCase to snake_case.

    Every uppercase letter after the first character is preceded by an
    underscore, and all letters are lowered. Nothing else changes.
    """
    out: list[str] = []
    for i, c in enumerate(name):
        if c.isupper() and i > 0:
            out.append(SEPARATOR)
        out.append(c.lower())
    return "".join(out)


def to_camel_case(name: str) -> str:
    """Convert snake_case to CamelCase.

    The name is processed a word at a time, where words start at an underscore
    or an uppercase letter and digits continue the current word. An underscore
    followed by a lowercase letter or digit is dropped and the next letter is
    capitalised. A leading underscore becomes "X" so the result stays a valid
    constant name, e.g. "_my_field_name_2" becomes "XMyFieldName2".

    Acronyms and digit runs are kept as they are, so this is not an exact
    inverse of to_snake_case.
    """
    if not name:
        return ""

    out: list[str] = []
    i = 0
    if name[0] == SEPARATOR:
        out.append(PLACEHOLDER)
        i += 1

    while i < len(name):
        c = name[i]
        if c == SEPARATOR and i + 1 < len(name) and _continues_word(name[i + 1]):
            i += 1
            continue

        # First character of a word is never lower case
        out.append(c.upper() if _is_ascii_lower(c) else c)
        while i + 1 < len(name) and _continues_word(name[i + 1]):
            i += 1
            out.append(name[i])
        i += 1

    return "".join(out)
