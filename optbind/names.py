"""
optbind option-name normalization.

Canonical option names use "_" between words. Declared attribute names may be
written snake_case or camelCase; both resolve to the same canonical name:

    >>> to_option_name("firstPass")
    'first_pass'
    >>> to_option_name("first_pass")
    'first_pass'

The display form swaps the separator for "-" (the default) and the command line
always accepts both spellings of a long name (see spellings()).
"""

SEPARATOR = "_"
DASH = "-"


def to_option_name(name, /):
    """
    Convert a declared attribute name into its canonical option name.

    Rules
    - a name that already contains "_" is kept as-is.
    - a name without "_" but with upper-case letters gets "_" inserted before
      each upper-case letter (a leading one included) and that letter lower-cased.
    - anything else (all lower-case, digits) is kept as-is.
    """
    if not isinstance(name, str):
        raise TypeError("to_option_name() argument must be a string")
    if not name:
        raise ValueError("to_option_name() argument cannot be empty")
    if SEPARATOR in name or name == name.lower():
        return name
    characters = []
    for character in name:
        if character.isupper():
            characters.append(SEPARATOR)
            characters.append(character.lower())
        else:
            characters.append(character)
    return "".join(characters)


def to_display_name(name, /, use_dashes=True):
    """
    Render a canonical option name the way usage messages advertise it.
    """
    return name.replace(SEPARATOR, DASH) if use_dashes else name.replace(DASH, SEPARATOR)


def spellings(name, /):
    """
    Every spelling of a canonical long name accepted on the command line.

    The hyphenated form comes first; the underscore form follows when it differs.
    """
    dashed = name.replace(SEPARATOR, DASH)
    underscored = name.replace(DASH, SEPARATOR)
    return (dashed,) if dashed == underscored else (dashed, underscored)


__all__ = (
    "to_option_name",
    "to_display_name",
    "spellings",
)
