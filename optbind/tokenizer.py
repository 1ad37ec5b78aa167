"""
optbind command-line tokenizer.

Splits one shell-like string into an argument vector, for hosts that only have the
whole command line (an embedded interpreter, a config value, a test fixture).

Rules
- runs of whitespace separate tokens.
- a single- or double-quoted span is part of the current token, whitespace
  included; the quotes themselves are kept. An unterminated span runs to the end
  of the input and gets its closing quote appended.
- there is no escape character.

    >>> tokenize("-d Monday -temp -12.3")
    ['-d', 'Monday', '-temp', '-12.3']
    >>> tokenize("--ld '42.1 9.3'")
    ['--ld', "'42.1 9.3'"]
"""


def tokenize(line, /):
    """
    Split line into tokens on whitespace, keeping quoted spans (and quotes) intact.
    """
    if not isinstance(line, str):
        raise TypeError("tokenize() argument must be a string")

    line = line.strip()
    tokens = []
    token = []
    index = 0
    while index < len(line):
        character = line[index]
        if character in "'\"":
            end = line.find(character, index + 1)
            if end == -1:
                end = len(line)
            token.append(line[index:end])
            token.append(character)
            index = end + 1
        elif character.isspace():
            tokens.append("".join(token))
            token.clear()
            while index < len(line) and line[index].isspace():
                index += 1
        else:
            token.append(character)
            index += 1
    if token:
        tokens.append("".join(token))
    return tokens


__all__ = (
    "tokenize",
)
