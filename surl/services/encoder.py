"""
Identifier encoding.

Maps the allocation counter (an unsigned 64-bit integer) to the short
identifier handed out to callers:

    counter 0   -> "/0"
    counter 61  -> "/Z"
    counter 62  -> "/01"

Symbols are emitted least-significant first, so identifiers do not sort
in counter order. The store is only ever queried by exact key, so this
does not matter.
"""

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE = len(ALPHABET)

# Marks a key as a generated identifier (and doubles as the URL path separator)
ID_PREFIX = "/"

MAX_COUNTER = 2 ** 64 - 1

_ALPHABET_SET = frozenset(ALPHABET)


def encode(counter: int) -> str:
    """
    Encode a counter value as a prefixed radix-62 identifier.

    Args:
        counter: Value in the range 0..MAX_COUNTER

    Returns:
        ID_PREFIX followed by the radix-62 digits, least significant first

    Raises:
        ValueError: If counter is outside the unsigned 64-bit range
    """
    if counter < 0 or counter > MAX_COUNTER:
        raise ValueError(f"Counter {counter} is outside the unsigned 64-bit range")

    symbols = [ID_PREFIX]
    while counter >= BASE:
        symbols.append(ALPHABET[counter % BASE])
        counter //= BASE
    symbols.append(ALPHABET[counter])

    return "".join(symbols)


def is_identifier(key: str) -> bool:
    """True if key has the shape encode() produces"""
    return (
        len(key) > len(ID_PREFIX)
        and key.startswith(ID_PREFIX)
        and all(ch in _ALPHABET_SET for ch in key[len(ID_PREFIX):])
    )
