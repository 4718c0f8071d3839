"""
Content fingerprints for published file names.

A fingerprint is a fast non-cryptographic 64-bit hash of the file bytes,
written in base 36. It is a cache key, not a security boundary.
"""

from pathlib import Path

import xxhash

from copy_with_hash.constants import BASE_36, XXH64_SEED
from copy_with_hash.models import FingerprintFunction


def int_to_base(value: int, alphabet: str = BASE_36) -> str:
    """
    Encode a non-negative integer with the given alphabet.

    Zero encodes to the first symbol. No padding is applied.

    Args:
        value: Integer to encode
        alphabet: Digit symbols, lowest first

    Returns:
        Encoded string
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")
    base = len(alphabet)
    if base < 2:
        raise ValueError("Alphabet needs at least two symbols")

    digits = []
    while True:
        value, remainder = divmod(value, base)
        digits.append(alphabet[remainder])
        if value == 0:
            break
    return "".join(reversed(digits))


def xxh64_fingerprint(data: bytes) -> str:
    """Default fingerprint: XXH64 (seed 0) encoded in base 36."""
    return int_to_base(xxhash.xxh64_intdigest(data, seed=XXH64_SEED), BASE_36)


def fingerprint_file(
    path: Path, hash_function: FingerprintFunction | None = None
) -> str:
    """
    Fingerprint a file's content.

    Args:
        path: File to read
        hash_function: Fingerprint function (defaults to xxh64_fingerprint)

    Returns:
        Fingerprint string
    """
    hash_function = hash_function or xxh64_fingerprint
    return hash_function(Path(path).read_bytes())


__all__ = ["int_to_base", "xxh64_fingerprint", "fingerprint_file"]
