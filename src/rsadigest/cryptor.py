"""Textbook RSA applied one byte at a time.

Every byte is raised to the exponent on its own, there is no padding and no chaining, so the same byte always
encrypts to the same token under the same key. The ciphertext is plain text: one hexadecimal token (no prefix, no
fixed width) per byte, each on its own line.

Either exponent of a pair works for either direction, decrypting with the other one restores the input as long as
the modulus is larger than 255.

Typical usage example:

    tokens = encrypt_stream(b"Hi there!", e, n)
    clear = bytes(decrypt_stream(tokens, d, n))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import re
from typing import Iterable, Iterator

_HEX_TOKEN = re.compile(r"[0-9a-fA-F]+")


def transform_byte(value: int, exponent: int, modulus: int) -> int:
    """Performs the core RSA operation on a single unit.

    Args:
        value: The byte value (or ciphertext integer) to transform.
        exponent: Either exponent of the key pair.
        modulus: The key modulus.

    Returns:
        `value ** exponent mod modulus`.
    """
    return pow(value, exponent, modulus)


def encrypt_stream(data: Iterable[int], exponent: int, modulus: int) -> Iterator[str]:
    """Lazily encrypt a stream of bytes.

    Args:
        data: The bytes to encrypt. Anything yielding ints in `[0, 255]`, e.g. `bytes` or a byte reader.
        exponent: Either exponent of the key pair.
        modulus: The key modulus.

    Yields:
        One lowercase hexadecimal token per input byte, terminated by a newline.
    """
    for value in data:
        yield f"{transform_byte(value, exponent, modulus):x}\n"


def _tokens(chunks: Iterable[str]) -> Iterator[str]:
    for chunk in chunks:
        yield from chunk.split()


def decrypt_stream(tokens: Iterable[str], exponent: int, modulus: int) -> Iterator[int]:
    """Lazily decrypt a stream of hexadecimal tokens.

    The input may be chunked arbitrarily as long as no token is split between two chunks, a text file opened for
    reading or the output of `encrypt_stream` both qualify. Decoding stops quietly at the first token that is not
    hexadecimal, which makes a damaged ciphertext indistinguishable from a shorter one.

    Args:
        tokens: Text chunks holding whitespace-separated hexadecimal tokens.
        exponent: The exponent paired with the one used for encryption.
        modulus: The key modulus. Must exceed 255 for the result to be meaningful, which is not checked.

    Yields:
        The low 8 bits of every decrypted token.
    """
    for token in _tokens(tokens):
        if not _HEX_TOKEN.fullmatch(token):
            return
        yield transform_byte(int(token, 16), exponent, modulus) & 0xFF


def encrypt_bytes(data: bytes, exponent: int, modulus: int) -> str:
    """Encrypt `data` in full and return the ciphertext text."""
    return "".join(encrypt_stream(data, exponent, modulus))


def decrypt_text(text: str, exponent: int, modulus: int) -> bytes:
    """Decrypt a complete ciphertext text."""
    return bytes(decrypt_stream([text], exponent, modulus))
