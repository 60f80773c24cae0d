"""SHA-512 message digest of a byte stream.

Sits next to the cipher for the command line tool, none of the key or cipher operations depend on it.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import hashlib
from typing import BinaryIO

CHUNK_SIZE: int = 64 * 1024


def sha512_digest(stream: BinaryIO, chunk_size: int = CHUNK_SIZE) -> bytes:
    """Hash everything remaining in `stream`.

    Args:
        stream: A binary stream opened for reading.
        chunk_size: How many bytes to read at a time.

    Returns:
        The 64 byte SHA-512 digest.
    """
    base = hashlib.sha512()
    for chunk in iter(lambda: stream.read(chunk_size), b""):
        base.update(chunk)
    return base.digest()


def sha512_file(file) -> str:
    """Hex SHA-512 digest of the file at `file`."""
    with open(file, "rb") as f:
        return sha512_digest(f).hex()
