"""Textbook RSA in an Academic Sense, one byte at a time.

Provides RSA key generation with Solovay-Strassen certified primes and a modulus of exactly the requested size,
a byte-wise stream cipher writing hexadecimal text, key persistence to PEM and a SHA-512 file digest.

Typical usage example:

    fk = RSAFullKey.generate(1024)
    ciphertext = encrypt_bytes(b"Hi there!", fk.e, fk.mod)
    clear = decrypt_text(ciphertext, fk.d, fk.mod)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsadigest.cryptor import decrypt_stream
from rsadigest.cryptor import decrypt_text
from rsadigest.cryptor import encrypt_bytes
from rsadigest.cryptor import encrypt_stream
from rsadigest.cryptor import transform_byte
from rsadigest.digest import sha512_digest
from rsadigest.exceptions import ArithmeticInconsistencyError
from rsadigest.exceptions import ExponentMismatchWarning
from rsadigest.exceptions import InvalidArgumentError
from rsadigest.exceptions import RetryLimitExceededError
from rsadigest.exceptions import RSADigestError
from rsadigest.keygen import check_prime
from rsadigest.keygen import derive_exponents
from rsadigest.keygen import generate_n_p_q
from rsadigest.rsa import import_any
from rsadigest.rsa import RSAFullKey
from rsadigest.rsa import RSAKey
from rsadigest.rsa import RSAPrivKey
from rsadigest.rsa import RSAPubKey

__version__ = "0.1.0"
__all__ = [
    "RSAFullKey",
    "RSAKey",
    "RSAPubKey",
    "RSAPrivKey",
    "import_any",
    "check_prime",
    "generate_n_p_q",
    "derive_exponents",
    "transform_byte",
    "encrypt_stream",
    "decrypt_stream",
    "encrypt_bytes",
    "decrypt_text",
    "sha512_digest",
    "RSADigestError",
    "InvalidArgumentError",
    "ArithmeticInconsistencyError",
    "RetryLimitExceededError",
    "ExponentMismatchWarning",
]
