"""Arbitrary-precision integer helpers the rest of the package is layered on.

Python integers already are arbitrary precision, so most operations are the builtins (`pow` for modular
exponentiation and inversion, `math.gcd`). What is added here is the Jacobi symbol, borrowed from sympy, and the
two random sampling primitives, which always draw from an explicit source so callers can seed or share it.

Typical usage example:

    rng = random.Random(1234)
    p = random_bits(16, rng)
    a = random_below(p, rng)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import random
import secrets

from sympy.functions.combinatorial.numbers import jacobi_symbol

from rsadigest.exceptions import ArithmeticInconsistencyError
from rsadigest.exceptions import InvalidArgumentError

# SystemRandom keeps no state of its own, sharing it between threads is fine.
DEFAULT_RANDOM: random.Random = secrets.SystemRandom()


def resolve_random(rng: random.Random | None) -> random.Random:
    """Return `rng`, or the process-wide OS-backed source if none was given."""
    return DEFAULT_RANDOM if rng is None else rng


def random_below(bound: int, rng: random.Random | None = None) -> int:
    """Draw an integer uniformly from `[0, bound)`.

    Args:
        bound: Exclusive upper bound. Must be positive.
        rng: Random source. Defaults to `DEFAULT_RANDOM`.

    Returns:
        The sampled integer.

    Raises:
        InvalidArgumentError: If `bound` is not positive.
    """
    if bound < 1:
        raise InvalidArgumentError("Sampling bound must be positive.")
    return resolve_random(rng).randrange(bound)


def random_bits(bits: int, rng: random.Random | None = None) -> int:
    """Draw an integer of exactly `bits` bits, i.e. with the top bit set.

    Args:
        bits: Bit length of the result. Must be positive.
        rng: Random source. Defaults to `DEFAULT_RANDOM`.

    Returns:
        An integer `x` with `x.bit_length() == bits`.

    Raises:
        InvalidArgumentError: If `bits` is not positive.
    """
    if bits < 1:
        raise InvalidArgumentError("Bit length must be positive.")
    return resolve_random(rng).getrandbits(bits) | (1 << (bits - 1))


def jacobi(a: int, n: int) -> int:
    """Jacobi symbol (a/n) for odd positive `n`, one of -1, 0 or 1."""
    return jacobi_symbol(a, n)


def gcd(a: int, b: int) -> int:
    return math.gcd(a, b)


def invert(a: int, m: int) -> int:
    """Modular inverse of `a` modulo `m`.

    Raises:
        ArithmeticInconsistencyError: If `a` has no inverse modulo `m`.
    """
    try:
        return pow(a, -1, m)
    except ValueError as exc:
        raise ArithmeticInconsistencyError(f"{a} is not invertible modulo {m}.") from exc
