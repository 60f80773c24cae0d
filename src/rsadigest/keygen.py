"""Core Key Generation Utility, mainly focusing on the generation of random primes and the key exponents.

Primes are certified with the Solovay-Strassen test and the modulus is produced by rejection sampling, so its bit
length always matches the requested key size exactly. The public exponent is fixed at 65537 and the private one is
its inverse modulo the totient `(p - 1)(q - 1)`.

All randomness is drawn from an explicit `random.Random`-compatible source. Passing a seeded `random.Random`
gives reproducible keys, leaving it out uses the OS-backed `secrets.SystemRandom`.

Typical usage example:

    check_prime(7919)
    n, p, q = generate_n_p_q(1024)
    e, d = derive_exponents(p, q)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import itertools
import logging
import random
from typing import Iterable
import warnings

from rsadigest import bignum
from rsadigest.exceptions import ArithmeticInconsistencyError
from rsadigest.exceptions import ExponentMismatchWarning
from rsadigest.exceptions import InvalidArgumentError
from rsadigest.exceptions import RetryLimitExceededError

logger = logging.getLogger(__name__)

PRIMALITY_TEST_ACCURACY: int = 20
PUBLIC_EXPONENT: int = 65537


def _solovay_strassen(n: int, rounds: int, rng: random.Random) -> bool:
    """Perform the Solovay-Strassen test on an odd `n` greater than 2.

    A witness is accepted as soon as Euler's criterion holds for it. Witnesses failing the criterion do not reject
    the candidate outright, they merely use up a round.

    Args:
        n: Odd integer to be tested.
        rounds: Number of witnesses to try at most.
        rng: Random source for the witnesses.

    Returns:
        True on the first witness satisfying Euler's criterion, False if none did.
    """
    half = (n - 1) // 2
    for _ in range(rounds):
        a = bignum.random_below(n - 2, rng) + 2
        expected = bignum.jacobi(a, n)
        if expected == 0:
            continue
        if expected == -1:
            expected = n - 1
        if pow(a, half, n) == expected:
            return True
    return False


def check_prime(candidate: int, rounds: int = PRIMALITY_TEST_ACCURACY, rng: random.Random | None = None) -> bool:
    """Probabilistic primality check.

    Small and even inputs are settled directly, everything else goes through `_solovay_strassen`.

    Args:
        candidate: The candidate prime to test.
        rounds: Maximum number of Solovay-Strassen witnesses. Must be at least 1.
            Defaults to `PRIMALITY_TEST_ACCURACY`.
        rng: Random source for the witnesses. Defaults to the OS-backed source.

    Returns:
        True if `candidate` is probably prime, False otherwise.

    Raises:
        InvalidArgumentError: If `rounds` is smaller than 1.
    """
    if rounds < 1:
        raise InvalidArgumentError("At least one primality test round is required.")
    if candidate < 2:
        return False
    if candidate == 2:
        return True
    if candidate % 2 == 0:
        return False
    return _solovay_strassen(candidate, rounds, bignum.resolve_random(rng))


def _attempts(max_attempts: int | None) -> Iterable[int]:
    if max_attempts is None:
        return itertools.count()
    if max_attempts < 1:
        raise InvalidArgumentError("max_attempts must be at least 1.")
    return range(max_attempts)


def _check_shape(size: int, rng: random.Random, max_attempts: int | None) -> None:
    """Draw pairs of half-size values until their product has exactly `size` bits."""
    for _ in _attempts(max_attempts):
        product = bignum.random_bits(size // 2, rng) * bignum.random_bits(size // 2, rng)
        if product.bit_length() == size:
            return
    raise RetryLimitExceededError("modulus shape", max_attempts)


def _generate_probable_prime(bits: int, rng: random.Random, max_attempts: int | None) -> int:
    """Draw fresh `bits`-bit candidates until one passes `check_prime`."""
    for _ in _attempts(max_attempts):
        candidate = bignum.random_bits(bits, rng)
        if check_prime(candidate, PRIMALITY_TEST_ACCURACY, rng):
            return candidate
    raise RetryLimitExceededError(f"{bits}-bit prime", max_attempts)


def generate_n_p_q(size: int,
                   rng: random.Random | None = None,
                   max_attempts: int | None = None) -> tuple[int, int, int]:
    """Generate the modulus and its two prime factors.

    Loops until two independently drawn half-size primes multiply to a modulus of exactly `size` bits. The primes
    may coincide, which only happens for the smallest sizes.

    Args:
        size: The bit length of the modulus, aka the key size. Must be positive and even.
        rng: Random source. Defaults to the OS-backed source.
        max_attempts: Optional cap on every rejection loop. Unbounded if None.

    Returns:
        The tuple (n, p, q).

    Raises:
        InvalidArgumentError: If `size` is not a positive even integer.
        RetryLimitExceededError: If `max_attempts` is set and a loop runs out of attempts.
    """
    if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
        raise InvalidArgumentError("Key size must be a positive integer.")
    if size % 2 != 0:
        raise InvalidArgumentError("Key size must be an even number.")
    rng = bignum.resolve_random(rng)
    for attempt in _attempts(max_attempts):
        _check_shape(size, rng, max_attempts)
        p = _generate_probable_prime(size // 2, rng, max_attempts)
        q = _generate_probable_prime(size // 2, rng, max_attempts)
        n = p * q
        if n.bit_length() == size:
            return n, p, q
        logger.debug("Discarding %d-bit modulus candidate (attempt %d).", n.bit_length(), attempt + 1)
    raise RetryLimitExceededError(f"{size}-bit modulus", max_attempts)


def derive_exponents(p: int, q: int) -> tuple[int, int]:
    """Derive the exponent pair for the primes `p` and `q`.

    The public exponent is the fixed 65537, the private one its inverse modulo `(p - 1)(q - 1)`. The result is
    checked once more afterward, but a failing check only warns.

    Args:
        p: Prime 1.
        q: Prime 2.

    Returns:
        The tuple (e, d).

    Raises:
        ArithmeticInconsistencyError: If 65537 is not coprime to the totient.
    """
    phi = (p - 1) * (q - 1)
    e = PUBLIC_EXPONENT
    if bignum.gcd(e, phi) != 1:
        raise ArithmeticInconsistencyError(f"gcd(e, phi) != 1 for e={e}, phi={phi:#x}.")
    d = bignum.invert(e, phi)
    if (e * d) % phi != 1:
        logger.warning("Exponent self-check (e * d) mod phi == 1 failed for phi=%#x.", phi)
        warnings.warn("(e * d) % phi == 1 failed!", ExponentMismatchWarning, stacklevel=2)
    return e, d


def generate_key_factors(size: int,
                         rng: random.Random | None = None,
                         max_attempts: int | None = None) -> tuple[int, int, int, int, int]:
    """Generates all factors of an RSA key.

    Args:
        size: The key size in bits. Must be positive and even.
        rng: Random source. Defaults to the OS-backed source.
        max_attempts: Optional cap on every rejection loop. Unbounded if None.

    Returns:
        The tuple (n, p, q, e, d).
    """
    n, p, q = generate_n_p_q(size, rng, max_attempts)
    e, d = derive_exponents(p, q)
    logger.info("Generated %d-bit key.", size)
    return n, p, q, e, d
