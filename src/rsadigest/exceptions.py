"""Exceptions and warnings raised by RSA Digest.

Hard failures derive from `RSADigestError` and also from the builtin exception a caller would otherwise expect
(`ValueError`, `ArithmeticError`, `RuntimeError`), so existing handlers keep working. Advisory diagnostics are
issued through `warnings` and never interrupt the operation that produced them.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSADigestError(Exception):
    """Base class of all RSA Digest failures."""


class InvalidArgumentError(RSADigestError, ValueError):
    """An argument is zero, odd, out of range or otherwise unusable, or a key field is unset."""


class ArithmeticInconsistencyError(RSADigestError, ArithmeticError):
    """The number theory does not add up, e.g. the public exponent is not coprime to the totient.

    Signals a defect in the inputs rather than a transient condition, so it is never retried.
    """


class RetryLimitExceededError(RSADigestError, RuntimeError):
    """A capped rejection-sampling loop ran out of attempts."""

    def __init__(self, stage: str, attempts: int) -> None:
        super().__init__(f"No acceptable {stage} found within {attempts} attempts. Check the random number source.")
        self.stage = stage
        self.attempts = attempts


class ExponentMismatchWarning(RuntimeWarning):
    """The derived exponents failed the (e * d) mod phi == 1 self-check."""
