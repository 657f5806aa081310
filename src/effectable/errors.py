"""
Error values surfaced by effectable adapters.
"""

from __future__ import annotations

import typing as t


class EffectableError(Exception):
    """
    Base class for errors raised or produced by effectable.
    """


class UnknownError(EffectableError):
    """
    Generic tagged error wrapping a raw failure.

    Produced by the default error transformer whenever a wrapped method fails
    and no method-specific transformer is configured.

    Parameters
    ----------
    cause : typing.Any
        Raw failure value (usually the raised exception), kept as-is.
    """

    tag: t.ClassVar[str] = "UNKNOWN_ERROR"

    def __init__(self, cause: t.Any) -> None:
        super().__init__(cause)
        self.cause = cause


class EffectFailedError(EffectableError):
    """
    Raised by ``Effect.run_or_raise`` when the failure value is not an exception.

    Parameters
    ----------
    error : typing.Any
        Failure value carried by the effect.
    """

    def __init__(self, error: t.Any) -> None:
        super().__init__(error)
        self.error = error
