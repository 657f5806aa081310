"""
Per-adapter lookup from method name to error transformer.
"""

from __future__ import annotations

import types
import typing as t

from effectable.errors import UnknownError

if t.TYPE_CHECKING:
    from effectable.options import EffectableOptions

ErrorTransformer = t.Callable[[t.Any], t.Any]


def default_error_transformer(error: t.Any) -> UnknownError:
    """
    Wrap any raw failure into an ``UnknownError``.

    Parameters
    ----------
    error : typing.Any
        Raw failure value.

    Returns
    -------
    UnknownError
        Tagged error carrying ``error`` as its cause.
    """
    return UnknownError(error)


class ErrorResolutionTable:
    """
    Resolve the error transformer applied to failures of a given method.

    Every method name resolves to a transformer: names without an override
    fall through to the default.

    Parameters
    ----------
    default : ErrorTransformer, optional
        Fallback transformer.
    overrides : typing.Mapping[str, ErrorTransformer] | None, optional
        Method-specific transformers, copied at construction.
    """

    def __init__(
        self,
        *,
        default: ErrorTransformer = default_error_transformer,
        overrides: t.Mapping[str, ErrorTransformer] | None = None,
    ) -> None:
        self._default = default
        self._overrides: t.Mapping[str, ErrorTransformer] = types.MappingProxyType(
            dict(overrides or {})
        )

    @classmethod
    def from_options(cls, *, options: EffectableOptions) -> ErrorResolutionTable:
        """
        Build a table from adapter options.

        Parameters
        ----------
        options : EffectableOptions
            Validated adapter options.

        Returns
        -------
        ErrorResolutionTable
            Table using the configured default and per-method transformers.
        """
        return cls(
            default=options.default_error_transformer,
            overrides=options.method_error_transformers,
        )

    @property
    def default(self) -> ErrorTransformer:
        return self._default

    @property
    def overrides(self) -> t.Mapping[str, ErrorTransformer]:
        return self._overrides

    def resolve(self, name: str) -> ErrorTransformer:
        """
        Return the transformer for ``name``.

        Parameters
        ----------
        name : str
            Method name.

        Returns
        -------
        ErrorTransformer
            Method override if configured, else the default transformer.
        """
        transformer = self._overrides.get(name)
        if transformer is None:
            return self._default
        return transformer

    def transform(self, name: str, error: t.Any) -> t.Any:
        """Apply the transformer resolved for ``name`` to ``error``."""
        return self.resolve(name)(error)
