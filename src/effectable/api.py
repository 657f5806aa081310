"""
Main endpoint for users.
Exposes `effectable`, which wraps a target object into an EffectableProxy, and
`effectable_factory`, which validates a configuration once and returns a
function wrapping any number of targets with it.
"""

import typing as t

from effectable.options import EffectableOptions
from effectable.proxy import EffectableProxy
from effectable.resolution import ErrorTransformer, default_error_transformer

# Type variable for the wrapped object type
T = t.TypeVar("T")


def effectable_factory(
    *,
    default_error_transformer: ErrorTransformer = default_error_transformer,
    method_error_transformers: t.Mapping[str, ErrorTransformer] | None = None,
    cache_no_arg_methods: bool = True,
) -> t.Callable[[T], EffectableProxy[T]]:
    """
    Build a function wrapping targets with a fixed configuration.

    Parameters
    ----------
    default_error_transformer : ErrorTransformer, optional
        Transformer applied to failures of methods without an override.
        Defaults to wrapping the raw failure in an ``UnknownError``.
    method_error_transformers : typing.Mapping[str, ErrorTransformer] | None, optional
        Per-method transformers, keyed by method name.
    cache_no_arg_methods : bool, optional
        Reuse one effect per method name for zero-argument calls.

    Returns
    -------
    typing.Callable[[T], EffectableProxy[T]]
        Function wrapping a target. Each adapter it creates owns its own cache.

    Raises
    ------
    pydantic.ValidationError
        If a transformer is not callable.

    Notes
    -----
    >>> from effectable import effectable_factory
    >>> create = effectable_factory(
    ...     method_error_transformers={"fetch": lambda error: FetchError(error)},
    ... )
    >>> service = create(MyService())
    >>> service.fetch("x").run_sync()
    Failure(error=FetchError(...))
    """
    options = EffectableOptions(
        default_error_transformer=default_error_transformer,
        method_error_transformers=dict(method_error_transformers or {}),
        cache_no_arg_methods=cache_no_arg_methods,
    )

    def create(target: T) -> EffectableProxy[T]:
        """
        Wrap ``target`` with the captured options.

        Parameters
        ----------
        target : T
            Object to wrap.

        Returns
        -------
        EffectableProxy[T]
            Adapter over ``target``.
        """
        return EffectableProxy(target, options)

    return create


def effectable(
    target: T,
    *,
    default_error_transformer: ErrorTransformer = default_error_transformer,
    method_error_transformers: t.Mapping[str, ErrorTransformer] | None = None,
    cache_no_arg_methods: bool = True,
) -> EffectableProxy[T]:
    """
    Wrap a single target.

    Parameters
    ----------
    target : T
        Object to wrap.
    default_error_transformer : ErrorTransformer, optional
        Transformer applied to failures of methods without an override.
    method_error_transformers : typing.Mapping[str, ErrorTransformer] | None, optional
        Per-method transformers, keyed by method name.
    cache_no_arg_methods : bool, optional
        Reuse one effect per method name for zero-argument calls.

    Returns
    -------
    EffectableProxy[T]
        Adapter over ``target``.

    Notes
    -----
    >>> service = effectable(MyService())
    >>> await service.some_method("arg").run_or_raise()
    """
    create = effectable_factory(
        default_error_transformer=default_error_transformer,
        method_error_transformers=method_error_transformers,
        cache_no_arg_methods=cache_no_arg_methods,
    )
    return create(target)
