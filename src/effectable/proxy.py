"""
Adapter returned by the `effectable` function.
We use wrapt so that isinstance checks, str/repr and other magic methods keep
delegating to the wrapped object.
We override __getattr__ to classify each member at access time: callables are
replaced by wrappers returning an Effect, everything else is read through.
"""

import functools
import inspect
import typing as t

import structlog

from effectable.effect import Effect
from effectable.options import EffectableOptions
from effectable.resolution import ErrorResolutionTable, ErrorTransformer

log = structlog.get_logger(__name__)

# Type variable for the wrapped object type
T = t.TypeVar("T")

UNSAFE_ATTRIBUTE = "unsafe"
_PROXY_STATE = frozenset({"_self_options", "_self_error_table", "_self_method_cache"})


def _suspend_call(
    *,
    method: t.Callable[..., t.Any],
    name: str,
    args: tuple[t.Any, ...],
    kwargs: dict[str, t.Any],
    transform: ErrorTransformer,
) -> Effect[t.Any, t.Any]:
    """
    Describe one invocation of ``method`` as an effect.

    Parameters
    ----------
    method : typing.Callable[..., typing.Any]
        Callable read from the wrapped object (bound to it when it is a method).
    name : str
        Member name, used for logging.
    args : tuple[typing.Any, ...]
        Positional arguments forwarded to ``method``.
    kwargs : dict[str, typing.Any]
        Keyword arguments forwarded to ``method``.
    transform : ErrorTransformer
        Transformer applied to raised exceptions and failed awaitables.

    Returns
    -------
    Effect[typing.Any, typing.Any]
        Suspended effect; ``method`` is only called when the effect runs.
    """

    async def invoke() -> Effect[t.Any, t.Any]:
        try:
            result = method(*args, **kwargs)
        except Exception as error:
            log.debug(event="Method raised", method=name, error_type=type(error).__name__)
            return Effect.fail(transform(error))

        if inspect.isawaitable(result):
            try:
                result = await result
            except Exception as error:
                log.debug(
                    event="Awaitable result failed",
                    method=name,
                    error_type=type(error).__name__,
                )
                return Effect.fail(transform(error))

        return Effect.succeed(result)

    return Effect.suspend(invoke)


if t.TYPE_CHECKING:

    class EffectableProxy(t.Generic[T]):
        """
        Adapter exposing the members of ``T`` with methods returning effects.

        Static analysis cannot express the per-method rewrite of return types,
        so attribute access is typed loosely; ``unsafe`` keeps the precise type.
        """

        __wrapped__: T
        _self_options: EffectableOptions
        _self_error_table: ErrorResolutionTable
        _self_method_cache: dict[str, Effect[t.Any, t.Any]] | None

        def __init__(self, wrapped: T, options: EffectableOptions | None = None) -> None: ...
        def __class_getitem__(cls, item: type) -> type: ...
        @property
        def unsafe(self) -> T: ...
        def __getattr__(self, name: str) -> t.Any: ...
        def __contains__(self, name: object) -> bool: ...
        def __dir__(self) -> list[str]: ...

else:
    import wrapt

    class EffectableProxy(wrapt.ObjectProxy):
        """
        Proxy that wraps an object and turns its methods into effect factories.

        Non-callable members are read through from the wrapped object on every
        access. Callable members are wrapped so that calling them returns an
        ``Effect`` instead of running the method; failures become ``Failure``
        values shaped by the configured error transformers.

        Type parameter:
            T: The type of the wrapped object

        Example:
            >>> service = MockService()
            >>> proxy: EffectableProxy[MockService] = effectable(service)
            >>> proxy.get_count().run_sync()
            Success(value=5)
        """

        def __init__(self, wrapped, options=None):
            super().__init__(wrapped)
            options = options if options is not None else EffectableOptions()
            # wrapt keeps attributes prefixed with _self_ on the proxy itself
            self._self_options = options
            self._self_error_table = ErrorResolutionTable.from_options(options=options)
            self._self_method_cache = {} if options.cache_no_arg_methods else None

            log.debug(
                event="Initialized EffectableProxy",
                target_type=type(wrapped).__name__,
                cache_no_arg_methods=options.cache_no_arg_methods,
                method_error_transformers=sorted(options.method_error_transformers),
            )

        def __class_getitem__(cls, item):
            """Make EffectableProxy subscriptable for type hints: EffectableProxy[Client]"""
            return cls

        @property
        def unsafe(self):
            """The wrapped object itself, bypassing interception."""
            return self.__wrapped__

        def __getattr__(self, name):
            # only reached for the proxy's own state before __init__ assigned it
            if name in _PROXY_STATE:
                raise AttributeError(name)

            # 1. Read the current value from the wrapped object
            original_attr = getattr(self.__wrapped__, name)

            # 2. Dunder members and plain values are read through
            if name.startswith("__") or not callable(original_attr):
                return original_attr

            # 3. Methods are wrapped to return an Effect
            return self._self_wrap_method(method=original_attr, name=name)

        def _self_wrap_method(self, *, method, name):
            cache = self._self_method_cache

            @functools.wraps(method)
            def wrapper(*args, **kwargs):
                no_args = not args and not kwargs
                if cache is not None and no_args:
                    cached = cache.get(name)
                    if cached is not None:
                        log.debug(event="Reusing cached effect", method=name)
                        return cached

                effect = _suspend_call(
                    method=method,
                    name=name,
                    args=args,
                    kwargs=kwargs,
                    transform=self._self_error_table.resolve(name),
                )

                if cache is not None and no_args:
                    # setdefault keeps one effect per name if another thread won the race
                    effect = cache.setdefault(name, effect.memoized())
                    log.debug(event="Cached effect", method=name)
                return effect

            return wrapper

        def __contains__(self, name):
            if not isinstance(name, str):
                return False
            return name == UNSAFE_ATTRIBUTE or hasattr(self.__wrapped__, name)

        def __dir__(self):
            return sorted(set(dir(self.__wrapped__)) | {UNSAFE_ATTRIBUTE})

        def __setattr__(self, name, value):
            if name.startswith("_self_"):
                super().__setattr__(name, value)
                return
            raise AttributeError(
                f"{type(self).__name__} is read-only; set {name!r} on .unsafe instead"
            )

        def __delattr__(self, name):
            if name.startswith("_self_"):
                super().__delattr__(name)
                return
            raise AttributeError(
                f"{type(self).__name__} is read-only; delete {name!r} on .unsafe instead"
            )
