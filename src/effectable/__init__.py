from .api import effectable as effectable
from .api import effectable_factory as effectable_factory
from .effect import Effect as Effect
from .effect import Exit as Exit
from .effect import Failure as Failure
from .effect import Success as Success
from .errors import EffectableError as EffectableError
from .errors import EffectFailedError as EffectFailedError
from .errors import UnknownError as UnknownError
from .options import EffectableOptions as EffectableOptions
from .proxy import EffectableProxy as EffectableProxy
from .resolution import ErrorResolutionTable as ErrorResolutionTable
from .resolution import ErrorTransformer as ErrorTransformer
from .resolution import default_error_transformer as default_error_transformer

__all__ = [
    "effectable",
    "effectable_factory",
    "Effect",
    "Exit",
    "Success",
    "Failure",
    "EffectableError",
    "EffectFailedError",
    "UnknownError",
    "EffectableOptions",
    "EffectableProxy",
    "ErrorResolutionTable",
    "ErrorTransformer",
    "default_error_transformer",
]
