"""
Construction-time configuration of effectable adapters.
"""

from pydantic import BaseModel, ConfigDict, Field

from effectable.resolution import ErrorTransformer, default_error_transformer


class EffectableOptions(BaseModel):
    """
    Options shared by every adapter created from one configuration.

    Instances are frozen: options are validated once, then never change.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    default_error_transformer: ErrorTransformer = Field(
        default=default_error_transformer,
        description="transformer applied to failures of methods without an override",
    )
    method_error_transformers: dict[str, ErrorTransformer] = Field(
        default_factory=dict,
        description="per-method transformers, keyed by method name",
    )
    cache_no_arg_methods: bool = Field(
        default=True,
        description="reuse one effect per method name for zero-argument calls",
    )
