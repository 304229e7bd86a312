from ._settings import (
    TensorSettings,
    get_settings,
    set_settings,
    configure,
    default_dtype,
    setup_logging,
)

__all__ = [
    TensorSettings.__name__,
    get_settings.__name__,
    set_settings.__name__,
    configure.__name__,
    default_dtype.__name__,
    setup_logging.__name__,
]
