from ._element_storage import ElementStorage

__all__ = [ElementStorage.__name__]
