from .pet import Pet
from .pagination import Page, PageInfo

__all__ = [
    "Pet",
    "Page",
    "PageInfo",
]
