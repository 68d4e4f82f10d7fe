from .exception import (
    CustomException,
    FailException,
    NotFoundException,
)

__all__ = [
    "CustomException",
    "FailException",
    "NotFoundException",
]
