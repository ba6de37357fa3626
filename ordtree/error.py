from ordtree._core.config import ConfigurationError
from ordtree._core.error import (
    InvalidConfig,
    InvalidPositionError,
    StalePositionError,
    TreeError,
    TreeIntegrityError,
    TreeNotEmptyError,
)

__all__ = [
    'ConfigurationError',
    'InvalidConfig',
    'InvalidPositionError',
    'StalePositionError',
    'TreeError',
    'TreeIntegrityError',
    'TreeNotEmptyError',
]
