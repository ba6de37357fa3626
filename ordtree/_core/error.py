from __future__ import annotations


class CustomBaseException(Exception):
    """
    Base exception class.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidConfig(Exception):
    """Raised when a tree configuration is invalid."""

    pass


class TreeError(CustomBaseException):
    """Base exception for ordered tree operations."""

    pass


class InvalidPositionError(TreeError, TypeError):
    """
    Raised when a value is not a position issued by this tree.
    """

    def __init__(self, message: str = 'Not valid position type'):
        super().__init__(message)


class StalePositionError(TreeError, ValueError):
    """
    Raised when a position refers to a node that has been removed.
    """

    def __init__(self, message: str = 'Position is no longer in the tree'):
        super().__init__(message)


class TreeNotEmptyError(TreeError):
    """
    Raised when a root is added to a tree that already has one.
    """

    def __init__(self, message: str = 'Tree already has a root'):
        super().__init__(message)


class TreeIntegrityError(TreeError):
    """Raised when the linked structure of a tree is found to be inconsistent."""

    pass
