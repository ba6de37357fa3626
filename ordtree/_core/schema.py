from enum import Enum
from typing import Any, List, Literal, Optional, Type, TypeVar

E = TypeVar('E', bound='RichEnum')


class RichEnum(Enum):
    """
    Enhanced Enum class with utility methods for case-insensitive lookups
    and value/name checks.
    """

    @classmethod
    def keys(cls) -> List[str]:
        """Return a list of all enum member names."""
        return [member.name for member in cls]

    @classmethod
    def values(cls) -> List[Any]:
        """Return a list of all enum member values."""
        return [member.value for member in cls]

    @classmethod
    def get_literal(cls) -> Any:
        """Return a Literal type of all enum values (for static typing support)."""
        return Literal[tuple(cls.values())]

    @classmethod
    def from_str(cls: Type[E], string: str, default: Optional[E] = None) -> E:
        """
        Retrieve enum member by string value (case-insensitive for strings).
        """
        if string is None:
            if default is not None:
                return default
            raise ValueError(f'Cannot look up None in {cls.__name__}')

        for member in cls:
            val = member.value
            if string == val or (
                isinstance(val, str) and string.lower() == val.lower()
            ):
                return member

        if default is not None:
            return default

        raise KeyError(f"'{string}' not found in {cls.__name__}")

    @classmethod
    def has_value(cls, value: Any) -> bool:
        """Check if a value exists in the enum (case-insensitive for strings)."""
        if value is None:
            return False

        return any(
            value == member.value
            or (
                isinstance(value, str)
                and isinstance(member.value, str)
                and value.lower() == member.value.lower()
            )
            for member in cls
        )

    def __str__(self) -> str:
        return str(self.value)


class RootPolicy(str, RichEnum):
    """
    What ``add_root`` does when the tree already has a root.

        - noop: leave the tree untouched and return None
        - raise: raise TreeNotEmptyError
    """

    NOOP = 'noop'
    RAISE = 'raise'
