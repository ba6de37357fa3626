from typing import Optional, Union

# Environment
from ordtree._core.environment import settings
from ordtree._core.schema import RootPolicy

# Errors
from ordtree.error import (
    InvalidPositionError,
    StalePositionError,
    TreeError,
    TreeNotEmptyError,
)

# Core data structures
from ordtree.tree import OrderedTree, Position, TreeRow, build_tree


def init(
    log_level: Optional[str] = None,
    log_rich: Optional[bool] = None,
    root_policy: Optional[Union[RootPolicy, str]] = None,
) -> None:
    """
    Initialize ordtree with optional overrides.

    Call once at startup to override settings loaded from the environment.
    If not called, logging configures itself on first use.

    Args:
        log_level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR').
            If None, uses the LOG_LEVEL env var or 'INFO'.
        log_rich: Enable rich formatting. If None, uses LOG_USE_RICH.
        root_policy: Default add_root behaviour for new trees ('noop' or 'raise').

    Example:
        >>> import ordtree
        >>> ordtree.init(log_level='DEBUG', root_policy='raise')
    """
    from ordtree._core.logging import configure_logging

    if root_policy is not None:
        settings.tree_root_policy = RootPolicy.from_str(root_policy)
    configure_logging(level=log_level, use_rich=log_rich, force=True)


__all__ = [
    'init',
    'settings',
    'InvalidPositionError',
    'OrderedTree',
    'Position',
    'RootPolicy',
    'StalePositionError',
    'TreeError',
    'TreeNotEmptyError',
    'TreeRow',
    'build_tree',
]
