# Tools package

from . import config_cli

__all__ = [
    'config_cli',
]
