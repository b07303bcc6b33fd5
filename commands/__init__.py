"""
Commands Package
Discord slash commands organized by functionality
"""

from .public_commands import setup_public_commands
from .match_commands import setup_match_commands, RankedPanelView
from .admin_commands import setup_admin_commands
from .rating_commands import setup_rating_commands

__all__ = [
    'setup_public_commands',
    'setup_match_commands',
    'setup_admin_commands',
    'setup_rating_commands',
    'RankedPanelView'
]
