"""
Database Package
Provides the JSON table store, record models and the audit log for RankedBot
"""

from .models import PlayerRecord, GuildSettings, MatchRoom
from .store import Database
from .audit_log import AuditLog

__all__ = ['Database', 'AuditLog', 'PlayerRecord', 'GuildSettings', 'MatchRoom']
