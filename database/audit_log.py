"""
Audit Log
SQLite record of host actions (reports, streak and ELO adjustments, room closes)
"""

import aiosqlite
import logging
from pathlib import Path
from typing import Optional, Dict, Any, List
from config import DATA_CONFIG

logger = logging.getLogger('RankedBot.AuditLog')


class AuditLog:
    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or str(Path(DATA_CONFIG['data_dir']) / DATA_CONFIG['audit_db'])

        # Ensure database directory exists
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

    async def initialize(self):
        """Create the log table if it doesn't exist"""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute('''
                CREATE TABLE IF NOT EXISTS bot_logs (
                    log_id INTEGER PRIMARY KEY AUTOINCREMENT,
                    guild_id INTEGER,
                    action_type TEXT NOT NULL,
                    actor_id INTEGER,
                    target_id INTEGER,
                    details TEXT,
                    timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            await db.execute('CREATE INDEX IF NOT EXISTS idx_bot_logs_guild ON bot_logs (guild_id, log_id DESC)')
            await db.commit()
        logger.info('Audit log initialized')

    async def log_action(self, guild_id: int, action_type: str, actor_id: Optional[int] = None,
                         target_id: Optional[int] = None, details: Optional[str] = None) -> bool:
        """
        Record a host action. Failures are logged and reported as False,
        the action being logged has already been applied.
        """
        try:
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    '''INSERT INTO bot_logs (guild_id, action_type, actor_id, target_id, details)
                       VALUES (?, ?, ?, ?, ?)''',
                    (guild_id, action_type, actor_id, target_id, details)
                )
                await db.commit()
            return True
        except Exception as e:
            logger.warning(f'Could not write audit entry {action_type}: {e}')
            return False

    async def recent_actions(self, guild_id: int, limit: int = 10) -> List[Dict[str, Any]]:
        """Get the most recent actions for a guild, newest first"""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                '''SELECT * FROM bot_logs WHERE guild_id = ?
                   ORDER BY log_id DESC LIMIT ?''',
                (guild_id, limit)
            )
            rows = await cursor.fetchall()
            return [dict(row) for row in rows]
