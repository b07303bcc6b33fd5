"""
Leaderboard System
Per-mode ELO rankings and the editable leaderboard panels that display them
"""

import discord
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional
from config import ELO_CONFIG, BOT_LIMITS
from database.store import Database
from database.models import PlayerRecord
from utils.embeds import EmbedTemplates
from utils.exceptions import NotFoundError, ExternalCallFailure

logger = logging.getLogger('RankedBot.LeaderboardSystem')


@dataclass
class PanelUpdateResult:
    mode: str
    message_id: int
    action: str
    entry_count: int


class LeaderboardSystem:
    def __init__(self, database: Database, get_channel: Callable[[int], Optional[discord.abc.Messageable]]):
        self.db = database
        self.get_channel = get_channel

    def rankings(self, guild_id: int, mode: str, limit: Optional[int] = None) -> List[PlayerRecord]:
        """
        Get the top players of a guild for one ELO mode

        Args:
            guild_id: Guild to rank
            mode: '1v1' or '2v2'
            limit: Number of entries, defaults to the leaderboard size

        Returns:
            Records sorted by descending ELO, ties by ascending user id
        """
        if mode not in ELO_CONFIG['modes']:
            raise ValueError(f'Unknown ELO mode: {mode}')

        limit = limit or BOT_LIMITS['leaderboard_size']
        players = self.db.get_guild_players(guild_id)
        players.sort(key=lambda record: (-record.get_elo(mode), record.user_id))
        return players[:limit]

    def render(self, guild_id: int, mode: str) -> discord.Embed:
        return EmbedTemplates.leaderboard_embed(self.rankings(guild_id, mode), mode)

    async def sync(self, guild_id: int, mode: str) -> PanelUpdateResult:
        """
        Bring the guild's leaderboard panel for mode up to date

        The stored panel message is edited in place. If it was deleted a new
        one is posted and its id replaces the stored one.
        """
        settings = self.db.get_settings(guild_id)
        if not settings.leaderboard_channel_id:
            raise NotFoundError(
                f'No leaderboard channel configured in {guild_id}',
                'No leaderboard channel has been configured. An administrator needs to use /setleaderboardchannel first.'
            )

        channel = self.get_channel(settings.leaderboard_channel_id)
        if channel is None:
            raise NotFoundError(
                f'Leaderboard channel {settings.leaderboard_channel_id} not found',
                'The leaderboard channel could not be found.'
            )

        records = self.rankings(guild_id, mode)
        embed = EmbedTemplates.leaderboard_embed(records, mode)

        action = 'created'
        message_id = settings.leaderboard_message_ids.get(mode)
        if message_id:
            try:
                message = await channel.fetch_message(message_id)
                await message.edit(embed=embed)
                logger.info(f'Edited {mode} leaderboard panel {message_id} in {guild_id}')
                return PanelUpdateResult(mode, message_id, 'edited', len(records))
            except discord.NotFound:
                logger.info(f'{mode} leaderboard panel {message_id} in {guild_id} is gone, recreating')
                action = 'recreated'
            except discord.HTTPException as e:
                raise ExternalCallFailure('update the leaderboard', str(e)) from e

        try:
            message = await channel.send(embed=embed)
        except discord.HTTPException as e:
            raise ExternalCallFailure('post the leaderboard', str(e)) from e

        settings.leaderboard_message_ids[mode] = message.id
        self.db.save_settings()
        logger.info(f'Posted {mode} leaderboard panel {message.id} in {guild_id} ({action})')
        return PanelUpdateResult(mode, message.id, action, len(records))

    async def sync_all(self, guild_id: int) -> List[PanelUpdateResult]:
        return [await self.sync(guild_id, mode) for mode in ELO_CONFIG['modes']]
