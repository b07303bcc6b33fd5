"""
Match System
Opens, tracks and closes private match rooms and enforces who may act in them
"""

import logging
from typing import Callable, Optional
from config import MATCH_TYPES, BOT_LIMITS
from database.store import Database
from database.models import MatchRoom
from utils.embeds import EmbedTemplates
from utils.exceptions import NotFoundError, ForbiddenError, ConfigurationError, ExternalCallFailure
from utils.role_utils import RoleManager, format_role_mentions
from utils.scheduler import TaskScheduler, ScheduledTask

logger = logging.getLogger('RankedBot.MatchSystem')


class MatchSystem:
    def __init__(self, database: Database, gateway, scheduler: TaskScheduler,
                 delete_delay: Optional[float] = None):
        self.db = database
        self.gateway = gateway
        self.scheduler = scheduler
        self.delete_delay = BOT_LIMITS['room_delete_delay_seconds'] if delete_delay is None else delete_delay

    def get_room(self, room_id: int) -> MatchRoom:
        """Get an active room or raise NotFoundError"""
        room = self.db.get_match(room_id)
        if room is None:
            raise NotFoundError(
                f'No active match in {room_id}',
                'This command can only be used in a match channel.'
            )
        return room

    def _role_manager(self, room: MatchRoom, requester) -> RoleManager:
        guild_id = room.guild_id or requester.guild.id
        return RoleManager(self.db.get_settings(guild_id))

    async def start(self, guild, match_type: str, creator) -> MatchRoom:
        """
        Open a new match room for creator

        Args:
            guild: Guild the panel button was pressed in
            match_type: '1v1' or '2v2'
            creator: Member who pressed the button

        Returns:
            The recorded MatchRoom
        """
        if match_type not in MATCH_TYPES:
            raise ValueError(f'Unknown match type: {match_type}')

        settings = self.db.get_settings(guild.id)
        if not settings.host_role_ids:
            raise ConfigurationError(
                f'No host roles configured in {guild.id}',
                'Host roles have not been configured. An administrator needs to use /sethosts first.'
            )

        room_id = await self.gateway.create_room(
            guild,
            f'{match_type}-{creator.name}',
            creator,
            settings.host_role_ids,
            settings.match_category_id
        )

        room = MatchRoom(
            room_id=room_id,
            guild_id=guild.id,
            match_type=match_type,
            creator_id=creator.id,
            participants=[creator.id],
        )
        self.db.put_match(room)
        logger.info(f'Opened {match_type} match {room_id} for {creator.id} in {guild.id}')

        try:
            await self.gateway.send_message(
                room_id,
                content=f'{creator.mention} {format_role_mentions(settings.host_role_ids, " ")}',
                embed=EmbedTemplates.match_welcome_embed(match_type, creator.mention)
            )
        except ExternalCallFailure as e:
            logger.warning(f'Could not post welcome message in {room_id}: {e}')

        return room

    async def add_participant(self, room_id: int, requester, target) -> MatchRoom:
        """
        Give target access to a room and record them as a participant

        Only the room's creator or a host may add users. The participant list
        is only changed once the access grant succeeded.
        """
        room = self.get_room(room_id)

        if requester.id != room.creator_id and not self._role_manager(room, requester).is_host(requester):
            raise ForbiddenError(
                f'{requester.id} may not add users to {room_id}',
                'Only the match creator or hosts can add users.'
            )

        await self.gateway.grant_access(room_id, target)

        if not room.has_participant(target.id):
            room.participants.append(target.id)
            self.db.save_matches()
            logger.info(f'Added {target.id} to match {room_id}')

        return room

    async def close(self, room_id: int, requester) -> ScheduledTask:
        """
        Close a room and schedule deletion of its channel

        Returns:
            Handle of the scheduled deletion
        """
        room = self.get_room(room_id)
        self._role_manager(room, requester).ensure_host(requester, 'Only hosts can close matches.')

        self.db.delete_match(room_id)
        logger.info(f'Match {room_id} closed by {requester.id}')

        return self.scheduler.schedule(
            self.delete_delay,
            lambda: self.gateway.delete_room(room_id, reason=f'Match closed by {requester}'),
            name=f'delete-room-{room_id}'
        )

    def prune_missing_rooms(self, room_exists: Callable[[int], bool]) -> int:
        """Drop rooms whose channels no longer exist"""
        missing = [room_id for room_id in self.db.matches if not room_exists(room_id)]
        for room_id in missing:
            del self.db.matches[room_id]

        if missing:
            self.db.save_matches()
            logger.info(f'Pruned {len(missing)} match rooms with missing channels')
        return len(missing)
