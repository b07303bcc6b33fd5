"""
Room Gateway
Discord side of match rooms: private channel creation, access grants,
messages and deletion
"""

import discord
import logging
from typing import List, Optional
from utils.exceptions import ExternalCallFailure

logger = logging.getLogger('RankedBot.RoomGateway')


class DiscordRoomGateway:
    def __init__(self, bot):
        self.bot = bot

    def room_exists(self, room_id: int) -> bool:
        return self.bot.get_channel(room_id) is not None

    def _resolve(self, room_id: int, operation: str) -> discord.abc.GuildChannel:
        channel = self.bot.get_channel(room_id)
        if channel is None:
            raise ExternalCallFailure(operation, f'channel {room_id} not found')
        return channel

    async def create_room(self, guild: discord.Guild, name: str, creator: discord.Member,
                          host_role_ids: List[int], category_id: Optional[int] = None) -> int:
        """
        Create a private text channel for a match

        Args:
            guild: Guild to create the room in
            name: Channel name
            creator: Member who requested the match
            host_role_ids: Roles that can see and manage the room
            category_id: Optional category to place the room under

        Returns:
            Id of the created channel
        """
        overwrites = {
            guild.default_role: discord.PermissionOverwrite(view_channel=False),
            creator: discord.PermissionOverwrite(
                view_channel=True, send_messages=True, read_message_history=True
            ),
            guild.me: discord.PermissionOverwrite(
                view_channel=True, send_messages=True, read_message_history=True, manage_channels=True
            ),
        }

        for role_id in host_role_ids:
            role = guild.get_role(role_id)
            if role is None:
                logger.warning(f'Host role {role_id} not found in {guild.id}')
                continue
            overwrites[role] = discord.PermissionOverwrite(
                view_channel=True, send_messages=True, read_message_history=True, manage_channels=True
            )

        category = None
        if category_id:
            category = guild.get_channel(category_id)
            if not isinstance(category, discord.CategoryChannel):
                logger.warning(f'Match category {category_id} not found in {guild.id}, creating room without one')
                category = None

        try:
            channel = await guild.create_text_channel(
                name=name,
                overwrites=overwrites,
                category=category,
                reason=f'Ranked match room for {creator}'
            )
        except discord.HTTPException as e:
            logger.error(f'Error creating match room {name}: {e}')
            raise ExternalCallFailure('create match', str(e)) from e

        logger.info(f'Created match room: {channel.name} (ID: {channel.id})')
        return channel.id

    async def grant_access(self, room_id: int, member: discord.abc.Snowflake):
        """Allow member to view, write in and read the history of a room"""
        channel = self._resolve(room_id, 'add user to this match')
        try:
            await channel.set_permissions(
                member, view_channel=True, send_messages=True, read_message_history=True
            )
        except discord.HTTPException as e:
            logger.error(f'Error granting access to {room_id} for {member.id}: {e}')
            raise ExternalCallFailure('add user to this match', str(e)) from e

    async def send_message(self, room_id: int, content: Optional[str] = None,
                           embed: Optional[discord.Embed] = None):
        channel = self._resolve(room_id, 'send message')
        try:
            await channel.send(content=content, embed=embed)
        except discord.HTTPException as e:
            raise ExternalCallFailure('send message', str(e)) from e

    async def delete_room(self, room_id: int, reason: str = 'Match closed'):
        channel = self.bot.get_channel(room_id)
        if channel is None:
            logger.info(f'Match room {room_id} already gone')
            return
        try:
            await channel.delete(reason=reason)
        except discord.HTTPException as e:
            raise ExternalCallFailure('delete match room', str(e)) from e
        logger.info(f'Deleted match room {room_id}')
