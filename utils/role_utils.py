"""
Role Management Utilities
Host authorization checks and role mention helpers
"""

import discord
import logging
from typing import List, Iterable
from database.models import GuildSettings
from utils.exceptions import ForbiddenError

logger = logging.getLogger('RankedBot.RoleUtils')


class RoleManager:
    def __init__(self, settings: GuildSettings):
        self.settings = settings

    @staticmethod
    def has_admin_role(member: discord.Member) -> bool:
        """
        Check if member has administrator permissions

        Args:
            member: Discord member

        Returns:
            True if member is an administrator
        """
        permissions = getattr(member, 'guild_permissions', None)
        return bool(permissions and permissions.administrator)

    @staticmethod
    def ensure_admin(member: discord.Member):
        if not RoleManager.has_admin_role(member):
            raise ForbiddenError(
                f'{member.id} is not an administrator',
                'You need administrator permissions to use this command.'
            )

    def has_host_role(self, member: discord.Member) -> bool:
        """Check if member holds one of the configured host roles"""
        member_role_ids = {role.id for role in getattr(member, 'roles', [])}
        return any(role_id in member_role_ids for role_id in self.settings.host_role_ids)

    def is_host(self, member: discord.Member) -> bool:
        """
        Check if member may adjudicate matches

        Args:
            member: Discord member

        Returns:
            True for administrators and holders of a host role
        """
        return self.has_admin_role(member) or self.has_host_role(member)

    def ensure_host(self, member: discord.Member, message: str = 'Only hosts can use this command.'):
        """Raise ForbiddenError unless member is a host"""
        if not self.is_host(member):
            logger.info(f'Denied host action for {member.id} in {self.settings.guild_id}')
            raise ForbiddenError(f'{member.id} is not a host in {self.settings.guild_id}', message)


def format_role_mentions(role_ids: Iterable[int], separator: str = ', ') -> str:
    return separator.join(f'<@&{role_id}>' for role_id in role_ids)


def unique_role_ids(roles: List[discord.Role]) -> List[int]:
    """Role ids in the given order without duplicates or missing options"""
    role_ids = []
    for role in roles:
        if role is not None and role.id not in role_ids:
            role_ids.append(role.id)
    return role_ids
