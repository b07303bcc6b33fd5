"""
Administrative Commands
Ranked panel setup and per-guild configuration
"""

import discord
from discord import app_commands
from discord.ext import commands
import logging
from typing import Optional
from commands.match_commands import RankedPanelView
from utils.embeds import EmbedTemplates
from utils.interactive_utils import send_error
from utils.role_utils import RoleManager, format_role_mentions, unique_role_ids
from utils.validators import Validators

logger = logging.getLogger('RankedBot.AdminCommands')


async def setup_admin_commands(bot):
    """Setup admin commands for the bot"""
    await bot.add_cog(AdminCommands(bot))


class AdminCommands(commands.Cog):
    def __init__(self, bot):
        self.bot = bot
        self.db = bot.db
        self.leaderboard_system = bot.leaderboard_system
        self.audit_log = bot.audit_log

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.guild is None:
            raise app_commands.NoPrivateMessage()
        return True

    @app_commands.command(name='setup', description='Post the ranked match panel in this channel')
    @app_commands.default_permissions(administrator=True)
    async def setup(self, interaction: discord.Interaction):
        RoleManager.ensure_admin(interaction.user)
        await interaction.response.send_message(
            embed=EmbedTemplates.ranked_panel_embed(),
            view=RankedPanelView(self.bot)
        )
        logger.info(f'Ranked panel posted in {interaction.channel_id} by {interaction.user.id}')

    @app_commands.command(name='sethosts', description='Set the roles that can manage matches')
    @app_commands.default_permissions(administrator=True)
    @app_commands.describe(role1='Host role', role2='Additional host role', role3='Additional host role')
    async def sethosts(self, interaction: discord.Interaction, role1: discord.Role,
                       role2: Optional[discord.Role] = None, role3: Optional[discord.Role] = None):
        RoleManager.ensure_admin(interaction.user)
        role_ids = unique_role_ids([role1, role2, role3])
        is_valid, error_message = Validators.validate_host_roles(role_ids)
        if not is_valid:
            await send_error(interaction, "Invalid Host Roles", error_message)
            return

        settings = self.db.get_settings(interaction.guild.id)
        settings.host_role_ids = role_ids
        self.db.save_settings()
        logger.info(f'Host roles for {interaction.guild.id} set to {role_ids}')

        embed = EmbedTemplates.success_embed(
            "Host Roles Updated",
            f"The following roles can now manage matches:\n{format_role_mentions(role_ids)}"
        )
        await interaction.response.send_message(embed=embed, ephemeral=True)
        await self.audit_log.log_action(
            interaction.guild.id, 'set_hosts', interaction.user.id, details=','.join(map(str, role_ids))
        )

    @app_commands.command(name='setcategory', description='Set the category match channels are created in')
    @app_commands.default_permissions(administrator=True)
    @app_commands.describe(category='Category for match channels')
    async def setcategory(self, interaction: discord.Interaction, category: discord.CategoryChannel):
        RoleManager.ensure_admin(interaction.user)
        settings = self.db.get_settings(interaction.guild.id)
        settings.match_category_id = category.id
        self.db.save_settings()
        logger.info(f'Match category for {interaction.guild.id} set to {category.id}')

        embed = EmbedTemplates.success_embed(
            "Category Set",
            f"Match channels will now be created in {category.mention}"
        )
        await interaction.response.send_message(embed=embed, ephemeral=True)

    @app_commands.command(name='setlogchannel', description='Set the channel match results are logged to')
    @app_commands.default_permissions(administrator=True)
    @app_commands.describe(channel='Channel for match results')
    async def setlogchannel(self, interaction: discord.Interaction, channel: discord.TextChannel):
        RoleManager.ensure_admin(interaction.user)
        settings = self.db.get_settings(interaction.guild.id)
        settings.log_channel_id = channel.id
        self.db.save_settings()
        logger.info(f'Log channel for {interaction.guild.id} set to {channel.id}')

        embed = EmbedTemplates.success_embed(
            "Log Channel Set",
            f"Match results will now be logged to {channel.mention}"
        )
        await interaction.response.send_message(embed=embed, ephemeral=True)

    @app_commands.command(name='setdodgechannel', description='Set the channel dodge alerts are posted to')
    @app_commands.default_permissions(administrator=True)
    @app_commands.describe(channel='Channel for dodge alerts')
    async def setdodgechannel(self, interaction: discord.Interaction, channel: discord.TextChannel):
        RoleManager.ensure_admin(interaction.user)
        settings = self.db.get_settings(interaction.guild.id)
        settings.dodge_channel_id = channel.id
        self.db.save_settings()
        logger.info(f'Dodge channel for {interaction.guild.id} set to {channel.id}')

        embed = EmbedTemplates.success_embed(
            "Dodge Channel Set",
            f"Dodge alerts will now be posted to {channel.mention}"
        )
        await interaction.response.send_message(embed=embed, ephemeral=True)

    @app_commands.command(name='setleaderboardchannel',
                          description='Set the channel the ELO leaderboard panels live in')
    @app_commands.default_permissions(administrator=True)
    @app_commands.describe(channel='Channel for the leaderboard panels')
    async def setleaderboardchannel(self, interaction: discord.Interaction, channel: discord.TextChannel):
        RoleManager.ensure_admin(interaction.user)
        settings = self.db.get_settings(interaction.guild.id)
        settings.leaderboard_channel_id = channel.id
        settings.leaderboard_message_ids = {mode: None for mode in settings.leaderboard_message_ids}
        self.db.save_settings()
        logger.info(f'Leaderboard channel for {interaction.guild.id} set to {channel.id}')

        await interaction.response.defer(ephemeral=True, thinking=True)
        results = await self.leaderboard_system.sync_all(interaction.guild.id)

        summary = "\n".join(f"**{result.mode}:** {result.entry_count} players" for result in results)
        embed = EmbedTemplates.success_embed(
            "Leaderboard Channel Set",
            f"Leaderboard panels have been posted to {channel.mention}\n\n{summary}"
        )
        await interaction.followup.send(embed=embed, ephemeral=True)
