"""
Public Commands
Commands available to all users
"""

import discord
from discord import app_commands
from discord.ext import commands
import logging
from typing import Optional
from config import ELO_CONFIG
from utils.embeds import EmbedTemplates
from utils.role_utils import RoleManager, format_role_mentions

logger = logging.getLogger('RankedBot.PublicCommands')


async def setup_public_commands(bot):
    """Setup public commands for the bot"""
    await bot.add_cog(PublicCommands(bot))


class PublicCommands(commands.Cog):
    def __init__(self, bot):
        self.bot = bot
        self.db = bot.db
        self.rating_system = bot.rating_system
        self.leaderboard_system = bot.leaderboard_system

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.guild is None:
            raise app_commands.NoPrivateMessage()
        return True

    @app_commands.command(name='stats', description='View ranked statistics')
    @app_commands.describe(player='Player to view (defaults to you)')
    async def stats(self, interaction: discord.Interaction, player: Optional[discord.Member] = None):
        """Show a player's record and tiers, auto streaks only to hosts"""
        player = player or interaction.user
        guild_id = interaction.guild.id

        record = self.rating_system.get_player(guild_id, player.id)
        show_auto_streaks = RoleManager(self.db.get_settings(guild_id)).is_host(interaction.user)

        await interaction.response.send_message(
            embed=EmbedTemplates.user_stats_embed(record, player.display_name, show_auto_streaks)
        )

    @app_commands.command(name='eloleaderboard', description='View the top 10 players by ELO')
    @app_commands.describe(mode='ELO mode')
    @app_commands.choices(mode=[app_commands.Choice(name=mode, value=mode) for mode in ELO_CONFIG['modes']])
    async def eloleaderboard(self, interaction: discord.Interaction, mode: app_commands.Choice[str]):
        embed = self.leaderboard_system.render(interaction.guild.id, mode.value)
        await interaction.response.send_message(embed=embed)

    @app_commands.command(name='viewhosts', description='View the roles that can manage matches')
    async def viewhosts(self, interaction: discord.Interaction):
        settings = self.db.get_settings(interaction.guild.id)
        role_mentions = format_role_mentions(settings.host_role_ids, '\n')
        await interaction.response.send_message(
            embed=EmbedTemplates.hosts_embed(role_mentions),
            ephemeral=True
        )
