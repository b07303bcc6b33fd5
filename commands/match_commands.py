"""
Match Commands
Ranked panel buttons and the commands used inside match rooms
"""

import discord
from discord import app_commands
from discord.ext import commands
from config import MATCH_TYPES
from utils.embeds import EmbedTemplates
from utils.interactive_utils import handle_interaction_error


async def setup_match_commands(bot):
    """Setup match commands for the bot"""
    await bot.add_cog(MatchCommands(bot))


class RankedPanelView(discord.ui.View):
    """Persistent Start 1v1 / Start 2v2 buttons posted by /setup"""

    def __init__(self, bot):
        super().__init__(timeout=None)
        self.bot = bot

    @discord.ui.button(label='Start 1v1', style=discord.ButtonStyle.danger,
                       custom_id=MATCH_TYPES['1v1']['button_id'])
    async def start_1v1(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self._start_match(interaction, '1v1')

    @discord.ui.button(label='Start 2v2', style=discord.ButtonStyle.danger,
                       custom_id=MATCH_TYPES['2v2']['button_id'])
    async def start_2v2(self, interaction: discord.Interaction, button: discord.ui.Button):
        await self._start_match(interaction, '2v2')

    async def _start_match(self, interaction: discord.Interaction, match_type: str):
        if interaction.guild is None:
            return

        room = await self.bot.match_system.start(interaction.guild, match_type, interaction.user)
        await interaction.response.send_message(
            f'Your {match_type} ranked match has been created: <#{room.room_id}>',
            ephemeral=True
        )
        await self.bot.audit_log.log_action(
            interaction.guild.id, 'match_start', interaction.user.id, details=f'{match_type} room {room.room_id}'
        )

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: discord.ui.Item):
        await handle_interaction_error(interaction, error)


class MatchCommands(commands.Cog):
    def __init__(self, bot):
        self.bot = bot
        self.match_system = bot.match_system
        self.audit_log = bot.audit_log

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.guild is None:
            raise app_commands.NoPrivateMessage()
        return True

    @app_commands.command(name='add', description='Add a user to this match')
    @app_commands.describe(user='User to add to the match')
    async def add(self, interaction: discord.Interaction, user: discord.Member):
        await self.match_system.add_participant(interaction.channel_id, interaction.user, user)

        await interaction.response.send_message(embed=EmbedTemplates.user_added_embed(user.mention))
        await self.audit_log.log_action(
            interaction.guild.id, 'match_add', interaction.user.id, user.id,
            f'room {interaction.channel_id}'
        )

    @app_commands.command(name='close', description='Close this match and delete the channel')
    async def close(self, interaction: discord.Interaction):
        await self.match_system.close(interaction.channel_id, interaction.user)

        await interaction.response.send_message(
            embed=EmbedTemplates.match_closed_embed(self.match_system.delete_delay)
        )
        await self.audit_log.log_action(
            interaction.guild.id, 'match_close', interaction.user.id,
            details=f'room {interaction.channel_id}'
        )
