"""
Rating Commands
Host commands that report results and adjust player statistics
"""

import discord
from discord import app_commands
from discord.ext import commands
import logging
from typing import Optional
from config import ELO_CONFIG, STREAK_TYPES, COUNTER_FIELDS, BOT_LIMITS
from utils.embeds import EmbedTemplates
from utils.exceptions import RankedBotError
from utils.interactive_utils import send_error
from utils.role_utils import RoleManager
from utils.validators import Validators

logger = logging.getLogger('RankedBot.RatingCommands')

MODE_CHOICES = [app_commands.Choice(name=mode, value=mode) for mode in ELO_CONFIG['modes']]
STREAK_CHOICES = [app_commands.Choice(name=label, value=kind) for kind, label in STREAK_TYPES.items()]
COUNTER_CHOICES = [app_commands.Choice(name=field.capitalize(), value=field) for field in COUNTER_FIELDS]

STREAK_COUNT = app_commands.Range[int, 0, BOT_LIMITS['max_auto_streak']]
ELO_AMOUNT = app_commands.Range[int, ELO_CONFIG['min_adjustment'], ELO_CONFIG['max_adjustment']]


async def setup_rating_commands(bot):
    """Setup rating commands for the bot"""
    await bot.add_cog(RatingCommands(bot))


class RatingCommands(commands.Cog):
    def __init__(self, bot):
        self.bot = bot
        self.db = bot.db
        self.rating_system = bot.rating_system
        self.leaderboard_system = bot.leaderboard_system
        self.audit_log = bot.audit_log

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.guild is None:
            raise app_commands.NoPrivateMessage()
        return True

    def _ensure_host(self, interaction: discord.Interaction):
        RoleManager(self.db.get_settings(interaction.guild.id)).ensure_host(interaction.user)

    async def _post_to_channel(self, channel_id: Optional[int], embed: discord.Embed, purpose: str):
        """Send embed to a configured channel, logging instead of failing"""
        if not channel_id:
            return
        channel = self.bot.get_channel(channel_id)
        if channel is None:
            logger.warning(f'{purpose} channel {channel_id} not found')
            return
        try:
            await channel.send(embed=embed)
        except discord.HTTPException as e:
            logger.warning(f'Could not post to {purpose} channel {channel_id}: {e}')

    async def _sync_leaderboards(self, guild_id: int):
        """Refresh leaderboard panels after an ELO change, if a channel is set"""
        if not self.db.get_settings(guild_id).leaderboard_channel_id:
            return
        try:
            await self.leaderboard_system.sync_all(guild_id)
        except RankedBotError as e:
            logger.warning(f'Leaderboard sync after ELO change failed in {guild_id}: {e}')

    # ============================================================================
    # MATCH RESULTS
    # ============================================================================

    async def _report(self, interaction: discord.Interaction, player: discord.Member, reported_won: bool):
        self._ensure_host(interaction)
        guild_id = interaction.guild.id

        outcome = self.rating_system.report_outcome(guild_id, player.id, reported_won)

        await interaction.response.send_message(
            embed=EmbedTemplates.report_embed(outcome, player.mention)
        )

        settings = self.db.get_settings(guild_id)
        await self._post_to_channel(
            settings.log_channel_id,
            EmbedTemplates.match_log_embed(outcome, player.mention, interaction.user.mention),
            'log'
        )

        details = 'win' if outcome.effective_result else 'loss'
        if outcome.was_overridden:
            details += ' (auto streak override)'
        await self.audit_log.log_action(
            guild_id, 'report_win' if reported_won else 'report_loss',
            interaction.user.id, player.id, details
        )

    @app_commands.command(name='win', description='Record a win for a player')
    @app_commands.describe(winner='Player who won')
    async def win(self, interaction: discord.Interaction, winner: discord.Member):
        await self._report(interaction, winner, True)

    @app_commands.command(name='lose', description='Record a loss for a player')
    @app_commands.describe(loser='Player who lost')
    async def lose(self, interaction: discord.Interaction, loser: discord.Member):
        await self._report(interaction, loser, False)

    # ============================================================================
    # STREAKS
    # ============================================================================

    @app_commands.command(name='setstreak', description='Force the next results of a player')
    @app_commands.describe(player='Player to set the streak for', type='Streak type',
                           count='Number of games (0 clears)')
    @app_commands.choices(type=STREAK_CHOICES)
    async def setstreak(self, interaction: discord.Interaction, player: discord.Member,
                        type: app_commands.Choice[str], count: STREAK_COUNT):
        self._ensure_host(interaction)

        is_valid, error_message = Validators.validate_streak(type.value, count)
        if not is_valid:
            await send_error(interaction, "Invalid Streak", error_message)
            return

        record = self.rating_system.set_auto_streak(interaction.guild.id, player.id, type.value, count)

        await interaction.response.send_message(
            embed=EmbedTemplates.streak_updated_embed(record, type.value, count, player.mention),
            ephemeral=True
        )
        await self.audit_log.log_action(
            interaction.guild.id, 'set_streak', interaction.user.id, player.id, f'{type.value} {count}'
        )

    @app_commands.command(name='clearstreak', description='Clear all streaks of a player')
    @app_commands.describe(player='Player to clear')
    async def clearstreak(self, interaction: discord.Interaction, player: discord.Member):
        self._ensure_host(interaction)

        self.rating_system.clear_all_streaks(interaction.guild.id, player.id)

        await interaction.response.send_message(
            embed=EmbedTemplates.streaks_cleared_embed(player.mention),
            ephemeral=True
        )
        await self.audit_log.log_action(interaction.guild.id, 'clear_streak', interaction.user.id, player.id)

    # ============================================================================
    # ELO AND COUNTERS
    # ============================================================================

    async def _adjust_elo(self, interaction: discord.Interaction, user: discord.Member,
                          mode: str, amount: int, sign: int):
        self._ensure_host(interaction)

        is_valid, error_message = Validators.validate_elo_amount(amount)
        if not is_valid:
            await send_error(interaction, "Invalid Amount", error_message)
            return

        guild_id = interaction.guild.id
        adjustment = self.rating_system.adjust_elo(guild_id, user.id, mode, sign * amount)

        await interaction.response.send_message(
            embed=EmbedTemplates.elo_adjustment_embed(adjustment, sign * amount, user.mention)
        )
        await self.audit_log.log_action(
            guild_id, 'add_elo' if sign > 0 else 'remove_elo', interaction.user.id, user.id,
            f'{mode} {adjustment.old_elo} -> {adjustment.new_elo}'
        )
        await self._sync_leaderboards(guild_id)

    @app_commands.command(name='addelo', description='Add ELO to a player')
    @app_commands.describe(amount='ELO to add (1-1000)', user='Player to adjust', mode='ELO mode')
    @app_commands.choices(mode=MODE_CHOICES)
    async def addelo(self, interaction: discord.Interaction, amount: ELO_AMOUNT, user: discord.Member,
                     mode: app_commands.Choice[str]):
        await self._adjust_elo(interaction, user, mode.value, amount, 1)

    @app_commands.command(name='removeelo', description='Remove ELO from a player')
    @app_commands.describe(amount='ELO to remove (1-1000)', user='Player to adjust', mode='ELO mode')
    @app_commands.choices(mode=MODE_CHOICES)
    async def removeelo(self, interaction: discord.Interaction, amount: ELO_AMOUNT, user: discord.Member,
                        mode: app_commands.Choice[str]):
        await self._adjust_elo(interaction, user, mode.value, amount, -1)

    @app_commands.command(name='adjuststats', description='Correct the wins or losses of a player')
    @app_commands.describe(user='Player to adjust', field='Counter to change',
                           amount='Amount to add (negative to subtract)')
    @app_commands.choices(field=COUNTER_CHOICES)
    async def adjuststats(self, interaction: discord.Interaction, user: discord.Member,
                          field: app_commands.Choice[str], amount: int):
        self._ensure_host(interaction)

        is_valid, error_message = Validators.validate_counter_adjustment(field.value, amount)
        if not is_valid:
            await send_error(interaction, "Invalid Adjustment", error_message)
            return

        new_value = self.rating_system.adjust_counters(interaction.guild.id, user.id, field.value, amount)

        await interaction.response.send_message(
            embed=EmbedTemplates.counter_adjusted_embed(field.value, amount, new_value, user.mention),
            ephemeral=True
        )
        await self.audit_log.log_action(
            interaction.guild.id, 'adjust_stats', interaction.user.id, user.id, f'{field.value} {amount:+d}'
        )

    @app_commands.command(name='dodge', description='Record that a player dodged a match')
    @app_commands.describe(user='Player who dodged')
    async def dodge(self, interaction: discord.Interaction, user: discord.Member):
        self._ensure_host(interaction)
        guild_id = interaction.guild.id

        record = self.rating_system.record_dodge(guild_id, user.id)

        await interaction.response.send_message(
            embed=EmbedTemplates.success_embed(
                "Dodge Recorded",
                f"{user.mention} now has **{record.dodges}** recorded dodges."
            ),
            ephemeral=True
        )

        settings = self.db.get_settings(guild_id)
        await self._post_to_channel(
            settings.dodge_channel_id,
            EmbedTemplates.dodge_embed(record, user.mention, interaction.user.mention),
            'dodge'
        )
        await self.audit_log.log_action(guild_id, 'dodge', interaction.user.id, user.id)

    # ============================================================================
    # LEADERBOARD AND AUDIT
    # ============================================================================

    @app_commands.command(name='refreshleaderboard', description='Refresh the leaderboard panels')
    async def refreshleaderboard(self, interaction: discord.Interaction):
        self._ensure_host(interaction)

        await interaction.response.defer(ephemeral=True, thinking=True)
        results = await self.leaderboard_system.sync_all(interaction.guild.id)

        summary = "\n".join(
            f"**{result.mode}:** panel {result.action} ({result.entry_count} players)" for result in results
        )
        await interaction.followup.send(
            embed=EmbedTemplates.success_embed("Leaderboard Refreshed", summary),
            ephemeral=True
        )

    @app_commands.command(name='auditlog', description='Show recent host actions')
    @app_commands.describe(limit='Number of entries to show')
    async def auditlog(self, interaction: discord.Interaction, limit: Optional[int] = None):
        self._ensure_host(interaction)

        limit = limit or BOT_LIMITS['audit_page_size']
        limit = max(1, min(limit, BOT_LIMITS['max_audit_page_size']))
        entries = await self.audit_log.recent_actions(interaction.guild.id, limit)

        await interaction.response.send_message(
            embed=EmbedTemplates.audit_log_embed(entries),
            ephemeral=True
        )
