"""
Discord Embed Templates
Provides consistent embed formatting across the bot
"""

import discord
from datetime import datetime
from typing import Optional, Dict, Any, List
from config import EMBED_COLORS, BOT_CONFIG, STREAK_TYPES, LEADERBOARD_MEDALS, get_match_type
from database.models import PlayerRecord
from systems.ranking_system import get_rank_from_elo, get_tier_legend


class EmbedTemplates:
    @staticmethod
    def create_base_embed(title: str, description: str = "", color: int = EMBED_COLORS['info'],
                          footer: Optional[str] = None, timestamp: bool = True) -> discord.Embed:
        """Create a base embed with common formatting"""
        embed = discord.Embed(
            title=title,
            description=description,
            color=color,
            timestamp=datetime.now() if timestamp else None
        )

        embed.set_footer(text=footer or BOT_CONFIG['footer_text'])
        return embed

    @staticmethod
    def error_embed(title: str = "Error", description: str = "") -> discord.Embed:
        """Create an error embed"""
        return EmbedTemplates.create_base_embed(
            title=f"❌ {title}",
            description=description,
            color=EMBED_COLORS['error']
        )

    @staticmethod
    def success_embed(title: str = "Success", description: str = "") -> discord.Embed:
        """Create a success embed"""
        return EmbedTemplates.create_base_embed(
            title=f"✅ {title}",
            description=description,
            color=EMBED_COLORS['success']
        )

    @staticmethod
    def info_embed(title: str, description: str = "") -> discord.Embed:
        return EmbedTemplates.create_base_embed(
            title=title,
            description=description,
            color=EMBED_COLORS['info']
        )

    # ------------------------------------------------------------------
    # Match rooms
    # ------------------------------------------------------------------

    @staticmethod
    def ranked_panel_embed() -> discord.Embed:
        """Create the panel posted by /setup"""
        embed = EmbedTemplates.create_base_embed(
            title="⚔️ Ranked Matches",
            description="Press a button below to open a private match room. "
                        "A host will join you to run the match.",
            color=EMBED_COLORS['panel'],
            timestamp=False
        )

        for match_type in ('1v1', '2v2'):
            info = get_match_type(match_type)
            embed.add_field(
                name=info['display_name'],
                value=f"{info['description']} ({info['player_count']} players)",
                inline=False
            )

        return embed

    @staticmethod
    def match_welcome_embed(match_type: str, creator_mention: str) -> discord.Embed:
        """Create the first message posted in a new match room"""
        info = get_match_type(match_type)
        description = (
            f"Welcome {creator_mention}!\n\n"
            "A host will be with you shortly. Please wait for your opponent(s) to join.\n\n"
            f"**Match Type:** {match_type} ({info['player_count']} players)\n\n"
            "**Commands:**\n"
            "• `/add @user` - Add someone to this match\n"
            "• `/stats` - View your stats"
        )
        return EmbedTemplates.create_base_embed(
            title=f"{match_type} Ranked Match",
            description=description,
            color=EMBED_COLORS['panel'],
            footer="Please be patient while waiting for a host",
            timestamp=False
        )

    @staticmethod
    def user_added_embed(user_mention: str) -> discord.Embed:
        return EmbedTemplates.create_base_embed(
            title="User Added",
            description=f"{user_mention} has been added to this match.",
            color=EMBED_COLORS['success']
        )

    @staticmethod
    def match_closed_embed(delay_seconds: float) -> discord.Embed:
        return EmbedTemplates.create_base_embed(
            title="Match Closed",
            description=f"This match has been closed by a host.\n"
                        f"This channel will be deleted in {delay_seconds:g} seconds.",
            color=EMBED_COLORS['error']
        )

    # ------------------------------------------------------------------
    # Results and streaks
    # ------------------------------------------------------------------

    @staticmethod
    def report_embed(outcome, player_mention: str) -> discord.Embed:
        """
        Create the reply to /win or /lose

        Args:
            outcome: ReportOutcome from the rating system
            player_mention: Mention of the reported player

        Returns:
            Embed whose title and footer show whether an auto streak
            changed the reported result
        """
        record = outcome.record
        won = outcome.effective_result

        if not outcome.was_overridden:
            title = "Win Recorded" if won else "Loss Recorded"
            description = (f"{player_mention} has been awarded a win!" if won
                           else f"{player_mention} has been given a loss.")
        elif won:
            title = "Win Recorded (Auto Streak Override)"
            description = f"{player_mention} was awarded a win due to Auto Win Streak!"
        else:
            title = "Loss Recorded (Auto Streak Override)"
            description = f"{player_mention} was given a loss due to Auto Lose Streak!"

        if outcome.was_overridden and won != outcome.reported_won:
            footer = (f"{STREAK_TYPES['win' if won else 'lose']} Streak applied - "
                      f"result was converted to a {'win' if won else 'loss'}!")
        elif record.auto_win_streak > 0:
            footer = f"Auto Win Streak: {record.auto_win_streak} games remaining"
        elif record.auto_lose_streak > 0:
            footer = f"Auto Lose Streak: {record.auto_lose_streak} games remaining"
        elif outcome.was_overridden:
            footer = "Auto streak applied - this was the last forced game"
        else:
            footer = "Good game!" if outcome.reported_won else "Better luck next time!"

        embed = EmbedTemplates.create_base_embed(
            title=title,
            description=description,
            color=EMBED_COLORS['success'] if won else EMBED_COLORS['error'],
            footer=footer
        )
        embed.add_field(name="Total Wins", value=str(record.wins), inline=True)
        embed.add_field(name="Total Losses", value=str(record.losses), inline=True)
        embed.add_field(name="Current Streak", value=record.streak_text, inline=True)
        return embed

    @staticmethod
    def match_log_embed(outcome, player_mention: str, reporter_mention: str) -> discord.Embed:
        """Create the log channel copy of a reported result"""
        record = outcome.record
        won = outcome.effective_result
        suffix = " (Auto Streak)" if outcome.was_overridden else ""

        embed = EmbedTemplates.create_base_embed(
            title="Match Result",
            description=f"**{player_mention}** {'won' if won else 'lost'} a match!{suffix}",
            color=EMBED_COLORS['success'] if won else EMBED_COLORS['error']
        )
        embed.add_field(name="Reported By", value=reporter_mention, inline=True)
        embed.add_field(name="New Record", value=f"{record.wins}W - {record.losses}L", inline=True)
        return embed

    @staticmethod
    def streak_updated_embed(record: PlayerRecord, kind: str, count: int,
                             player_mention: str) -> discord.Embed:
        action_text = "cleared" if count == 0 else f"set to {count} games"
        embed = EmbedTemplates.create_base_embed(
            title="Streak Updated",
            description=f"{STREAK_TYPES[kind]} streak for {player_mention} has been {action_text}.",
            color=EMBED_COLORS['success'] if kind == 'win' else EMBED_COLORS['error']
        )
        embed.add_field(name="Auto Win Streak", value=f"{record.auto_win_streak} games", inline=True)
        embed.add_field(name="Auto Lose Streak", value=f"{record.auto_lose_streak} games", inline=True)
        return embed

    @staticmethod
    def streaks_cleared_embed(player_mention: str) -> discord.Embed:
        return EmbedTemplates.info_embed(
            "Streaks Cleared",
            f"All streaks for {player_mention} have been cleared."
        )

    # ------------------------------------------------------------------
    # ELO and statistics
    # ------------------------------------------------------------------

    @staticmethod
    def elo_adjustment_embed(adjustment, amount: int, user_mention: str) -> discord.Embed:
        """Create the reply to /addelo and /removeelo, amount is negative for removals"""
        if amount > 0:
            embed = EmbedTemplates.create_base_embed(
                title="ELO Added",
                description=f"{user_mention} has received **+{abs(amount)}** {adjustment.mode} ELO!",
                color=EMBED_COLORS['success']
            )
        else:
            embed = EmbedTemplates.create_base_embed(
                title="ELO Removed",
                description=f"{user_mention} has lost **-{abs(amount)}** {adjustment.mode} ELO.",
                color=EMBED_COLORS['error']
            )

        embed.add_field(name="New ELO", value=str(adjustment.new_elo), inline=True)
        embed.add_field(name="Rank", value=adjustment.new_tier.label, inline=True)

        if adjustment.tier_changed:
            name = "🎉 Rank Up!" if adjustment.new_elo > adjustment.old_elo else "📉 Rank Down"
            embed.add_field(
                name=name,
                value=f"{adjustment.old_tier.name} → {adjustment.new_tier.name}",
                inline=False
            )
        return embed

    @staticmethod
    def counter_adjusted_embed(field: str, amount: int, new_value: int,
                               user_mention: str) -> discord.Embed:
        return EmbedTemplates.success_embed(
            "Stats Adjusted",
            f"{field.capitalize()} for {user_mention} adjusted by **{amount:+d}**.\n"
            f"New value: **{new_value}**"
        )

    @staticmethod
    def user_stats_embed(record: PlayerRecord, player_name: str,
                         show_auto_streaks: bool = False) -> discord.Embed:
        """
        Create a player statistics embed

        Args:
            record: Player record
            player_name: Display name used in the title
            show_auto_streaks: Include the hidden auto streak counters

        Returns:
            Embed colored by the player's 1v1 tier
        """
        tier_1v1 = get_rank_from_elo(record.elo_1v1)
        tier_2v2 = get_rank_from_elo(record.elo_2v2)

        embed = EmbedTemplates.create_base_embed(
            title=f"{tier_1v1.emoji} Stats for {player_name}",
            description=(
                f"**1v1:** {tier_1v1.label} - {record.elo_1v1} ELO\n"
                f"**2v2:** {tier_2v2.label} - {record.elo_2v2} ELO"
            ),
            color=tier_1v1.color
        )

        embed.add_field(name="Wins", value=str(record.wins), inline=True)
        embed.add_field(name="Losses", value=str(record.losses), inline=True)
        embed.add_field(name="Win Rate", value=f"{record.win_rate:.1f}%", inline=True)
        embed.add_field(name="Current Streak", value=record.streak_text, inline=True)
        embed.add_field(name="Dodges", value=str(record.dodges), inline=True)
        embed.add_field(name="Legacy ELO", value=str(record.elo_legacy), inline=True)

        if show_auto_streaks:
            embed.add_field(name="Auto Win Streak", value=f"{record.auto_win_streak} games", inline=True)
            embed.add_field(name="Auto Lose Streak", value=f"{record.auto_lose_streak} games", inline=True)

        return embed

    @staticmethod
    def leaderboard_embed(records: List[PlayerRecord], mode: str) -> discord.Embed:
        """Create a leaderboard embed for one ELO mode"""
        embed = EmbedTemplates.create_base_embed(
            title=f"🏆 {mode} ELO Leaderboard - Top 10",
            color=EMBED_COLORS['leaderboard'],
            footer="Hosts adjust ELO with /addelo and /removeelo"
        )

        if not records:
            embed.description = "No players have been registered yet!"
        else:
            lines = []
            for index, record in enumerate(records):
                position = LEADERBOARD_MEDALS[index] if index < len(LEADERBOARD_MEDALS) else f"**{index + 1}.**"
                elo = record.get_elo(mode)
                tier = get_rank_from_elo(elo)
                lines.append(f"{position} <@{record.user_id}> - {elo} ELO {tier.emoji} {tier.name}")
            embed.description = "\n".join(lines)

        embed.add_field(name="📊 Rank Tiers", value=get_tier_legend(), inline=False)
        return embed

    # ------------------------------------------------------------------
    # Configuration and moderation
    # ------------------------------------------------------------------

    @staticmethod
    def hosts_embed(role_mentions: str) -> discord.Embed:
        return EmbedTemplates.create_base_embed(
            title="Current Host Roles",
            description=role_mentions or "No host roles set",
            color=EMBED_COLORS['info'],
            footer="Use /sethosts to change host roles"
        )

    @staticmethod
    def dodge_embed(record: PlayerRecord, user_mention: str, reporter_mention: str) -> discord.Embed:
        embed = EmbedTemplates.create_base_embed(
            title="🏃 Dodge Recorded",
            description=f"{user_mention} dodged a ranked match.",
            color=EMBED_COLORS['warning']
        )
        embed.add_field(name="Total Dodges", value=str(record.dodges), inline=True)
        embed.add_field(name="Reported By", value=reporter_mention, inline=True)
        return embed

    @staticmethod
    def audit_log_embed(entries: List[Dict[str, Any]]) -> discord.Embed:
        """Create a listing of recent host actions, newest first"""
        embed = EmbedTemplates.create_base_embed(
            title="📜 Recent Host Actions",
            color=EMBED_COLORS['neutral']
        )

        if not entries:
            embed.description = "No actions have been logged yet."
            return embed

        lines = []
        for entry in entries:
            line = f"`#{entry['log_id']}` **{entry['action_type']}**"
            if entry.get('actor_id'):
                line += f" by <@{entry['actor_id']}>"
            if entry.get('target_id'):
                line += f" → <@{entry['target_id']}>"
            if entry.get('details'):
                line += f" ({entry['details']})"
            lines.append(line)

        embed.description = "\n".join(lines)
        return embed
