"""
Rating System
Applies reported outcomes, auto streak overrides and manual ELO/counter
adjustments to player records
"""

import logging
from dataclasses import dataclass
from typing import List
from database.store import Database
from database.models import PlayerRecord
from systems.ranking_system import RankTier, get_rank_from_elo
from config import ELO_CONFIG, COUNTER_FIELDS, STREAK_TYPES

logger = logging.getLogger('RankedBot.RatingSystem')


@dataclass
class ReportOutcome:
    """Result of reporting a match outcome for one player"""
    record: PlayerRecord
    effective_result: bool
    was_overridden: bool
    reported_won: bool

    def to_dict(self) -> dict:
        return {
            'record': self.record.to_dict(),
            'effectiveResult': self.effective_result,
            'wasOverridden': self.was_overridden,
        }


@dataclass
class EloAdjustment:
    record: PlayerRecord
    mode: str
    old_elo: int
    new_elo: int
    old_tier: RankTier
    new_tier: RankTier

    @property
    def tier_changed(self) -> bool:
        return self.old_tier.name != self.new_tier.name


class RatingSystem:
    def __init__(self, database: Database):
        self.db = database

    def get_player(self, guild_id: int, user_id: int) -> PlayerRecord:
        return self.db.get_player(guild_id, user_id)

    def get_guild_players(self, guild_id: int) -> List[PlayerRecord]:
        return self.db.get_guild_players(guild_id)

    def report_outcome(self, guild_id: int, user_id: int, reported_won: bool) -> ReportOutcome:
        """
        Record a win or loss reported by a host

        A pending auto win streak forces a win, otherwise a pending auto lose
        streak forces a loss; either way one game is consumed from the counter.

        Args:
            guild_id: Guild the match was played in
            user_id: Player the outcome is reported for
            reported_won: Outcome as reported by the host

        Returns:
            ReportOutcome with the updated record and both result flags
        """
        record = self.db.get_player(guild_id, user_id)

        effective_result = reported_won
        was_overridden = False

        if record.auto_win_streak > 0:
            effective_result = True
            record.auto_win_streak -= 1
            was_overridden = True
        elif record.auto_lose_streak > 0:
            effective_result = False
            record.auto_lose_streak -= 1
            was_overridden = True

        if effective_result:
            record.wins += 1
            if record.current_streak >= 0:
                record.current_streak += 1
            else:
                record.current_streak = 1
        else:
            record.losses += 1
            if record.current_streak <= 0:
                record.current_streak -= 1
            else:
                record.current_streak = -1

        self.db.save_players()

        if was_overridden:
            logger.info(
                f'Reported {"win" if reported_won else "loss"} for {user_id} in {guild_id} '
                f'overridden to {"win" if effective_result else "loss"} by auto streak'
            )
        else:
            logger.info(f'Recorded {"win" if effective_result else "loss"} for {user_id} in {guild_id}')

        return ReportOutcome(
            record=record,
            effective_result=effective_result,
            was_overridden=was_overridden,
            reported_won=reported_won,
        )

    def adjust_elo(self, guild_id: int, user_id: int, mode: str, delta: int) -> EloAdjustment:
        """
        Add a flat amount to one ELO track, floored at 0

        Args:
            guild_id: Guild of the player
            user_id: Player to adjust
            mode: '1v1' or '2v2'
            delta: Points to add (negative to remove)

        Returns:
            EloAdjustment with old/new values and tiers
        """
        if mode not in ELO_CONFIG['modes']:
            raise ValueError(f'Unknown ELO mode: {mode}')

        record = self.db.get_player(guild_id, user_id)
        old_elo = record.get_elo(mode)
        new_elo = max(ELO_CONFIG['elo_floor'], old_elo + delta)
        record.set_elo(mode, new_elo)
        self.db.save_players()

        logger.info(f'{mode} ELO for {user_id} in {guild_id}: {old_elo} -> {new_elo} ({delta:+d})')

        return EloAdjustment(
            record=record,
            mode=mode,
            old_elo=old_elo,
            new_elo=new_elo,
            old_tier=get_rank_from_elo(old_elo),
            new_tier=get_rank_from_elo(new_elo),
        )

    def adjust_counters(self, guild_id: int, user_id: int, field: str, delta: int) -> int:
        """Correct the wins or losses counter by delta, floored at 0"""
        if field not in COUNTER_FIELDS:
            raise ValueError(f'Unknown counter: {field}')

        record = self.db.get_player(guild_id, user_id)
        new_value = max(0, getattr(record, field) + delta)
        setattr(record, field, new_value)
        self.db.save_players()

        logger.info(f'{field} for {user_id} in {guild_id} adjusted by {delta:+d} to {new_value}')
        return new_value

    def set_auto_streak(self, guild_id: int, user_id: int, kind: str, count: int) -> PlayerRecord:
        """
        Arm an auto win or auto lose streak for the next count reports

        The other kind is always cleared; a count of 0 clears both.
        """
        if kind not in STREAK_TYPES:
            raise ValueError(f'Unknown streak type: {kind}')
        if count < 0:
            raise ValueError('Streak count cannot be negative')

        record = self.db.get_player(guild_id, user_id)
        if kind == 'win':
            record.auto_win_streak = count
            record.auto_lose_streak = 0
        else:
            record.auto_lose_streak = count
            record.auto_win_streak = 0
        self.db.save_players()

        logger.info(f'{STREAK_TYPES[kind]} streak for {user_id} in {guild_id} set to {count}')
        return record

    def clear_all_streaks(self, guild_id: int, user_id: int) -> PlayerRecord:
        record = self.db.get_player(guild_id, user_id)
        record.auto_win_streak = 0
        record.auto_lose_streak = 0
        record.current_streak = 0
        self.db.save_players()

        logger.info(f'Cleared all streaks for {user_id} in {guild_id}')
        return record

    def record_dodge(self, guild_id: int, user_id: int) -> PlayerRecord:
        record = self.db.get_player(guild_id, user_id)
        record.dodges += 1
        self.db.save_players()

        logger.info(f'Recorded dodge #{record.dodges} for {user_id} in {guild_id}')
        return record
