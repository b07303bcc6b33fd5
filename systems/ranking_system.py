"""
Ranking System
Maps ELO ratings onto named rank tiers with display metadata
"""

from dataclasses import dataclass
from typing import List, Optional
from config import RANK_TIERS


@dataclass(frozen=True)
class RankTier:
    name: str
    emoji: str
    color: int
    min_elo: Optional[int] = None

    @property
    def label(self) -> str:
        return f'{self.emoji} {self.name}'


TIERS: List[RankTier] = [RankTier(**tier) for tier in RANK_TIERS]


def get_rank_from_elo(elo: int) -> RankTier:
    """
    Get the rank tier for an ELO rating

    Tiers are closed-open intervals, so a rating sitting exactly on a
    threshold belongs to the higher tier.

    Args:
        elo: Player's ELO rating

    Returns:
        RankTier with name, emoji and embed color
    """
    for tier in reversed(TIERS):
        if tier.min_elo is not None and elo >= tier.min_elo:
            return tier
    return TIERS[0]


def get_tier_legend() -> str:
    """Describe every ranked tier's ELO range, highest first"""
    lines = []
    ranked = [tier for tier in TIERS if tier.min_elo is not None]
    for index in range(len(ranked) - 1, -1, -1):
        tier = ranked[index]
        if index == len(ranked) - 1:
            elo_range = f'{tier.min_elo}+'
        else:
            elo_range = f'{tier.min_elo}-{ranked[index + 1].min_elo - 1}'
        lines.append(f'{tier.emoji} {tier.name}: {elo_range}')
    return '\n'.join(lines)
