"""Tests for the ELO to tier mapping."""

import pytest

from systems.ranking_system import get_rank_from_elo, get_tier_legend


@pytest.mark.parametrize('elo, tier', [
    (0, 'UNRANKED'),
    (799, 'UNRANKED'),
    (800, 'BRONZE'),
    (999, 'BRONZE'),
    (1000, 'SILVER'),
    (1200, 'GOLD'),
    (1400, 'PLATINUM'),
    (1599, 'PLATINUM'),
    (1600, 'DIAMOND'),
    (5000, 'DIAMOND'),
])
def test_tier_boundaries(elo, tier):
    assert get_rank_from_elo(elo).name == tier


def test_tier_display_metadata():
    diamond = get_rank_from_elo(1600)
    assert diamond.emoji == '💎'
    assert diamond.color == 0x00BFFF
    assert diamond.label == '💎 DIAMOND'

    unranked = get_rank_from_elo(10)
    assert unranked.color == 0x808080


def test_tier_legend_is_highest_first():
    lines = get_tier_legend().split('\n')
    assert lines[0] == '💎 DIAMOND: 1600+'
    assert lines[1] == '🏆 PLATINUM: 1400-1599'
    assert lines[-1] == '🥉 BRONZE: 800-999'
