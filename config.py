"""
RankedBot Configuration
Contains bot settings, storage paths, ELO bounds and rank tier structure
"""

import os

# Bot Configuration
BOT_CONFIG = {
    'bot_token': os.getenv('DISCORD_BOT_TOKEN'),
    'health_host': '0.0.0.0',
    'health_port': int(os.getenv('PORT', 5000)),
    'footer_text': 'Ranked System',
}

# Data Storage Configuration
DATA_CONFIG = {
    'data_dir': os.getenv('RANKED_DATA_DIR', './data'),
    'settings_file': 'settings.json',
    'matches_file': 'matches.json',
    'players_file': 'players.json',
    'audit_db': 'audit.db',
}

# ELO Configuration
ELO_CONFIG = {
    'starting_elo': 800,
    'elo_floor': 0,
    'modes': ['1v1', '2v2'],
    'min_adjustment': 1,
    'max_adjustment': 1000,
}

# Match Types offered on the ranked panel
MATCH_TYPES = {
    '1v1': {
        'display_name': '1v1 Ranked',
        'player_count': 2,
        'description': 'Challenge a single opponent',
        'button_id': 'start_1v1',
    },
    '2v2': {
        'display_name': '2v2 Ranked',
        'player_count': 4,
        'description': 'Team up with a friend and challenge two opponents',
        'button_id': 'start_2v2',
    },
}

# Rank tiers, lowest first. A tier covers [min_elo, next tier's min_elo)
RANK_TIERS = [
    {'name': 'UNRANKED', 'emoji': '⚪', 'color': 0x808080, 'min_elo': None},
    {'name': 'BRONZE', 'emoji': '🥉', 'color': 0xCD7F32, 'min_elo': 800},
    {'name': 'SILVER', 'emoji': '🥈', 'color': 0xC0C0C0, 'min_elo': 1000},
    {'name': 'GOLD', 'emoji': '🥇', 'color': 0xFFD700, 'min_elo': 1200},
    {'name': 'PLATINUM', 'emoji': '🏆', 'color': 0xE5E4E2, 'min_elo': 1400},
    {'name': 'DIAMOND', 'emoji': '💎', 'color': 0x00BFFF, 'min_elo': 1600},
]

# Auto streak kinds accepted by /setstreak
STREAK_TYPES = {
    'win': 'Auto Win',
    'lose': 'Auto Lose',
}

# Manually correctable counters
COUNTER_FIELDS = ['wins', 'losses']

# Embed Colors
EMBED_COLORS = {
    'success': 0x57F287,
    'error': 0xED4245,
    'info': 0x5865F2,
    'panel': 0x8B0000,
    'leaderboard': 0xFFD700,
    'warning': 0xFEE75C,
    'neutral': 0x808080,
}

# Bot Limits and Timeouts
BOT_LIMITS = {
    'max_host_roles': 3,
    'leaderboard_size': 10,
    'room_delete_delay_seconds': 5,
    'max_auto_streak': 100,
    'audit_page_size': 10,
    'max_audit_page_size': 25,
}

LEADERBOARD_MEDALS = ['🥇', '🥈', '🥉']


def get_match_type(match_type: str) -> dict:
    """Get display data for a match type"""
    return MATCH_TYPES.get(match_type, {})
