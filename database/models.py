"""
Record Models
Player, guild settings and match room records with their JSON (de)serialization
and the load-time normalization of older data files
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List, Tuple
from config import ELO_CONFIG, BOT_LIMITS


def player_key(guild_id: int, user_id: int) -> str:
    """Key of a player in the players table"""
    return f'{guild_id}-{user_id}'


def _snowflake(value) -> Optional[int]:
    if value is None or value == '':
        return None
    return int(value)


def _snowflake_str(value: Optional[int]) -> Optional[str]:
    return None if value is None else str(value)


def _unique(values) -> List[int]:
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


@dataclass
class PlayerRecord:
    guild_id: int
    user_id: int
    wins: int = 0
    losses: int = 0
    current_streak: int = 0
    auto_win_streak: int = 0
    auto_lose_streak: int = 0
    elo_legacy: int = ELO_CONFIG['starting_elo']
    elo_1v1: int = ELO_CONFIG['starting_elo']
    elo_2v2: int = ELO_CONFIG['starting_elo']
    dodges: int = 0

    @property
    def key(self) -> str:
        return player_key(self.guild_id, self.user_id)

    @property
    def games_played(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        """Win percentage rounded to one decimal, 0.0 with no games"""
        if self.games_played == 0:
            return 0.0
        return round(self.wins / self.games_played * 100, 1)

    @property
    def streak_text(self) -> str:
        if self.current_streak > 0:
            return f'{self.current_streak} Win Streak'
        if self.current_streak < 0:
            return f'{abs(self.current_streak)} Lose Streak'
        return 'No Streak'

    def get_elo(self, mode: str) -> int:
        return getattr(self, _elo_attribute(mode))

    def set_elo(self, mode: str, value: int):
        setattr(self, _elo_attribute(mode), value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'userId': str(self.user_id),
            'guildId': str(self.guild_id),
            'wins': self.wins,
            'losses': self.losses,
            'currentStreak': self.current_streak,
            'autoWinStreak': self.auto_win_streak,
            'autoLoseStreak': self.auto_lose_streak,
            'eloLegacy': self.elo_legacy,
            'elo1v1': self.elo_1v1,
            'elo2v2': self.elo_2v2,
            'dodges': self.dodges,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerRecord':
        starting_elo = ELO_CONFIG['starting_elo']
        return cls(
            guild_id=int(data['guildId']),
            user_id=int(data['userId']),
            wins=int(data.get('wins', 0)),
            losses=int(data.get('losses', 0)),
            current_streak=int(data.get('currentStreak', 0)),
            auto_win_streak=int(data.get('autoWinStreak', 0)),
            auto_lose_streak=int(data.get('autoLoseStreak', 0)),
            elo_legacy=int(data.get('eloLegacy', starting_elo)),
            elo_1v1=int(data.get('elo1v1', starting_elo)),
            elo_2v2=int(data.get('elo2v2', starting_elo)),
            dodges=int(data.get('dodges', 0)),
        )


def _elo_attribute(mode: str) -> str:
    if mode not in ELO_CONFIG['modes']:
        raise ValueError(f'Unknown ELO mode: {mode}')
    return f'elo_{mode}'


@dataclass
class GuildSettings:
    guild_id: int
    host_role_ids: List[int] = field(default_factory=list)
    match_category_id: Optional[int] = None
    log_channel_id: Optional[int] = None
    leaderboard_channel_id: Optional[int] = None
    leaderboard_message_ids: Dict[str, Optional[int]] = field(
        default_factory=lambda: {mode: None for mode in ELO_CONFIG['modes']}
    )
    dodge_channel_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hostRoles': [str(role_id) for role_id in self.host_role_ids],
            'matchCategory': _snowflake_str(self.match_category_id),
            'logChannel': _snowflake_str(self.log_channel_id),
            'leaderboardChannel': _snowflake_str(self.leaderboard_channel_id),
            'leaderboardMessages': {
                mode: _snowflake_str(message_id)
                for mode, message_id in self.leaderboard_message_ids.items()
            },
            'dodgeChannel': _snowflake_str(self.dodge_channel_id),
        }

    @classmethod
    def from_dict(cls, guild_id: int, data: Dict[str, Any]) -> 'GuildSettings':
        stored_messages = data.get('leaderboardMessages') or {}
        return cls(
            guild_id=int(guild_id),
            host_role_ids=[int(role_id) for role_id in data.get('hostRoles', [])],
            match_category_id=_snowflake(data.get('matchCategory')),
            log_channel_id=_snowflake(data.get('logChannel')),
            leaderboard_channel_id=_snowflake(data.get('leaderboardChannel')),
            leaderboard_message_ids={
                mode: _snowflake(stored_messages.get(mode)) for mode in ELO_CONFIG['modes']
            },
            dodge_channel_id=_snowflake(data.get('dodgeChannel')),
        )


@dataclass
class MatchRoom:
    room_id: int
    guild_id: Optional[int]
    match_type: str
    creator_id: int
    participants: List[int] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def has_participant(self, user_id: int) -> bool:
        return user_id in self.participants

    def to_dict(self) -> Dict[str, Any]:
        return {
            'guildId': _snowflake_str(self.guild_id),
            'type': self.match_type,
            'creator': str(self.creator_id),
            'participants': [str(user_id) for user_id in self.participants],
            'createdAt': int(self.created_at.timestamp() * 1000),
        }

    @classmethod
    def from_dict(cls, room_id: int, data: Dict[str, Any]) -> 'MatchRoom':
        created_at = data.get('createdAt')
        if isinstance(created_at, str):
            created = datetime.fromisoformat(created_at)
        elif created_at is not None:
            created = datetime.fromtimestamp(created_at / 1000, tz=timezone.utc)
        else:
            created = datetime.now(timezone.utc)

        return cls(
            room_id=int(room_id),
            guild_id=_snowflake(data.get('guildId')),
            match_type=data['type'],
            creator_id=int(data['creator']),
            participants=[int(user_id) for user_id in data.get('participants', [])],
            created_at=created,
        )


# ============================================================================
# LOAD-TIME NORMALIZATION
# ============================================================================

def normalize_player(data: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
    """
    Bring a raw players.json entry up to the current schema

    Args:
        data: Raw entry as read from disk

    Returns:
        Tuple of (normalized_entry, changed)
    """
    entry = dict(data)
    starting_elo = ELO_CONFIG['starting_elo']

    # Single-track files stored the rating under 'elo'
    if 'elo' in entry:
        legacy = entry.pop('elo')
        entry.setdefault('eloLegacy', legacy if legacy is not None else starting_elo)

    defaults = {
        'wins': 0,
        'losses': 0,
        'currentStreak': 0,
        'autoWinStreak': 0,
        'autoLoseStreak': 0,
        'eloLegacy': starting_elo,
        'elo1v1': starting_elo,
        'elo2v2': starting_elo,
        'dodges': 0,
    }
    for key, default in defaults.items():
        if entry.get(key) is None:
            entry[key] = default

    for key in ('wins', 'losses', 'autoWinStreak', 'autoLoseStreak', 'dodges',
                'eloLegacy', 'elo1v1', 'elo2v2'):
        entry[key] = max(ELO_CONFIG['elo_floor'], int(entry[key]))

    # Auto win takes priority when reporting, so it survives a conflict
    if entry['autoWinStreak'] > 0 and entry['autoLoseStreak'] > 0:
        entry['autoLoseStreak'] = 0

    entry['userId'] = str(entry['userId'])
    entry['guildId'] = str(entry['guildId'])
    return entry, entry != data


def normalize_settings(data: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
    """Bring a raw settings.json entry up to the current schema"""
    entry = dict(data)

    host_roles = _unique(str(role_id) for role_id in entry.get('hostRoles') or [])
    entry['hostRoles'] = host_roles[:BOT_LIMITS['max_host_roles']]

    for key in ('matchCategory', 'logChannel', 'leaderboardChannel', 'dodgeChannel'):
        entry.setdefault(key, None)

    messages = dict(entry.get('leaderboardMessages') or {})
    for mode in ELO_CONFIG['modes']:
        messages.setdefault(mode, None)
    entry['leaderboardMessages'] = messages

    return entry, entry != data


def normalize_match(data: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
    """Bring a raw matches.json entry up to the current schema"""
    entry = dict(data)
    creator = str(entry['creator'])
    participants = _unique(str(user_id) for user_id in entry.get('participants') or [])

    # The creator is always the first participant
    if creator in participants:
        participants.remove(creator)
    entry['participants'] = [creator] + participants
    entry['creator'] = creator
    entry.setdefault('guildId', None)

    return entry, entry != data
