"""
Input Validation Helpers
Provides validation functions for command options
"""

from typing import Tuple
from config import ELO_CONFIG, STREAK_TYPES, COUNTER_FIELDS, BOT_LIMITS


class Validators:
    @staticmethod
    def validate_elo_amount(amount: int) -> Tuple[bool, str]:
        """
        Validate a manual ELO adjustment amount

        Args:
            amount: Points to add or remove

        Returns:
            Tuple of (is_valid, error_message)
        """
        low, high = ELO_CONFIG['min_adjustment'], ELO_CONFIG['max_adjustment']
        if not low <= amount <= high:
            return False, f"Amount must be between {low} and {high}"

        return True, ""

    @staticmethod
    def validate_streak(kind: str, count: int) -> Tuple[bool, str]:
        """
        Validate an auto streak type and game count

        Args:
            kind: 'win' or 'lose'
            count: Number of games, 0 clears

        Returns:
            Tuple of (is_valid, error_message)
        """
        if kind not in STREAK_TYPES:
            valid_types = ", ".join(STREAK_TYPES.keys())
            return False, f"Invalid streak type. Valid types: {valid_types}"

        if not 0 <= count <= BOT_LIMITS['max_auto_streak']:
            return False, f"Count must be between 0 and {BOT_LIMITS['max_auto_streak']}"

        return True, ""

    @staticmethod
    def validate_counter_adjustment(field: str, amount: int) -> Tuple[bool, str]:
        if field not in COUNTER_FIELDS:
            valid_fields = ", ".join(COUNTER_FIELDS)
            return False, f"Invalid field. Valid fields: {valid_fields}"

        if amount == 0:
            return False, "Amount cannot be zero"

        return True, ""

    @staticmethod
    def validate_host_roles(role_ids: list) -> Tuple[bool, str]:
        if not role_ids:
            return False, "At least one host role is required"

        if len(role_ids) > BOT_LIMITS['max_host_roles']:
            return False, f"At most {BOT_LIMITS['max_host_roles']} host roles can be set"

        return True, ""
