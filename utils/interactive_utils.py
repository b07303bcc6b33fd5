"""
Interactive Utilities
Reply helpers shared by slash commands and panel buttons
"""

import discord
from discord import app_commands
import logging
from utils.embeds import EmbedTemplates
from utils.exceptions import RankedBotError

logger = logging.getLogger('RankedBot.InteractiveUtils')

ERROR_TITLES = {
    'not_found': 'Not Found',
    'forbidden': 'Permission Denied',
    'configuration': 'Not Configured',
    'external_call': 'Discord Error',
}


async def send_response(interaction: discord.Interaction, embed: discord.Embed,
                        ephemeral: bool = False, **kwargs):
    """Reply to an interaction, following up if it was already answered or deferred"""
    if interaction.response.is_done():
        await interaction.followup.send(embed=embed, ephemeral=ephemeral, **kwargs)
    else:
        await interaction.response.send_message(embed=embed, ephemeral=ephemeral, **kwargs)


async def send_error(interaction: discord.Interaction, title: str, description: str):
    await send_response(interaction, EmbedTemplates.error_embed(title, description), ephemeral=True)


async def handle_interaction_error(interaction: discord.Interaction, error: Exception):
    """
    Report a failed command or button press back to the user

    RankedBotError subclasses carry their own user message. Anything else
    is logged with its traceback and answered with a generic message.

    Args:
        interaction: The failed interaction
        error: The raised error, possibly wrapped by discord.py
    """
    original = getattr(error, 'original', error)

    if isinstance(original, RankedBotError):
        logger.info(f'{original.kind} error for {interaction.user}: {original}')
        title = ERROR_TITLES.get(original.kind, 'Error')
        description = original.user_message
    elif isinstance(error, app_commands.NoPrivateMessage):
        title, description = 'Server Only', 'This command can only be used in a server.'
    elif isinstance(error, app_commands.CheckFailure):
        title, description = 'Permission Denied', "You don't have permission to use this command."
    else:
        logger.error(f'Unhandled error in interaction from {interaction.user}: {original}',
                     exc_info=original)
        title, description = 'Error', 'An unexpected error occurred. Please try again later.'

    try:
        await send_error(interaction, title, description)
    except discord.HTTPException as e:
        logger.warning(f'Could not send error response: {e}')
