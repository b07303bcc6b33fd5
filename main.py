#!/usr/bin/env python3
"""
RankedBot - Discord Ranked Matchmaking Bot
Main entry point and bot initialization
"""
from dotenv import load_dotenv
load_dotenv()
import asyncio
import discord
from discord import app_commands
from discord.ext import commands
import logging
import sys

from config import BOT_CONFIG
from database import Database, AuditLog
from commands import (
    setup_public_commands, setup_match_commands, setup_admin_commands,
    setup_rating_commands, RankedPanelView
)
from systems.rating_system import RatingSystem
from systems.match_system import MatchSystem
from systems.leaderboard_system import LeaderboardSystem
from systems.room_gateway import DiscordRoomGateway
from utils.interactive_utils import handle_interaction_error
from utils.scheduler import TaskScheduler
from web.health_server import start_health_server

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler('rankedbot.log'),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger('RankedBot')


class RankedBot(commands.Bot):
    def __init__(self):
        intents = discord.Intents.default()
        intents.members = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None
        )

        # Initialize systems
        self.db = Database()
        self.audit_log = AuditLog()
        self.scheduler = TaskScheduler()
        self.rating_system = RatingSystem(self.db)
        self.room_gateway = DiscordRoomGateway(self)
        self.match_system = MatchSystem(self.db, self.room_gateway, self.scheduler)
        self.leaderboard_system = LeaderboardSystem(self.db, self.get_channel)
        self.health_runner = None

        self.tree.error(self.on_app_command_error)

    async def setup_hook(self):
        """Load data, register commands and start the health server before connecting"""
        self.db.load()
        await self.audit_log.initialize()

        await self.setup_commands()
        self.add_view(RankedPanelView(self))

        synced = await self.tree.sync()
        logger.info(f'Synced {len(synced)} slash commands')

        self.health_runner = await start_health_server(BOT_CONFIG['health_host'], BOT_CONFIG['health_port'])

    async def setup_commands(self):
        """Load all command modules"""
        logger.info('Loading command modules...')

        await setup_public_commands(self)
        await setup_match_commands(self)
        await setup_admin_commands(self)
        await setup_rating_commands(self)

        logger.info('All command modules loaded')

    async def on_ready(self):
        """Called when the bot is ready and connected to Discord"""
        logger.info(f'{self.user} has connected to Discord!')
        logger.info(f'Bot is in {len(self.guilds)} guilds')

        pruned = self.match_system.prune_missing_rooms(self.room_gateway.room_exists)
        if pruned:
            logger.info(f'Removed {pruned} stale match rooms')

        await self.change_presence(
            activity=discord.Activity(type=discord.ActivityType.watching, name="ranked matches")
        )

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global slash command error handler"""
        await handle_interaction_error(interaction, error)

    async def close(self):
        cancelled = self.scheduler.cancel_all()
        if cancelled:
            logger.warning(f'Cancelled {cancelled} pending room deletions on shutdown')
        if self.health_runner is not None:
            await self.health_runner.cleanup()
            self.health_runner = None
        await super().close()


async def main() -> int:
    """Main function to start the bot"""
    token = BOT_CONFIG['bot_token']
    if not token:
        logger.error('DISCORD_BOT_TOKEN is not set!')
        logger.error('Please add your Discord bot token as an environment variable named DISCORD_BOT_TOKEN')
        return 1

    bot = RankedBot()

    try:
        logger.info('Starting RankedBot...')
        await bot.start(token)
    except discord.LoginFailure:
        logger.error('Invalid bot token')
        return 1
    except Exception as e:
        logger.error(f'Unexpected error: {e}', exc_info=True)
        return 1
    finally:
        if not bot.is_closed():
            await bot.close()
        logger.info('RankedBot shutdown complete')

    return 0


if __name__ == '__main__':
    sys.exit(asyncio.run(main()))
