#!/usr/bin/env python3
"""
Core Convo Bot functionality
Contains the main bot class and message processing logic
"""

import asyncio
import configparser
import logging
import time
from pathlib import Path
from typing import Dict, Optional, Set

import colorlog

from .clients.espn_client import ESPNClient
from .clients.gemini_client import GeminiClient
from .clients.odds_client import OddsClient
from .clients.sports_mappings import BOOKMAKER_LABELS, LEAGUE_CATALOG
from .clients.youtube_client import YoutubeClient
from .command_manager import CommandManager
from .config_validation import strip_optional_quotes
from .enums import ActionType
from .models import ChatMessage
from .sports_aggregator import SportsAggregator
from .state_manager import DEFAULT_COOLDOWNS, UserStateManager
from .transport import ChatTransport, ConsoleTransport
from .utils import resolve_path

DEFAULT_CONFIG = """[Bot]
# Name used in log output
bot_name = ConvoBot

# Messages must start with this prefix to be treated as commands
command_prefix = /

# Timeout in seconds for every external API request
request_timeout = 10

# AI replies may only link to this domain (and its subdomains)
trusted_domain = hackforums.net

# Link used to address a user in replies; {uid} is replaced with the user id
profile_url_template = https://hackforums.net/member.php?action=profile&uid={uid}

[Rate_Limit]
# Each user may send at most max_requests commands per period_seconds window
max_requests = 5
period_seconds = 60

[Cooldowns]
# Seconds a user must wait between uses of each action type
general = 10
video_search = 15
commands_list = 5
sports = 20

[Api_Keys]
# Google Gemini API key (for /ai)
gemini =
# YouTube Data API v3 key (for /yt)
youtube =
# The Odds API key (for odds in /sports)
odds =

[Logging]
# DEBUG, INFO, WARNING, ERROR or CRITICAL
log_level = INFO
colored_output = true
# Leave empty for console logging only
log_file =

[Transport]
# console: read "uid:username: text" lines from stdin and print replies
type = console

[AI_Command]
enabled = true
# Longer prompts are ignored
max_prompt_length = 1500
# Word limit requested from the model
max_words = 100
model = gemini-1.5-flash-latest

[YT_Command]
enabled = true

[Sports_Command]
enabled = true
# Games shown per report
max_games = 3
# Apply the sports cooldown; off by default, rate limit and lock still apply
enforce_cooldown = false
# Bookmakers quoted in odds blocks, as provider_key:label
bookmakers = fanduel:FD,draftkings:DK

[Commands_Command]
enabled = true
"""


def parse_bookmakers(value: str) -> Dict[str, str]:
    """Parse ``fanduel:FD,draftkings:DK`` into an ordered key -> label map"""
    bookmakers: Dict[str, str] = {}
    for item in value.split(','):
        item = item.strip()
        if not item:
            continue
        key, _, label = item.partition(':')
        key = key.strip().lower()
        bookmakers[key] = label.strip() or BOOKMAKER_LABELS.get(key, key.upper())
    return bookmakers


class ConvoBot:
    """Slash-command chat bot.

    This class loads configuration and logging, wires the shared user state,
    the API clients and the command manager together, and runs the receive
    loop that spawns one task per inbound message.
    """

    def __init__(self, config_file: str = "config.ini", transport: Optional[ChatTransport] = None):
        self.config_file = config_file
        self.config = configparser.ConfigParser()
        self.load_config()

        # Setup logging
        self.setup_logging()

        self.start_time = time.time()
        self._tasks: Set[asyncio.Task] = set()
        self._shutdown_event: Optional[asyncio.Event] = None

        self.state_manager = UserStateManager(
            max_requests=self._positive_int('Rate_Limit', 'max_requests', 5),
            period_seconds=self._positive_float('Rate_Limit', 'period_seconds', 60.0),
            cooldowns=self._load_cooldowns(),
            logger=self.logger,
        )

        timeout = self._positive_float('Bot', 'request_timeout', 10.0)
        self.gemini_client = GeminiClient(
            self._api_key('gemini'),
            model=self.config.get('AI_Command', 'model', fallback=GeminiClient.DEFAULT_MODEL),
            logger=self.logger,
            timeout=timeout,
        )
        self.youtube_client = YoutubeClient(self._api_key('youtube'), logger=self.logger, timeout=timeout)
        self.espn_client = ESPNClient(logger=self.logger, timeout=timeout)

        bookmakers = parse_bookmakers(
            self.config.get('Sports_Command', 'bookmakers', fallback='fanduel:FD,draftkings:DK')
        ) or dict(BOOKMAKER_LABELS)
        self.odds_client = OddsClient(
            self._api_key('odds'),
            bookmakers=list(bookmakers.keys()),
            logger=self.logger,
            timeout=timeout,
        )
        self.sports_aggregator = SportsAggregator(
            self.espn_client,
            self.odds_client,
            leagues=LEAGUE_CATALOG,
            bookmakers=bookmakers,
            max_games=self._positive_int('Sports_Command', 'max_games', 3),
            logger=self.logger,
        )

        self.transport = transport or self._create_transport()

        self.command_manager = CommandManager(self)

    @property
    def bot_root(self) -> Path:
        """Directory containing the config file; relative paths are resolved against it"""
        return Path(self.config_file).resolve().parent

    def load_config(self) -> None:
        """Load configuration from file.

        Reads the configuration file specified in self.config_file. If the file
        does not exist, a default configuration is created first.
        """
        if not Path(self.config_file).exists():
            self.create_default_config()

        self.config.read(self.config_file, encoding="utf-8")

    def create_default_config(self) -> None:
        """Write the commented default configuration to self.config_file"""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            f.write(DEFAULT_CONFIG)
        # Note: Using print here since logger may not be initialized yet
        print(f"Created default config file: {self.config_file}")

    def setup_logging(self) -> None:
        """Setup logging configuration.

        Configures the 'ConvoBot' logger from the [Logging] section: level,
        colored console output and an optional log file. If the section is
        missing, logs INFO to the console only.
        """
        level_name = self.config.get('Logging', 'log_level', fallback='INFO').strip().upper()
        log_level = getattr(logging, level_name, logging.INFO)
        colored_output = self.config.getboolean('Logging', 'colored_output', fallback=True)
        log_file = self.config.get('Logging', 'log_file', fallback='').strip()

        if colored_output:
            formatter = colorlog.ColoredFormatter(
                '%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S',
                log_colors={
                    'DEBUG': 'cyan',
                    'INFO': 'green',
                    'WARNING': 'yellow',
                    'ERROR': 'red',
                    'CRITICAL': 'red,bg_white',
                }
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        self.logger = logging.getLogger('ConvoBot')
        self.logger.setLevel(log_level)

        # Clear any existing handlers to prevent duplicates
        self.logger.handlers.clear()

        # Console goes to stderr so replies on stdout stay readable
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if not log_file:
            self.logger.debug("No log file specified, using console logging only")
        else:
            log_path = Path(resolve_path(log_file, self.bot_root))
            try:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_path, encoding='utf-8')
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)
            except OSError as e:
                self.logger.warning(f"Could not open log file {log_path}: {e}. Using console logging only.")

        # Prevent propagation to root logger to avoid duplicate output
        self.logger.propagate = False
        self.logger.info(f"Logging configured - level {logging.getLevelName(log_level)}")

    def _positive_int(self, section: str, option: str, default: int) -> int:
        value = self.config.getint(section, option, fallback=default)
        if value <= 0:
            self.logger.warning(f"[{section}] {option} must be positive, using {default}")
            return default
        return value

    def _positive_float(self, section: str, option: str, default: float) -> float:
        value = self.config.getfloat(section, option, fallback=default)
        if value <= 0:
            self.logger.warning(f"[{section}] {option} must be positive, using {default}")
            return default
        return value

    def _load_cooldowns(self) -> Dict[ActionType, float]:
        cooldowns = dict(DEFAULT_COOLDOWNS)
        for action_type in ActionType:
            cooldowns[action_type] = max(
                0.0, self.config.getfloat('Cooldowns', action_type.value, fallback=cooldowns[action_type])
            )
        return cooldowns

    def _api_key(self, name: str) -> str:
        key = strip_optional_quotes(self.config.get('Api_Keys', name, fallback=''))
        if not key:
            self.logger.warning(f"No {name} API key configured")
        return key

    def _create_transport(self) -> ChatTransport:
        transport_type = self.config.get('Transport', 'type', fallback='console').strip().lower()
        if transport_type != 'console':
            raise ValueError(f"Unsupported transport type: {transport_type}")
        return ConsoleTransport(logger=self.logger)

    def handle_message(self, message: ChatMessage) -> asyncio.Task:
        """Dispatch one inbound message on its own task"""
        task = asyncio.get_running_loop().create_task(self.command_manager.dispatch(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def start(self) -> None:
        """Start the bot.

        Starts the periodic state cleanup and dispatches inbound messages until
        the transport closes or stop() is called.
        """
        bot_name = self.config.get('Bot', 'bot_name', fallback='ConvoBot')
        self.logger.info(f"Starting {bot_name}...")
        self._shutdown_event = asyncio.Event()
        self.state_manager.start_cleanup()

        self.logger.info("Bot is running. Press Ctrl+C to stop.")
        async for message in self.transport.messages():
            if self._shutdown_event.is_set():
                break
            self.handle_message(message)

    async def stop(self) -> None:
        """Stop the bot.

        Cancels the cleanup task, waits for in-flight commands and closes the
        transport and HTTP sessions.
        """
        self.logger.info("Stopping Convo Bot...")
        if self._shutdown_event:
            self._shutdown_event.set()

        await self.state_manager.stop_cleanup()

        if self._tasks:
            self.logger.info(f"Waiting for {len(self._tasks)} in-flight command(s)")
            await asyncio.gather(*self._tasks, return_exceptions=True)

        await self.transport.close()
        for client in (self.gemini_client, self.youtube_client, self.espn_client, self.odds_client):
            await client.close()

        self.logger.info("Bot stopped")
