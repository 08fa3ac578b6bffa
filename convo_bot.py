#!/usr/bin/env python3
"""
Convo Bot - slash-command chat bot
Answers /ai, /yt, /sports and /commands in a chat room
"""

import argparse
import asyncio
import signal
import sys


def main():
    parser = argparse.ArgumentParser(
        description="Convo Bot - chat bot with AI, video search and sports reports"
    )
    parser.add_argument(
        "--config",
        default="config.ini",
        help="Path to configuration file (default: config.ini)",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate config and exit before starting the bot (exit 1 on errors)",
    )

    args = parser.parse_args()

    if args.validate_config:
        from convobot.config_validation import validate_config
        from validate_config import report
        sys.exit(report(validate_config(args.config)))

    from convobot.core import ConvoBot
    bot = ConvoBot(config_file=args.config)

    async def run_bot():
        """Run bot with proper signal handling"""
        if sys.platform == 'win32':
            # Windows: just run and let KeyboardInterrupt end it
            try:
                await bot.start()
            finally:
                await bot.stop()
            return

        loop = asyncio.get_running_loop()
        shutdown_event = asyncio.Event()

        def signal_handler():
            print("\nShutting down...")
            shutdown_event.set()

        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, signal_handler)

        bot_task = asyncio.create_task(bot.start())
        shutdown_task = asyncio.create_task(shutdown_event.wait())
        try:
            await asyncio.wait([bot_task, shutdown_task], return_when=asyncio.FIRST_COMPLETED)
            for task in (bot_task, shutdown_task):
                if not task.done():
                    task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        finally:
            await bot.stop()

    try:
        asyncio.run(run_bot())
    except KeyboardInterrupt:
        print("\nShutdown complete.")
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
