#!/usr/bin/env python
"""
Script to run the report bot
"""
import os
import logging

os.makedirs('logs', exist_ok=True)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler('logs/bot.log'),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)


def main():
    """Start the bot"""
    from reportbot.main import main as bot_main

    logger.info("🤖 Starting Telegram Report Bot...")
    try:
        bot_main()
    except KeyboardInterrupt:
        logger.info("👋 Bot stopped by user")


if __name__ == "__main__":
    main()
