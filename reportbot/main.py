#!/usr/bin/env python3
"""
Telegram Report Bot - entry point
Registers handlers and starts the bot with webhook (production) or polling
"""
import os
import sys
import logging

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import (
    Application, CommandHandler, CallbackQueryHandler,
    MessageHandler, filters, ContextTypes
)

from reportbot.config import Config, ConfigError
from reportbot.conversation.machine import ReportConversation
from reportbot.conversation.reasons import REASON_CALLBACK_PREFIX
from reportbot.conversation.session import SessionStore
from reportbot.handlers.start import start_command, help_command
from reportbot.handlers.report import (
    report_command, cancel_command, handle_text,
    handle_non_text, handle_reason_selection
)
from reportbot.services.resolver import EntityResolver

logger = logging.getLogger(__name__)


async def post_init(application: Application) -> None:
    """Runs once the bot is initialized"""
    try:
        bot_info = await application.bot.get_me()
        logger.info(f"✅ Bot @{bot_info.username} started")
        logger.info(f"Bot ID: {bot_info.id}")
    except TelegramError as e:
        logger.error(f"Could not fetch bot info: {e}")


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised inside handlers"""
    logger.error("Exception while handling an update", exc_info=context.error)


def setup_handlers(application: Application):
    """Register every handler, most specific first"""
    logger.info("📋 Registering handlers...")

    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("report", report_command))
    application.add_handler(CommandHandler("cancel", cancel_command))

    application.add_handler(CallbackQueryHandler(
        handle_reason_selection, pattern=f"^{REASON_CALLBACK_PREFIX}"
    ))

    private_messages = filters.UpdateType.MESSAGE & filters.ChatType.PRIVATE
    application.add_handler(MessageHandler(
        private_messages & filters.TEXT & ~filters.COMMAND, handle_text
    ))

    # Must stay last: everything else, unknown commands included
    application.add_handler(MessageHandler(private_messages, handle_non_text))

    application.add_error_handler(error_handler)

    logger.info("✅ Handlers registered")


def build_application(config: Config) -> Application:
    """Create the Application with its session store and conversation"""
    application = (
        Application.builder()
        .token(config.BOT_TOKEN)
        .post_init(post_init)
        .build()
    )

    sessions = SessionStore()
    resolver = EntityResolver(application.bot, timeout=config.LOOKUP_TIMEOUT)
    application.bot_data['sessions'] = sessions
    application.bot_data['conversation'] = ReportConversation(sessions, resolver)

    setup_handlers(application)
    return application


def run(application: Application, config: Config):
    if config.is_production:
        logger.info(f"Setting webhook to {config.webhook_url}, listening on port {config.PORT}")
        application.run_webhook(
            listen="0.0.0.0",
            port=config.PORT,
            url_path=config.webhook_path,
            webhook_url=config.webhook_url,
            allowed_updates=Update.ALL_TYPES,
        )
    else:
        logger.info("🤖 Bot started in long polling mode")
        logger.info("Press Ctrl+C to stop")
        application.run_polling(allowed_updates=Update.ALL_TYPES)


def main():
    """Main entry point"""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO)
    )
    # Keep the token out of the request logs
    logging.getLogger("httpx").setLevel(logging.WARNING)

    try:
        config = Config()
        config.validate()
    except ConfigError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    application = build_application(config)

    try:
        run(application, config)
    except TelegramError as e:
        logger.critical(f"❌ Startup failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
