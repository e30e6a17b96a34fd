"""
Handlers for /start and /help
"""
import logging
from telegram import Update
from telegram.ext import ContextTypes
from telegram.constants import ParseMode

from reportbot.utils.messages import HELP_TEXT, build_welcome_message

logger = logging.getLogger(__name__)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handler for /start"""
    user = update.effective_user
    first_name = user.first_name if user else None
    logger.info(f"/start from user {user.id if user else '?'}")

    await update.message.reply_text(
        build_welcome_message(first_name),
        parse_mode=ParseMode.HTML
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handler for /help"""
    logger.info(f"/help from user {update.effective_user.id}")
    await update.message.reply_text(HELP_TEXT, parse_mode=ParseMode.HTML)
