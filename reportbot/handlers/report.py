"""
Handlers feeding Telegram updates into the report conversation
"""
import logging
from typing import List
from telegram import Message, Update
from telegram.error import BadRequest
from telegram.ext import ContextTypes

from reportbot.conversation.machine import Event, Inbound, Reply, ReportConversation

logger = logging.getLogger(__name__)


def get_conversation(context: ContextTypes.DEFAULT_TYPE) -> ReportConversation:
    return context.bot_data['conversation']


async def _send_new(update: Update, context: ContextTypes.DEFAULT_TYPE, reply: Reply):
    message = update.effective_message
    if message is not None:
        await message.reply_text(
            reply.text,
            parse_mode=reply.parse_mode,
            reply_markup=reply.reply_markup
        )
        return

    # Button message deleted or too old: write to the user directly
    await context.bot.send_message(
        chat_id=update.effective_user.id,
        text=reply.text,
        parse_mode=reply.parse_mode,
        reply_markup=reply.reply_markup
    )


async def send_replies(update: Update, context: ContextTypes.DEFAULT_TYPE, replies: List[Reply]):
    """Send replies, editing the button message when the step asks for it"""
    query = update.callback_query
    can_edit = query is not None and isinstance(query.message, Message)

    for reply in replies:
        if reply.edit and can_edit:
            try:
                await query.edit_message_text(
                    reply.text,
                    parse_mode=reply.parse_mode,
                    reply_markup=reply.reply_markup
                )
                continue
            except BadRequest as e:
                logger.warning(f"Could not edit button message, sending a new one: {e}")

        await _send_new(update, context, reply)


async def _dispatch(update: Update, context: ContextTypes.DEFAULT_TYPE, event: Event, **fields):
    user = update.effective_user
    inbound = Inbound(
        user_id=user.id,
        event=event,
        first_name=user.first_name,
        **fields
    )
    replies = await get_conversation(context).dispatch(inbound)
    await send_replies(update, context, replies)


async def report_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handler for /report"""
    logger.info(f"User {update.effective_user.id} started a report")
    await _dispatch(update, context, Event.START_REPORT)


async def cancel_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handler for /cancel"""
    logger.info(f"User {update.effective_user.id} sent /cancel")
    await _dispatch(update, context, Event.CANCEL)


async def handle_text(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Plain text message (not a command)"""
    await _dispatch(update, context, Event.TEXT, text=update.message.text)


async def handle_non_text(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Stickers, photos, documents and anything else without text"""
    await _dispatch(update, context, Event.NON_TEXT)


async def handle_reason_selection(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Category button pressed"""
    query = update.callback_query
    await query.answer()

    await _dispatch(update, context, Event.SELECT_REASON, data=query.data)
