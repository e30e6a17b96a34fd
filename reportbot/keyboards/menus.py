"""
Inline keyboards for the report bot
"""
from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from reportbot.conversation.reasons import ReportReason


def get_reason_menu() -> InlineKeyboardMarkup:
    """Category selection, one button per row"""
    keyboard = [
        [InlineKeyboardButton(reason.button_text, callback_data=reason.callback_data)]
        for reason in ReportReason
    ]
    return InlineKeyboardMarkup(keyboard)
