"""
Fixed reply texts
"""
from typing import Optional

from reportbot.utils.format_utils import escape_html

GREETINGS = frozenset({"hi", "hello", "hey", "hola", "start"})

ASK_LINK = (
    "Please provide the link (e.g., https://t.me/username) or username "
    "(e.g., @username) of the bot/channel/group you want to report."
)
INVALID_LINK = "Please provide a valid link or username."
ASK_REASON = "What is the primary reason for reporting this entity?"
ASK_OTHER_REASON = "Please type your detailed reason for the report:"
INVALID_REASON = "Please select a reason or type your detailed explanation."
CANCELED = "Report generation canceled. You can start a new one anytime with /report."
NOT_UNDERSTOOD = "I didn't understand that. Please use /start, /help, or /report."

HELP_TEXT = (
    "<b>How to use this bot:</b>\n\n"
    "1. Type /report to begin.\n"
    "2. I will ask you for the link or username of the bot/channel/group you want to report.\n"
    "3. Provide the link (e.g., <code>https://t.me/example</code>) or username "
    "(e.g., <code>@example</code>).\n"
    "4. Next, I'll ask for the reason for the report. You can choose from predefined "
    "options or type your own detailed explanation.\n"
    "5. I will then generate a comprehensive report for you to copy and send to "
    "Telegram's official support (e.g., via their in-app reporting feature or "
    "abuse@telegram.org).\n\n"
    "Use /cancel at any time to stop.\n\n"
    "Remember to be as detailed as possible in your explanation to help Telegram "
    "investigate effectively."
)

EXAMPLE_REPORT = (
    "\n\n<b>Example Report Structure:</b>\n"
    "<b>Chat Type:</b> Bot/Channel/Group\n"
    "<b>Chat Title:</b> [If known]\n"
    "<b>Chat ID:</b> [If known]\n"
    "<b>Chat Link:</b> [Provided Link/Username]\n"
    "<b>Relevant Laws:</b> [e.g., Violates Telegram's TOS, Spam, Phishing]\n"
    "<b>Explanation:</b> [Detailed reason for report]\n"
)


def is_greeting(text: Optional[str]) -> bool:
    return bool(text) and text.strip().lower() in GREETINGS


def build_welcome_message(first_name: Optional[str] = None) -> str:
    """Welcome text for /start and greetings (HTML)"""
    return (
        f"Hello {escape_html(first_name) or 'there'}!\n\n"
        "I am your Telegram Report Bot. I can help you generate reports for "
        "illegal bots, channels, or groups on Telegram.\n\n"
        "Here's what I can do:\n"
        "➡️ /report - Start the process to generate a report.\n"
        "➡️ /help - Get more information about how to use me.\n\n"
        "Let's make Telegram a safer place!"
        + EXAMPLE_REPORT
    )


def build_selected_reason(label: str) -> str:
    return f"You selected: {escape_html(label)}. Please provide a detailed explanation now."
