"""
Report text shown to the user at the end of the dialogue
"""
from reportbot.conversation.reasons import USER_PROVIDED_LABEL
from reportbot.conversation.session import Session
from reportbot.services.classifier import ClassifierResult
from reportbot.utils.format_utils import escape_html

NOT_AVAILABLE = "Not Available"


def build_report(session: Session, result: ClassifierResult) -> str:
    """
    Fill the report template (HTML)

    Args:
        session: Session holding the link, category and explanation
        result: Classification of the reported link

    Returns:
        Report text, identical for identical inputs
    """
    report_link = session.report_link or "N/A"
    reason_type = session.reason_type or USER_PROVIDED_LABEL
    detailed_reason = session.detailed_reason or "No detailed explanation provided."

    return (
        "<b>--- Telegram Report ---</b>\n\n"
        "<i>This report describes a Telegram entity that violates Telegram's "
        "Terms of Service and asks for it to be reviewed and removed.</i>\n\n"
        f"<b>Chat Type:</b> {escape_html(result.chat_type)}\n"
        f"<b>Chat Title:</b> {escape_html(result.chat_title)}\n"
        f"<b>Chat ID:</b> {escape_html(result.chat_id)}\n"
        f"<b>Chat Link/Username:</b> <code>{escape_html(report_link)}</code>\n"
        f"<b>Relevant Laws/Violations:</b> {escape_html(reason_type)}\n"
        f"<b>Explanation:</b> {escape_html(detailed_reason)}\n\n"
        f"<b>Name:</b> {NOT_AVAILABLE}\n"
        f"<b>Address:</b> {NOT_AVAILABLE}\n"
        f"<b>Phone:</b> {NOT_AVAILABLE}\n"
        f"<b>E-Mail:</b> {NOT_AVAILABLE}\n\n"
        "<b>--- End of Report ---</b>\n\n"
        "Please copy this report and send it to Telegram's official support "
        "(e.g., via the in-app reporting feature or email abuse@telegram.org).\n"
        "Thank you for helping keep Telegram safe!"
    )
