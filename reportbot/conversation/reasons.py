"""
Report reason categories offered as inline buttons
"""
from enum import Enum
from typing import Optional

from reportbot.utils.format_utils import title_case_words

REASON_CALLBACK_PREFIX = "reason_"

# Stored label when the user picks "Other" and types the reason themselves
USER_PROVIDED_LABEL = "User Provided"


class ReportReason(Enum):
    SPAM = "spam"
    ILLEGAL_CONTENT = "illegal_content"
    PHISHING = "phishing"
    ADULT_CONTENT = "adult_content"
    OTHER = "other"

    @property
    def button_text(self) -> str:
        return _BUTTON_TEXT[self]

    @property
    def callback_data(self) -> str:
        return f"{REASON_CALLBACK_PREFIX}{self.value}"

    @property
    def label(self) -> str:
        """Label stored in the session once the category is picked"""
        if self is ReportReason.OTHER:
            return USER_PROVIDED_LABEL
        return format_reason_label(self.callback_data)


_BUTTON_TEXT = {
    ReportReason.SPAM: "Spam/Scam",
    ReportReason.ILLEGAL_CONTENT: "Illegal Content/Copyright Infringement",
    ReportReason.PHISHING: "Phishing/Malware",
    ReportReason.ADULT_CONTENT: "Adult Content (Violates TOS)",
    ReportReason.OTHER: "Other (I'll type it)",
}


def format_reason_label(callback_data: str) -> str:
    """reason_illegal_content -> Illegal Content"""
    token = callback_data
    if token.startswith(REASON_CALLBACK_PREFIX):
        token = token[len(REASON_CALLBACK_PREFIX):]
    return title_case_words(token)


def parse_reason(callback_data: Optional[str]) -> Optional[ReportReason]:
    """Map callback data from a category button back to its reason"""
    if not callback_data or not callback_data.startswith(REASON_CALLBACK_PREFIX):
        return None

    try:
        return ReportReason(callback_data[len(REASON_CALLBACK_PREFIX):])
    except ValueError:
        return None
