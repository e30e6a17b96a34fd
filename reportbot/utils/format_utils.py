"""
Formatting utilities for bot replies
"""
import html
from typing import Optional


def escape_html(text: Optional[str]) -> str:
    """
    Escape text for messages sent with ParseMode.HTML

    Args:
        text: Raw user-supplied text

    Returns:
        Text safe to interpolate inside HTML tags
    """
    if not text:
        return ""

    return html.escape(text, quote=False)


def title_case_words(text: str, separator: str = "_") -> str:
    """
    Turn an identifier into a readable label

    Args:
        text: Identifier (ex: illegal_content)
        separator: Character separating the words

    Returns:
        Label with every word capitalized (ex: Illegal Content)
    """
    if not text:
        return ""

    words = text.replace(separator, " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)

