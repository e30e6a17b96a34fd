"""
Chat type classification for reported identifiers

The Bot API lookup is preferred. When it is unavailable or fails, the chat
type is guessed from the shape of what the user typed.
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from telegram.constants import ChatType

from reportbot.services.resolver import LookupResult, ResolvedEntity

logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "Unknown"
NOT_AVAILABLE = "None"

LINK_PATTERN = re.compile(
    r'^(?:https?://)?(?:www\.)?(?:t|telegram)\.me/(?P<path>[^?#]*)',
    re.IGNORECASE,
)
INVITE_LINK_PATTERN = re.compile(r't(?:elegram)?\.me/(\+|joinchat/)', re.IGNORECASE)
NUMERIC_ID_PATTERN = re.compile(r'^-?\d+$')


@dataclass(frozen=True)
class ClassifierResult:
    chat_type: str = UNKNOWN_TYPE
    chat_title: str = NOT_AVAILABLE
    chat_id: str = NOT_AVAILABLE


def _last_path_segment(identifier: str) -> Optional[str]:
    """Last path segment of a t.me link, None if identifier is not a link"""
    match = LINK_PATTERN.match(identifier)
    if not match:
        return None
    segments = [s for s in match.group('path').split('/') if s]
    return segments[-1] if segments else ""


def normalize_identifier(identifier: str) -> Optional[Union[str, int]]:
    """
    Turn user input into something get_chat accepts

    Returns:
        "@name", an integer chat id, or None when the identifier cannot be
        looked up (private invite links, free text)
    """
    identifier = (identifier or "").strip()
    if not identifier:
        return None

    segment = _last_path_segment(identifier)
    if segment is not None:
        if not segment or segment.startswith('+') or INVITE_LINK_PATTERN.search(identifier):
            return None
        return '@' + segment.lstrip('@')

    if identifier.startswith('@'):
        return identifier if len(identifier) > 1 else None

    if NUMERIC_ID_PATTERN.match(identifier):
        return int(identifier)

    return None


def classify_entity(entity: ResolvedEntity) -> ClassifierResult:
    if entity.kind == ChatType.CHANNEL:
        chat_type = "Channel"
    elif entity.kind in (ChatType.GROUP, ChatType.SUPERGROUP):
        chat_type = "Group"
    elif entity.kind == ChatType.PRIVATE:
        chat_type = "Bot" if entity.is_bot else "Private Chat (User)"
    else:
        chat_type = UNKNOWN_TYPE

    return ClassifierResult(
        chat_type=chat_type,
        chat_title=entity.title,
        chat_id=str(entity.id),
    )


def classify_heuristically(identifier: str) -> ClassifierResult:
    """Guess the chat type from the identifier alone"""
    identifier = (identifier or "").strip()

    if INVITE_LINK_PATTERN.search(identifier):
        return ClassifierResult(chat_type="Group")

    segment = _last_path_segment(identifier)
    if segment:
        if segment.startswith('@'):
            return ClassifierResult(chat_type="Bot/Channel (Username)", chat_title=segment[1:])
        return ClassifierResult(chat_type="Bot/Channel (Link)", chat_title=segment)

    if identifier.startswith('@') and len(identifier) > 1:
        return ClassifierResult(chat_type="Bot/Channel (Username)", chat_title=identifier[1:])

    if NUMERIC_ID_PATTERN.match(identifier):
        return ClassifierResult(chat_id=identifier)

    return ClassifierResult()


def classify(identifier: str, lookup: Optional[LookupResult] = None) -> ClassifierResult:
    """Use the lookup when it succeeded, the heuristic otherwise"""
    if lookup is not None and lookup.ok:
        return classify_entity(lookup.entity)
    return classify_heuristically(identifier)


async def classify_identifier(identifier: str, resolver=None) -> ClassifierResult:
    """
    Look the identifier up once and classify it

    Never raises: any lookup problem degrades to the heuristic.
    """
    target = normalize_identifier(identifier)
    if target is None or resolver is None:
        logger.info(f"Skipping lookup for {identifier!r}, using heuristic")
        return classify(identifier)

    try:
        lookup = await resolver.resolve(target)
    except Exception as e:
        logger.warning(f"Resolver error for {target}: {e}")
        lookup = LookupResult.failure(str(e))

    if not lookup.ok:
        logger.info(f"Lookup failed for {target} ({lookup.error}), using heuristic")
    return classify(identifier, lookup)
