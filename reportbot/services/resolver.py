"""
Authoritative chat lookups through the Bot API
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union

from telegram.constants import ChatType
from telegram.error import TelegramError

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT = 5.0


@dataclass(frozen=True)
class ResolvedEntity:
    id: int
    title: str
    kind: str
    is_bot: bool = False
    username: Optional[str] = None


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a single lookup: an entity, or the reason there is none"""
    entity: Optional[ResolvedEntity] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.entity is not None

    @classmethod
    def success(cls, entity: ResolvedEntity) -> "LookupResult":
        return cls(entity=entity)

    @classmethod
    def failure(cls, error: str) -> "LookupResult":
        return cls(error=error)


def entity_from_chat(chat) -> ResolvedEntity:
    """Build a ResolvedEntity from a telegram Chat / ChatFullInfo"""
    username = getattr(chat, "username", None)
    title = chat.title
    if not title:
        names = [getattr(chat, "first_name", None), getattr(chat, "last_name", None)]
        title = " ".join(name for name in names if name) or username or "None"

    # Bot usernames always end in "bot"; get_chat carries no explicit flag
    is_bot = chat.type == ChatType.PRIVATE and bool(username) and username.lower().endswith("bot")

    return ResolvedEntity(
        id=chat.id,
        title=title,
        kind=str(chat.type),
        is_bot=is_bot,
        username=username,
    )


class EntityResolver:
    """Looks a chat up with Bot.get_chat, bounded by a timeout"""

    def __init__(self, bot, timeout: float = DEFAULT_LOOKUP_TIMEOUT):
        self.bot = bot
        self.timeout = timeout

    async def resolve(self, chat_id: Union[str, int]) -> LookupResult:
        try:
            chat = await asyncio.wait_for(self.bot.get_chat(chat_id), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Lookup for {chat_id} timed out after {self.timeout}s")
            return LookupResult.failure("timeout")
        except TelegramError as e:
            logger.info(f"Lookup for {chat_id} failed: {e}")
            return LookupResult.failure(str(e))

        entity = entity_from_chat(chat)
        logger.info(f"Resolved {chat_id} -> {entity.kind} {entity.id}")
        return LookupResult.success(entity)
