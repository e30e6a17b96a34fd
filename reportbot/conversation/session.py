"""
Per-user dialogue state
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict

logger = logging.getLogger(__name__)


class State(str, Enum):
    IDLE = "idle"
    AWAITING_LINK = "awaiting_link"
    AWAITING_REASON = "awaiting_reason"


@dataclass
class Session:
    state: State = State.IDLE
    report_link: str = ""
    reason_type: str = ""
    detailed_reason: str = ""

    def clear(self) -> None:
        self.state = State.IDLE
        self.report_link = ""
        self.reason_type = ""
        self.detailed_reason = ""

    @property
    def is_empty(self) -> bool:
        return not (self.report_link or self.reason_type or self.detailed_reason)


class SessionStore:
    """
    Sessions keyed by Telegram user id.

    One store is created per Application and handed to the conversation,
    so two users never share fields and tests can use their own store.
    """

    def __init__(self):
        self._sessions: Dict[int, Session] = {}

    def get(self, user_id: int) -> Session:
        """Return the user's session, creating an empty one on first contact"""
        session = self._sessions.get(user_id)
        if session is None:
            session = Session()
            self._sessions[user_id] = session
        return session

    def reset(self, user_id: int) -> Session:
        """Replace whatever the user had with a fresh session"""
        session = Session()
        self._sessions[user_id] = session
        return session

    def clear(self, user_id: int) -> None:
        if self._sessions.pop(user_id, None) is not None:
            logger.debug(f"Session cleared for user {user_id}")

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
