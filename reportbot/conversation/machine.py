"""
Report dialogue as an explicit state machine

Idle -> AwaitingLink -> AwaitingReason -> Idle. Every (state, event) pair
maps to one step; a step returns the next state and the replies to send.
Nothing here talks to Telegram directly, the handlers translate updates
into Inbound events and send the Reply objects back.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from telegram.constants import ParseMode

from reportbot.conversation.reasons import ReportReason, parse_reason
from reportbot.conversation.session import Session, SessionStore, State
from reportbot.keyboards.menus import get_reason_menu
from reportbot.services.classifier import classify_identifier
from reportbot.services.report_builder import build_report
from reportbot.utils import messages

logger = logging.getLogger(__name__)


class Event(str, Enum):
    START_REPORT = "start_report"
    CANCEL = "cancel"
    TEXT = "text"
    NON_TEXT = "non_text"
    SELECT_REASON = "select_reason"


@dataclass(frozen=True)
class Inbound:
    user_id: int
    event: Event
    text: Optional[str] = None
    data: Optional[str] = None
    first_name: Optional[str] = None


@dataclass(frozen=True)
class Reply:
    text: str
    parse_mode: Optional[str] = None
    reply_markup: Any = None
    # Replace the message holding the category buttons instead of sending a new one
    edit: bool = False


Step = Tuple[State, List[Reply]]


class ReportConversation:

    def __init__(self, store: SessionStore, resolver=None):
        self.store = store
        self.resolver = resolver
        self._table = {
            (State.IDLE, Event.TEXT): self._idle_text,
            (State.IDLE, Event.NON_TEXT): self._not_understood,
            (State.IDLE, Event.SELECT_REASON): self._not_understood,
            (State.AWAITING_LINK, Event.TEXT): self._receive_link,
            (State.AWAITING_LINK, Event.NON_TEXT): self._reprompt_link,
            (State.AWAITING_LINK, Event.SELECT_REASON): self._reprompt_link,
            (State.AWAITING_REASON, Event.SELECT_REASON): self._select_reason,
            (State.AWAITING_REASON, Event.TEXT): self._receive_explanation,
            (State.AWAITING_REASON, Event.NON_TEXT): self._reprompt_reason,
        }
        for state in State:
            self._table[(state, Event.START_REPORT)] = self._start_report
            self._table[(state, Event.CANCEL)] = self._cancel

    def state_of(self, user_id: int) -> State:
        if user_id not in self.store:
            return State.IDLE
        return self.store.get(user_id).state

    async def dispatch(self, inbound: Inbound) -> List[Reply]:
        """Process one inbound event for one user to completion"""
        session = self.store.get(inbound.user_id)
        previous = session.state
        step = self._table[(previous, inbound.event)]

        next_state, replies = await step(session, inbound)

        if next_state is State.IDLE:
            self.store.clear(inbound.user_id)
        else:
            self.store.get(inbound.user_id).state = next_state

        if next_state is not previous:
            logger.info(f"User {inbound.user_id}: {previous.value} -> {next_state.value}")
        return replies

    async def _start_report(self, session: Session, inbound: Inbound) -> Step:
        self.store.reset(inbound.user_id)
        return State.AWAITING_LINK, [Reply(messages.ASK_LINK)]

    async def _cancel(self, session: Session, inbound: Inbound) -> Step:
        logger.info(f"User {inbound.user_id} canceled the conversation")
        return State.IDLE, [Reply(messages.CANCELED)]

    async def _idle_text(self, session: Session, inbound: Inbound) -> Step:
        if messages.is_greeting(inbound.text):
            welcome = messages.build_welcome_message(inbound.first_name)
            return State.IDLE, [Reply(welcome, parse_mode=ParseMode.HTML)]
        return await self._not_understood(session, inbound)

    async def _not_understood(self, session: Session, inbound: Inbound) -> Step:
        return State.IDLE, [Reply(messages.NOT_UNDERSTOOD)]

    async def _receive_link(self, session: Session, inbound: Inbound) -> Step:
        link = (inbound.text or "").strip()
        if not link:
            return await self._reprompt_link(session, inbound)

        session.report_link = link
        logger.info(f"User {inbound.user_id} provided link: {link}")
        return State.AWAITING_REASON, [Reply(messages.ASK_REASON, reply_markup=get_reason_menu())]

    async def _reprompt_link(self, session: Session, inbound: Inbound) -> Step:
        return session.state, [Reply(messages.INVALID_LINK)]

    async def _select_reason(self, session: Session, inbound: Inbound) -> Step:
        reason = parse_reason(inbound.data)
        if reason is None:
            logger.warning(f"Unknown reason callback: {inbound.data}")
            return await self._reprompt_reason(session, inbound)

        session.reason_type = reason.label
        if reason is ReportReason.OTHER:
            text = messages.ASK_OTHER_REASON
        else:
            text = messages.build_selected_reason(reason.label)
        return State.AWAITING_REASON, [Reply(text, edit=True)]

    async def _receive_explanation(self, session: Session, inbound: Inbound) -> Step:
        if not session.report_link:
            return State.AWAITING_LINK, [Reply(messages.ASK_LINK)]

        explanation = (inbound.text or "").strip()
        if not explanation:
            return await self._reprompt_reason(session, inbound)

        session.detailed_reason = explanation
        logger.info(f"User {inbound.user_id} provided detailed reason")

        result = await classify_identifier(session.report_link, self.resolver)
        report = build_report(session, result)
        return State.IDLE, [Reply(report, parse_mode=ParseMode.HTML)]

    async def _reprompt_reason(self, session: Session, inbound: Inbound) -> Step:
        return session.state, [Reply(messages.INVALID_REASON)]
