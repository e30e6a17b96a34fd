# tests/conftest.py
"""
Shared fixtures and Telegram fakes for the report bot tests
"""
import os
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from telegram import Message

# Keep the developer's .env out of the tests
os.environ['BOT_TOKEN'] = '123456:TEST-TOKEN'

from reportbot.conversation.machine import Event, Inbound, ReportConversation
from reportbot.conversation.session import SessionStore
from reportbot.services.resolver import LookupResult, ResolvedEntity


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------

class FakeResolver:
    """Resolver returning a fixed result and recording what it was asked"""

    def __init__(self, result=None, exc=None):
        self.result = result or LookupResult.failure("not found")
        self.exc = exc
        self.calls = []

    async def resolve(self, chat_id):
        self.calls.append(chat_id)
        if self.exc:
            raise self.exc
        return self.result


def resolved(kind, id=42, title='Spam Bot', is_bot=False, username=None):
    return FakeResolver(LookupResult.success(
        ResolvedEntity(id=id, title=title, kind=kind, is_bot=is_bot, username=username)
    ))


def make_chat(type='channel', id=-1001234567890, title='Test Channel',
              username='testchannel', first_name=None, last_name=None):
    return SimpleNamespace(
        type=type, id=id, title=title, username=username,
        first_name=first_name, last_name=last_name,
    )


# ---------------------------------------------------------------------------
# Telegram objects
# ---------------------------------------------------------------------------

def make_user(user_id=123456789, first_name='TestUser', username='testuser'):
    user = MagicMock()
    user.id = user_id
    user.first_name = first_name
    user.username = username
    return user


def make_message(text=None):
    msg = AsyncMock()
    msg.text = text
    msg.reply_text = AsyncMock()
    return msg


def make_callback_query(user=None, data='', accessible=True):
    """accessible=False: the button message was deleted or is too old"""
    query = AsyncMock()
    query.from_user = user or make_user()
    query.data = data
    query.message = MagicMock(spec=Message) if accessible else None
    query.answer = AsyncMock()
    query.edit_message_text = AsyncMock()
    return query


def make_update(user=None, text=None, callback_query=None):
    update = MagicMock()
    update.update_id = 1
    update.effective_user = user or make_user()

    if callback_query:
        update.callback_query = callback_query
        update.message = None
        update.effective_message = make_message() if callback_query.message is not None else None
    else:
        update.callback_query = None
        update.message = make_message(text)
        update.effective_message = update.message

    return update


def make_context(conversation=None):
    ctx = MagicMock()
    ctx.args = []
    ctx.bot_data = {'conversation': conversation or ReportConversation(SessionStore())}
    ctx.bot = AsyncMock()
    return ctx


def inbound(event, user_id=1, **fields):
    return Inbound(user_id=user_id, event=Event(event), **fields)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def failing_resolver():
    return FakeResolver(LookupResult.failure("Chat not found"))


@pytest.fixture
def conversation(store, failing_resolver):
    return ReportConversation(store, failing_resolver)
