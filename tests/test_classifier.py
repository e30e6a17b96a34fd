# tests/test_classifier.py
"""
Tests for chat classification: lookup path, heuristic fallback and the
resolver adapter around Bot.get_chat.
"""
import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from telegram.error import BadRequest, TimedOut

from reportbot.services.classifier import (
    ClassifierResult, classify, classify_heuristically,
    classify_identifier, normalize_identifier
)
from reportbot.services.resolver import EntityResolver, LookupResult, entity_from_chat
from tests.conftest import FakeResolver, make_chat, resolved


# ===========================================================================
# 1. NORMALIZATION
# ===========================================================================

class TestNormalizeIdentifier:

    @pytest.mark.parametrize('identifier, expected', [
        ('@spambot', '@spambot'),
        ('  @spambot  ', '@spambot'),
        ('https://t.me/spambot', '@spambot'),
        ('http://telegram.me/spambot/', '@spambot'),
        ('t.me/spambot?start=1', '@spambot'),
        ('https://t.me/channel/123', '@123'),
        ('https://t.me/@spambot', '@spambot'),
        ('-1001234567890', -1001234567890),
        ('777', 777),
    ])
    def test_resolvable(self, identifier, expected):
        assert normalize_identifier(identifier) == expected

    @pytest.mark.parametrize('identifier', [
        'https://t.me/joinchat/AAAAAE',
        'https://t.me/+AbCdEf123',
        'https://t.me/',
        'just some words',
        '@',
        '',
        None,
    ])
    def test_not_resolvable(self, identifier):
        assert normalize_identifier(identifier) is None


# ===========================================================================
# 2. HEURISTIC FALLBACK
# ===========================================================================

class TestHeuristic:

    def test_joinchat_link_is_group(self):
        result = classify_heuristically('https://t.me/joinchat/abc')
        assert result.chat_type == 'Group'
        assert result.chat_title == 'None'

    def test_plus_invite_is_group(self):
        assert classify_heuristically('https://t.me/+abc').chat_type == 'Group'

    def test_link_with_at_segment(self):
        result = classify_heuristically('https://t.me/@scamchannel')
        assert result.chat_type == 'Bot/Channel (Username)'
        assert result.chat_title == 'scamchannel'

    def test_plain_link(self):
        result = classify_heuristically('https://t.me/scamchannel')
        assert result.chat_type == 'Bot/Channel (Link)'
        assert result.chat_title == 'scamchannel'

    @pytest.mark.parametrize('name', ['iPapkornBot', 'scam_channel', 'x'])
    def test_username(self, name):
        result = classify_heuristically(f'@{name}')
        assert result.chat_type == 'Bot/Channel (Username)'
        assert result.chat_title == name

    def test_numeric_id_keeps_id(self):
        result = classify_heuristically('-100123')
        assert result.chat_type == 'Unknown'
        assert result.chat_id == '-100123'

    def test_unrecognized(self):
        assert classify_heuristically('not a link') == ClassifierResult()
        assert ClassifierResult() == ClassifierResult('Unknown', 'None', 'None')


# ===========================================================================
# 3. LOOKUP MAPPING
# ===========================================================================

class TestLookupMapping:

    @pytest.mark.parametrize('kind, is_bot, expected', [
        ('channel', False, 'Channel'),
        ('group', False, 'Group'),
        ('supergroup', False, 'Group'),
        ('private', False, 'Private Chat (User)'),
        ('private', True, 'Bot'),
    ])
    def test_kind_mapping(self, kind, is_bot, expected):
        lookup = resolved(kind, is_bot=is_bot).result
        assert classify('@whatever', lookup).chat_type == expected

    def test_supergroup_passes_id_and_title(self):
        lookup = resolved('supergroup', id=42, title='Spam Bot').result
        result = classify('@iPapkornBot', lookup)
        assert result == ClassifierResult('Group', 'Spam Bot', '42')

    def test_failed_lookup_uses_heuristic(self):
        result = classify('@iPapkornBot', LookupResult.failure('Chat not found'))
        assert result.chat_type == 'Bot/Channel (Username)'
        assert result.chat_title == 'iPapkornBot'


# ===========================================================================
# 4. classify_identifier
# ===========================================================================

class TestClassifyIdentifier:

    def test_uses_resolver_with_normalized_identifier(self):
        resolver = resolved('channel', id=-1001, title='Scam News')
        result = asyncio.run(classify_identifier('https://t.me/scamnews', resolver))

        assert resolver.calls == ['@scamnews']
        assert result == ClassifierResult('Channel', 'Scam News', '-1001')

    def test_numeric_identifier_is_looked_up_as_int(self):
        resolver = resolved('supergroup', id=-100555)
        asyncio.run(classify_identifier('-100555', resolver))
        assert resolver.calls == [-100555]

    @pytest.mark.parametrize('name', ['spambot', 'scam_channel', 'A1'])
    def test_failing_resolver_falls_back(self, name, failing_resolver):
        result = asyncio.run(classify_identifier(f'@{name}', failing_resolver))
        assert result.chat_type == 'Bot/Channel (Username)'
        assert result.chat_title == name

    def test_invite_link_skips_lookup(self):
        resolver = resolved('channel')
        result = asyncio.run(classify_identifier('https://t.me/joinchat/abc', resolver))

        assert resolver.calls == []
        assert result.chat_type == 'Group'

    def test_no_resolver(self):
        result = asyncio.run(classify_identifier('https://t.me/joinchat/abc'))
        assert result.chat_type == 'Group'

    def test_resolver_exception_never_propagates(self):
        resolver = FakeResolver(exc=RuntimeError('boom'))
        result = asyncio.run(classify_identifier('@spambot', resolver))
        assert result.chat_type == 'Bot/Channel (Username)'


# ===========================================================================
# 5. EntityResolver
# ===========================================================================

class TestEntityResolver:

    def test_success(self):
        bot = MagicMock()
        bot.get_chat = AsyncMock(return_value=make_chat('supergroup', id=-100777, title='Scammers'))

        lookup = asyncio.run(EntityResolver(bot).resolve('@scammers'))

        bot.get_chat.assert_awaited_once_with('@scammers')
        assert lookup.ok
        assert lookup.entity.id == -100777
        assert lookup.entity.title == 'Scammers'
        assert lookup.entity.kind == 'supergroup'

    def test_bad_request_is_failure(self):
        bot = MagicMock()
        bot.get_chat = AsyncMock(side_effect=BadRequest('Chat not found'))

        lookup = asyncio.run(EntityResolver(bot).resolve('@missing'))

        assert not lookup.ok
        assert 'Chat not found' in lookup.error

    def test_network_timeout_is_failure(self):
        bot = MagicMock()
        bot.get_chat = AsyncMock(side_effect=TimedOut())

        assert not asyncio.run(EntityResolver(bot).resolve('@slow')).ok

    def test_slow_lookup_is_bounded(self):
        async def never_answers(chat_id):
            await asyncio.sleep(10)

        bot = MagicMock()
        bot.get_chat = never_answers

        lookup = asyncio.run(EntityResolver(bot, timeout=0.01).resolve('@slow'))

        assert not lookup.ok
        assert lookup.error == 'timeout'


class TestEntityFromChat:

    def test_private_bot(self):
        chat = make_chat('private', id=42, title=None, username='iPapkornBot', first_name='Papkorn')
        entity = entity_from_chat(chat)
        assert entity.is_bot
        assert entity.title == 'Papkorn'

    def test_private_user(self):
        chat = make_chat('private', id=7, title=None, username='john', first_name='John', last_name='Doe')
        entity = entity_from_chat(chat)
        assert not entity.is_bot
        assert entity.title == 'John Doe'

    def test_channel_is_never_bot(self):
        assert not entity_from_chat(make_chat('channel', username='newsbot')).is_bot
