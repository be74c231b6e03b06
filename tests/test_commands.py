#!/usr/bin/env python3
"""
Unit tests for the in-band command dispatcher.

Uses FakeHandler/FakeSession so replies and deliveries can be inspected
without sockets.
"""

import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.constants import HELP_LINES, Replies
from server.chat.banned_filter import BannedPhraseFilter
from server.chat.commands import CommandDispatcher, parse_targets
from server.chat.registry import ClientRegistry
from tests.helpers import FakeHandler, use_temp_logs


class TestParseTargets(unittest.TestCase):
    """Argument splitting for /msg and /except."""

    def test_names_and_text(self):
        self.assertEqual(parse_targets('alice, bob hello there'), (['alice'], 'bob hello there'))
        self.assertEqual(parse_targets('alice,bob hello there'), (['alice', 'bob'], 'hello there'))

    def test_missing_text(self):
        self.assertIsNone(parse_targets('alice'))
        self.assertIsNone(parse_targets('alice '))

    def test_missing_names(self):
        self.assertIsNone(parse_targets(''))
        self.assertIsNone(parse_targets(', hello'))


class TestCommandDispatcher(unittest.IsolatedAsyncioTestCase):
    """Test cases for CommandDispatcher."""

    async def asyncSetUp(self):
        use_temp_logs(self)
        self.registry = ClientRegistry()
        self.dispatcher = CommandDispatcher(self.registry, BannedPhraseFilter(['spam', 'Bad Word']))
        self.handlers = {}
        for name in ('alice', 'bob', 'carol'):
            handler = FakeHandler(name)
            self.handlers[name] = handler
            await self.registry.try_register(name, handler.session)

    def lines(self, name):
        return self.handlers[name].lines

    async def test_private_message_to_several_recipients(self):
        await self.dispatcher.dispatch(self.handlers['alice'], '/msg bob,carol hello')
        self.assertEqual(self.lines('bob'), ['alice (private): hello'])
        self.assertEqual(self.lines('carol'), ['alice (private): hello'])
        self.assertEqual(self.lines('alice'), [])

    async def test_private_message_reports_unknown_users(self):
        await self.dispatcher.dispatch(self.handlers['alice'], '/msg bob,zed hi there')
        self.assertEqual(self.lines('bob'), ['alice (private): hi there'])
        self.assertEqual(self.lines('alice'), ['User zed not found.'])
        self.assertEqual(self.lines('carol'), [])

    async def test_private_message_usage(self):
        await self.dispatcher.dispatch(self.handlers['alice'], '/msg bob')
        await self.dispatcher.dispatch(self.handlers['alice'], '/msg')
        self.assertEqual(self.lines('alice'), [Replies.MSG_USAGE, Replies.MSG_USAGE])
        self.assertEqual(self.lines('bob'), [])

    async def test_except_excludes_listed_and_sender(self):
        await self.dispatcher.dispatch(self.handlers['bob'], '/except carol bye')
        self.assertEqual(self.lines('alice'), ['bob (to everyone, except [carol]): bye'])
        self.assertEqual(self.lines('bob'), [])
        self.assertEqual(self.lines('carol'), [])

    async def test_except_lists_every_excluded_name(self):
        await self.registry.try_register('dave', FakeHandler('dave').session)
        await self.dispatcher.dispatch(self.handlers['alice'], '/except bob,carol secret plan')
        self.assertEqual(self.lines('bob'), [])
        self.assertEqual(self.lines('carol'), [])
        dave = await self.registry.lookup('dave')
        self.assertEqual(dave.lines, ['alice (to everyone, except [bob, carol]): secret plan'])

    async def test_except_usage(self):
        await self.dispatcher.dispatch(self.handlers['alice'], '/except carol')
        self.assertEqual(self.lines('alice'), [Replies.EXCEPT_USAGE])

    async def test_list(self):
        await self.dispatcher.dispatch(self.handlers['carol'], '/list')
        self.assertEqual(self.lines('carol'), ['Connected clients: alice, bob, carol'])

    async def test_banned(self):
        await self.dispatcher.dispatch(self.handlers['carol'], '/banned')
        self.assertEqual(self.lines('carol'), ['Banned phrases: [bad word, spam]'])

    async def test_help(self):
        await self.dispatcher.dispatch(self.handlers['bob'], '/help')
        self.assertEqual(self.lines('bob'), list(HELP_LINES))

    async def test_exit_closes_handler(self):
        await self.dispatcher.dispatch(self.handlers['bob'], '/exit')
        self.handlers['bob'].close.assert_awaited_once()

    async def test_unknown_command(self):
        await self.dispatcher.dispatch(self.handlers['bob'], '/dance now')
        self.assertEqual(self.lines('bob'), [Replies.UNKNOWN_COMMAND])

    async def test_commands_are_case_sensitive(self):
        await self.dispatcher.dispatch(self.handlers['bob'], '/LIST')
        self.assertEqual(self.lines('bob'), [Replies.UNKNOWN_COMMAND])


if __name__ == '__main__':
    unittest.main()
