"""
Unit Tests for conversation helpers
"""
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from sportsapp.services.message_service import has_unread, ordered_pair

NOW = datetime(2026, 10, 1, 12, 0, 0)


def conversation(last_message=None, seen_by_user1=None, seen_by_user2=None):
    seen = {1: seen_by_user1, 2: seen_by_user2}
    return SimpleNamespace(last_message=last_message, last_seen_by=lambda user_id: seen[user_id])


def message(sender_id, created_at=NOW):
    return SimpleNamespace(sender_id=sender_id, created_at=created_at)


@pytest.mark.parametrize("a,b,expected", [(1, 2, (1, 2)), (9, 3, (3, 9))])
def test_ordered_pair(a, b, expected):
    assert ordered_pair(a, b) == expected


def test_no_messages_is_read():
    assert has_unread(conversation(), 1) is False


def test_own_last_message_is_read():
    assert has_unread(conversation(message(sender_id=1)), 1) is False


def test_never_opened_is_unread():
    assert has_unread(conversation(message(sender_id=2)), 1) is True


def test_seen_after_last_message():
    convo = conversation(message(sender_id=2), seen_by_user1=NOW + timedelta(seconds=1))

    assert has_unread(convo, 1) is False


def test_message_after_last_seen():
    convo = conversation(message(sender_id=1), seen_by_user2=NOW - timedelta(minutes=5))

    assert has_unread(convo, 2) is True
