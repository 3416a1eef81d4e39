"""Unit tests for cooperative cancellation primitives.

Covers idempotent cancel, cascade to children, late link of child after
parent cancel, plain ``threading.Event`` support and raise_if_cancelled.
"""
from __future__ import annotations

import threading

import pytest

from chatui_providers.base.cancellation import (
    CancellationToken,
    is_cancelled,
    raise_if_cancelled,
)
from chatui_providers.base.errors import ErrorCode, ProviderError


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="stop")
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child1.cancelled is True and child1.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child2.cancelled is True and child2.reason == "stop"  # nosec B101 - pytest assert in tests


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "done"  # nosec B101 - pytest assert in tests


def test_is_cancelled_accepts_events_and_none():
    event = threading.Event()
    assert is_cancelled(None) is False  # nosec B101 - pytest assert in tests
    assert is_cancelled(event) is False  # nosec B101 - pytest assert in tests
    event.set()
    assert is_cancelled(event) is True  # nosec B101 - pytest assert in tests


def test_raise_if_cancelled_raises_cancelled_provider_error():
    token = CancellationToken()
    raise_if_cancelled(token, provider="openai", model="m")
    token.cancel("user pressed esc")
    with pytest.raises(ProviderError) as info:
        raise_if_cancelled(token, provider="openai", model="m")
    assert info.value.code is ErrorCode.CANCELLED  # nosec B101 - pytest assert in tests
    assert info.value.message == "user pressed esc"  # nosec B101 - pytest assert in tests
