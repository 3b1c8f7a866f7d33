"""Tests for the chained-cause error model."""

import pickle

import pytest

from dbxfolders.utils.errors import ChainedError, TransportError, wrap


def test_create_uses_root_cause_message() -> None:
    """A fresh chain reports the root cause's message."""
    root = ValueError("disk on fire")

    err = ChainedError(root)

    assert err.message == "disk on fire"
    assert str(err) == "disk on fire"
    assert err.current is root
    assert err.previous is None
    assert err.depth == 1
    assert err.trace() == "'disk on fire'"


def test_create_rejects_none() -> None:
    """Constructing without a cause fails fast."""
    with pytest.raises(ValueError):
        ChainedError(None)


def test_wrap_newest_message_wins() -> None:
    """The short message always comes from the most recent cause."""
    err = ChainedError(OSError("connection reset"))

    wrapped = wrap(err, RuntimeError("error listing folder"))

    assert wrapped is err
    assert wrapped.message == "error listing folder"
    assert wrapped.previous is not None
    assert str(wrapped.previous.current) == "connection reset"


def test_trace_is_newest_first_across_deep_chains() -> None:
    """Every node is rendered once, newest first, even past two levels."""
    err = ChainedError("root")
    err.add("middle")
    err.add("upper")
    err.add("top")

    assert err.depth == 4
    assert err.messages() == ["top", "upper", "middle", "root"]
    assert err.trace() == "'top', caused by 'upper', caused by 'middle', caused by 'root'"
    assert err.root_cause == "root"


def test_wrap_absent_chain_equals_create() -> None:
    """Wrapping nothing starts a new chain identical to a created one."""
    cause = KeyError("missing")

    assert wrap(None, cause).trace() == ChainedError(cause).trace()
    assert wrap(None, cause).depth == 1


def test_wrapping_same_error_twice_is_not_deduplicated() -> None:
    """The chain records repeated causes instead of merging them."""
    cause = TimeoutError("timed out")
    err = ChainedError(cause)

    wrap(err, cause)

    assert err.depth == 2
    assert list(err) == [cause, cause]


def test_previous_links_are_not_rewritten_by_later_wraps() -> None:
    """A node linked below the head keeps its own history after further wraps."""
    err = ChainedError("first")
    err.add("second")
    older = err.previous

    err.add("third")

    assert older is not None
    assert older.current == "first"
    assert older.previous is None
    assert err.previous is not None and err.previous.current == "second"
    assert err.previous.previous is older


def test_add_rejects_none() -> None:
    """Adding a missing cause is a programming error."""
    err = ChainedError("root")

    with pytest.raises(ValueError):
        err.add(None)

    assert err.depth == 1


def test_exception_cause_is_linked_for_tracebacks() -> None:
    """Exception causes are exposed through __cause__."""
    root = ConnectionError("refused")
    err = ChainedError(root)

    assert err.__cause__ is root

    err.add("error creating folder")

    assert err.__cause__ is root


def test_chained_error_can_be_raised_and_caught() -> None:
    """ChainedError behaves as a regular exception."""
    with pytest.raises(ChainedError) as excinfo:
        raise ChainedError("boom").add("while syncing")

    assert excinfo.value.trace() == "'while syncing', caused by 'boom'"


def test_transport_error_carries_partial_response() -> None:
    """TransportError keeps the partial body and the original exception."""
    original = OSError("socket closed")
    err = TransportError("socket closed", response=b"partial", original_exception=original)

    assert str(err) == "socket closed"
    assert err.response == b"partial"
    assert err.original_exception is original


def test_wrapping_a_chain_into_itself_stays_acyclic() -> None:
    """Adding the chain to itself records a snapshot of the head."""
    err = ChainedError("root")

    wrap(err, err)

    assert err.depth == 2
    assert err.message == "root"
    assert err.trace() == "'root', caused by 'root'"
    assert err.current is not err


def test_indirect_self_reference_stays_acyclic() -> None:
    """A cause whose own current points back at the chain is also snapshotted."""
    err = ChainedError("root")
    err.add("upper")
    outer = ChainedError(err)

    err.add(outer)

    assert err.messages() == ["upper", "upper", "root"]
    assert err.depth == 3


def test_chain_survives_pickling() -> None:
    """Pickling keeps every level of the chain."""
    err = ChainedError(ValueError("bad json"))
    err.add("error converting response data")
    err.add("error listing page 2 of '/'")

    restored = pickle.loads(pickle.dumps(err))

    assert restored.trace() == err.trace()
    assert restored.depth == 3
    assert isinstance(restored.root_cause, ValueError)
