from typing import Any, Iterator, List, Optional


def _describe(err: Any) -> str:
    """Returns the message carried by an error-like value."""
    return str(err)


class ChainedError(Exception):
    """
    An error that keeps every cause it has superseded.

    `current` holds the most recent (most specific) error value. `previous`
    links to the ChainedError node that was the head before the last
    `add()`, or is None at the end of the chain. The chain is append-only at
    the head: `add()` snapshots the current state into a new node below it,
    so existing links are never rewritten.
    """

    def __init__(self, root_cause: Any):
        if root_cause is None:
            raise ValueError("ChainedError requires a root cause, got None.")
        super().__init__(root_cause)
        self.current: Any = root_cause
        self.previous: Optional["ChainedError"] = None
        self._link_cause()

    def _link_cause(self) -> None:
        # Lets tracebacks and logger.exception show the underlying exception.
        if isinstance(self.current, BaseException) and self.current is not self:
            self.__cause__ = self.current

    def _snapshot(self) -> "ChainedError":
        node = ChainedError(self.current)
        node.previous = self.previous
        return node

    def _reaches(self, value: Any) -> bool:
        """True if following `current` through nested ChainedErrors from `value` arrives at self."""
        while isinstance(value, ChainedError):
            if value is self:
                return True
            value = value.current
        return False

    def add(self, new_cause: Any) -> "ChainedError":
        """
        Makes `new_cause` the current error, demoting the existing state to `previous`.
        A cause that refers back to this chain is recorded as a snapshot of the head,
        so the chain stays acyclic.
        """
        if new_cause is None:
            raise ValueError("Cannot add None to a ChainedError.")
        if self._reaches(new_cause):
            new_cause = self._snapshot()
        self.previous = self._snapshot()
        self.current = new_cause
        self.args = (new_cause,)
        self._link_cause()
        return self

    def __reduce__(self):
        return (_restore, (type(self), self.current, self.previous))

    @property
    def message(self) -> str:
        return _describe(self.current)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ChainedError({self.current!r}, depth={self.depth})"

    def __iter__(self) -> Iterator[Any]:
        """Yields the error values of the chain, newest first."""
        node: Optional[ChainedError] = self
        while node is not None:
            yield node.current
            node = node.previous

    @property
    def depth(self) -> int:
        return sum(1 for _ in self)

    @property
    def root_cause(self) -> Any:
        """The oldest error value in the chain."""
        node = self
        while node.previous is not None:
            node = node.previous
        return node.current

    def messages(self) -> List[str]:
        return [_describe(err) for err in self]

    def trace(self) -> str:
        """
        Renders the full causal narrative, newest first:
        "'outer', caused by 'middle', caused by 'root'".
        """
        return ", caused by ".join(f"'{msg}'" for msg in self.messages())


def _restore(cls, current: Any, previous: Optional[ChainedError]) -> ChainedError:
    err = cls(current)
    err.previous = previous
    return err


def wrap(existing: Optional[ChainedError], new_cause: Any) -> ChainedError:
    """
    Attaches `new_cause` to `existing`, or starts a new chain when there is none.
    """
    if existing is None:
        return ChainedError(new_cause)
    return existing.add(new_cause)


class TransportError(Exception):
    """
    Raised by the transport when an HTTP call cannot complete
    (connection, DNS, TLS, timeout). `response` holds any partial body.
    """

    def __init__(self, *args, response: Optional[bytes] = None, original_exception: Optional[BaseException] = None):
        super().__init__(*args)
        self.response = response
        self.original_exception = original_exception
