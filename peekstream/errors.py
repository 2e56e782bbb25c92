"""Error types shared across the package."""

from __future__ import annotations

import threading
from collections import deque

DEFAULT_ERR_BUF_SIZE = 10


def _text(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


class ErrFuncMissing(Exception):
    """A required callable argument was not supplied."""

    def __init__(self, caller: str, func: str) -> None:
        self.caller = caller
        self.func = func
        super().__init__(f"Missing function argument in {caller}: {func}")


class ErrChan(Exception):
    """Bounded, thread-safe collection of errors that keeps only the newest ones."""

    def __init__(self, max_items: int = DEFAULT_ERR_BUF_SIZE, desc: str = "") -> None:
        super().__init__(desc)
        self.desc = desc
        self.max = max(max_items, DEFAULT_ERR_BUF_SIZE)
        self.total = 0
        self._items: deque[BaseException] = deque()
        self._lock = threading.Lock()

    def send(self, err: BaseException) -> ErrChan:
        """Store an error, discarding the oldest one when the buffer is full."""
        with self._lock:
            if len(self._items) >= self.max:
                self._items.popleft()
            self._items.append(err)
            self.total += 1
        return self

    def drain(self) -> list[BaseException]:
        """Remove and return all buffered errors, oldest first."""
        with self._lock:
            items = list(self._items)
            self._items.clear()
        return items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __str__(self) -> str:
        return (
            f"{self.desc} experienced {self.total} errors total, "
            f"{len(self)} available for reporting limited to configured max {self.max}, "
            "please drain items channel for more information"
        )


class ErrNilPointer(Exception):
    """A required object was missing."""

    def __init__(self, function: str, caller: str) -> None:
        self.function = function
        self.caller = caller
        super().__init__(f"Nil pointer in {caller} while calling {function}")


class ErrParseMessageSource(Exception):
    """Summary of many parse errors from a single message source."""

    def __init__(
        self, count: int, source: str, parser: str, errs: ErrChan | None = None
    ) -> None:
        self.count = count
        self.source = source
        self.parser = parser
        self.errs = errs
        super().__init__(count, source, parser)

    def __str__(self) -> str:
        msg = (
            f"[{self.count}] errors were encountered while parsing source "
            f"[{self.source}] with parser [{self.parser}]"
        )
        if self.errs is not None and len(self.errs) > 0:
            msg = (
                f"{msg}; individual errors attached as channel with {len(self.errs)} "
                "elements; drain Errs.Items to see messages"
            )
        return msg


class ErrParseRawData(Exception):
    """Parsing a raw message into an event failed."""

    def __init__(
        self,
        err: BaseException | str,
        raw: bytes | str,
        source: str = "",
        offset: int = 0,
        desc: str = "",
    ) -> None:
        self.err = err
        self.raw = raw
        self.source = source
        self.offset = offset
        self.desc = desc
        super().__init__(
            f"Error: [{err}] parsing message [{_text(raw)}] from [{source}] "
            f"offset [{offset}]; desc: [{desc}]"
        )


class ErrInvalidPath(Exception):
    """A filesystem path was not usable."""

    def __init__(self, path: str, msg: str) -> None:
        self.path = path
        self.msg = msg
        super().__init__(f"path error for {path}: {msg}")


class ErrDecodeJson(Exception):
    """JSON decoding of a raw payload failed."""

    def __init__(self, err: BaseException | str, raw: bytes | str) -> None:
        self.err = err
        self.raw = raw
        super().__init__(f"{err} for [{_text(raw)}]")