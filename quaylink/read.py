"""Decoders for the daemon's multiplexed log streams and JSON line streams."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

__all__ = [
    "LogKind",
    "LogOutput",
    "JsonDataError",
    "NewlineLogOutputDecoder",
    "JsonLineDecoder",
    "StreamReader",
]

_HEADER_SIZE = 8


class LogKind(Enum):
    """Which stream a piece of output came from."""

    STDIN = "stdin"
    STDOUT = "stdout"
    STDERR = "stderr"
    CONSOLE = "console"


_STREAM_KINDS = {0: LogKind.STDIN, 1: LogKind.STDOUT, 2: LogKind.STDERR}


@dataclass(frozen=True)
class LogOutput:
    """One frame of container output."""

    kind: LogKind
    message: bytes

    def __str__(self) -> str:
        return self.message.decode("utf-8", "replace")

    def __bytes__(self) -> bytes:
        return self.message


class JsonDataError(ValueError):
    """Well-formed JSON that does not fit the expected shape."""

    def __init__(self, message: str, column: int, contents: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.column = column
        self.contents = contents


class NewlineLogOutputDecoder:
    """Splits a byte buffer into framed log output.

    Frames carry an 8-byte header (stream type, three padding bytes, a
    big-endian length).  A buffer starting with a byte above 2 has no
    header and is split on newlines instead.
    """

    def __init__(self) -> None:
        self._pending: Optional[tuple[LogKind, int]] = None

    def decode(self, buffer: bytearray) -> Optional[LogOutput]:
        """Take one frame off the front of ``buffer``, or return ``None`` if incomplete."""
        if self._pending is None:
            if buffer and buffer[0] > 2:
                pos = buffer.find(b"\n")
                if pos < 0:
                    return None
                message = bytes(buffer[: pos + 1])
                del buffer[: pos + 1]
                return LogOutput(LogKind.CONSOLE, message)

            if len(buffer) < _HEADER_SIZE:
                return None

            header = bytes(buffer[:_HEADER_SIZE])
            del buffer[:_HEADER_SIZE]
            length = int.from_bytes(header[4:8], "big")
            self._pending = (_STREAM_KINDS[header[0]], length)

        kind, length = self._pending
        if len(buffer) < length:
            return None
        message = bytes(buffer[:length])
        del buffer[:length]
        self._pending = None
        return LogOutput(kind, message)


_LITERALS = ("true", "false", "null")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _is_eof(err: json.JSONDecodeError) -> bool:
    if err.msg.startswith("Unterminated string"):
        return True
    if err.pos >= len(err.doc):
        return True
    if err.msg == "Expecting value":
        tail = err.doc[err.pos:].rstrip()
        return tail == "-" or any(lit.startswith(tail) for lit in _LITERALS)
    return False


class JsonLineDecoder:
    """Decodes newline-delimited JSON values from a byte buffer.

    ``factory``, when given, turns each decoded value into the desired
    type; a failure there is reported as :class:`JsonDataError`.
    """

    def __init__(self, factory: Optional[Callable[[Any], Any]] = None) -> None:
        self._factory = factory

    def _decode_slice(self, data: bytes) -> Any:
        text = data.decode("utf-8")
        try:
            value = json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError as err:
            if _is_eof(err):
                return None
            raise
        if value is None or self._factory is None:
            return value
        try:
            return self._factory(value)
        except (TypeError, ValueError, KeyError) as err:
            column = len(text.rsplit("\n", 1)[-1])
            raise JsonDataError(str(err), column, text) from err

    def decode(self, buffer: bytearray) -> Any:
        """Take one JSON value off the front of ``buffer``, or return ``None``.

        A line that is not yet a complete value has its newline removed so
        the value can continue on the next line.
        """
        if not buffer:
            return None

        pos = buffer.find(b"\n")
        if pos >= 0:
            value = self._decode_slice(bytes(buffer[:pos]))
            if value is None:
                del buffer[pos]
                return None
            del buffer[: pos + 1]
            return value

        value = self._decode_slice(bytes(buffer))
        if value is not None:
            buffer.clear()
        return value


class StreamReader:
    """File-like reader over an iterable of byte chunks.

    A sized read never crosses a chunk boundary.  Exceptions raised by the
    underlying iterable surface as :class:`OSError`.
    """

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = iter(chunks)
        self._chunk: Optional[bytes] = None
        self._pos = 0

    def _next_chunk(self) -> Optional[bytes]:
        try:
            return bytes(next(self._chunks))
        except StopIteration:
            return None
        except Exception as err:
            raise OSError(str(err)) from err

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to ``size`` bytes, or everything left when ``size`` is negative."""
        if size is None or size < 0:
            parts = []
            if self._chunk is not None:
                parts.append(self._chunk[self._pos:])
                self._chunk = None
            while (chunk := self._next_chunk()) is not None:
                parts.append(chunk)
            return b"".join(parts)

        if self._chunk is None:
            chunk = self._next_chunk()
            if chunk is None:
                return b""
            self._chunk, self._pos = chunk, 0

        end = min(self._pos + size, len(self._chunk))
        data = self._chunk[self._pos:end]
        self._pos = end
        if self._pos == len(self._chunk):
            self._chunk = None
        return data