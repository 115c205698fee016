"""Bridge between a blocking stdin reader thread and the server's event loop.

The MCP transport needs an async iterable of incoming lines. Reading stdin
blocks, and a read parked on an anyio worker thread cannot be cancelled, so
a termination signal would wait for the next line before the server could
stop. Here the blocking reads happen on a daemon thread instead, and each
line is handed to the event loop through a zero-buffer memory object stream.

Architecture:
    - Reader thread: os.read() on the raw descriptor, decodes UTF-8
      (invalid bytes replaced), splits lines, sends each into the stream
    - Event loop: the transport iterates the receive side; cancelling it
      returns immediately
    - End of input closes the send side, which ends the iteration

Thread Safety:
    - The reader thread reaches the loop only through anyio.from_thread with
      an explicit event loop token
    - Reads go to the raw descriptor, so the thread never holds the lock of
      sys.stdin's buffered reader
    - The thread is a daemon: interpreter exit does not wait for a pending read
"""

import codecs
import logging
import os
import sys
import threading
from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncIterator, Iterable, Iterator, Optional

import anyio
import anyio.from_thread
import anyio.lowlevel
from anyio.abc import ObjectReceiveStream, ObjectSendStream

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 65536


def split_lines(chunks: Iterable[bytes], encoding: str = "utf-8") -> Iterator[str]:
    """Decode byte chunks and yield complete lines without their newline.

    A trailing line with no newline is yielded once the chunks run out.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    pending = ""
    for chunk in chunks:
        pending += decoder.decode(chunk)
        *lines, pending = pending.split("\n")
        yield from lines
    pending += decoder.decode(b"", final=True)
    if pending:
        yield pending


def _pump(fd: int, encoding: str, send: ObjectSendStream[str], token: anyio.lowlevel.EventLoopToken) -> None:
    chunks = iter(partial(os.read, fd, _CHUNK_SIZE), b"")
    try:
        for line in split_lines(chunks, encoding):
            anyio.from_thread.run(send.send, line, token=token)
    except (anyio.BrokenResourceError, anyio.ClosedResourceError, anyio.RunFinishedError):
        logger.debug("stdin reader stopped: server no longer consuming input")
        return
    except OSError as e:
        logger.warning("Error reading stdin: %s", e)

    logger.debug("End of input on stdin")
    try:
        anyio.from_thread.run_sync(send.close, token=token)
    except anyio.RunFinishedError:
        logger.debug("Event loop finished before end of input was delivered")


@asynccontextmanager
async def stdin_lines(
    fd: Optional[int] = None, encoding: str = "utf-8"
) -> AsyncIterator[ObjectReceiveStream[str]]:
    """Yield a receive stream of stdin lines fed by a daemon reader thread.

    Usage:
        >>> async with stdin_lines() as lines:
        ...     async for line in lines:
        ...         handle(line)

    Leaving the context closes the receive side; a reader thread still
    blocked in os.read() is abandoned and stops at its next send.
    """
    send, receive = anyio.create_memory_object_stream[str](0)
    thread = threading.Thread(
        target=_pump,
        args=(sys.stdin.fileno() if fd is None else fd, encoding, send, anyio.lowlevel.current_token()),
        name="stdin reader",
        daemon=True,
    )
    thread.start()
    async with receive:
        yield receive
