"""Running the codec off the calling thread.

Decoding and encoding are CPU-bound and produce their result in one piece.
For large files a UI or service loop can hand the work to a worker thread and
pick up the result from a Future. There is no partial result; a caller that
wants to cancel simply ignores the Future's result.
"""

from __future__ import annotations

import datetime as dt
from concurrent.futures import Executor, Future
from threading import Thread
from typing import Any, Callable, Optional, TypeVar

from ..config import CodecConfig
from ..models.table import Table
from .table import decode, encode

T = TypeVar("T")


def _submit(
    executor: Optional[Executor], fn: Callable[..., T], *args: Any, **kwargs: Any
) -> Future[T]:
    if executor is not None:
        return executor.submit(fn, *args, **kwargs)

    future: Future[T] = Future()

    def run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)

    Thread(target=run, daemon=True, name="dbfcodec-worker").start()
    return future


def decode_in_background(
    data: bytes | bytearray | memoryview,
    file_name: Optional[str] = None,
    *,
    config: CodecConfig | None = None,
    executor: Optional[Executor] = None,
) -> Future[Table]:
    """Decode on a worker thread.

    The buffer is copied before this function returns, so the caller may
    reuse it straight away.

    Args:
        data: Complete file contents
        file_name: Name to carry on the Table
        config: Codec configuration (lenient default if None)
        executor: Executor to run on; a dedicated daemon thread if None

    Returns:
        Future resolving to the decoded Table, or to the decode exception

    Example:
        ```python
        future = decode_in_background(data, "big.dbf")
        ...
        table = future.result()
        ```
    """
    return _submit(executor, decode, bytes(data), file_name, config=config)


def encode_in_background(
    table: Table,
    *,
    config: CodecConfig | None = None,
    today: Optional[dt.date] = None,
    executor: Optional[Executor] = None,
) -> Future[bytes]:
    """Encode on a worker thread.

    Args:
        table: Table to encode
        config: Codec configuration (lenient default if None)
        today: Last-update date to write
        executor: Executor to run on; a dedicated daemon thread if None

    Returns:
        Future resolving to the encoded bytes, or to the encode exception
    """
    return _submit(executor, encode, table, config=config, today=today)
