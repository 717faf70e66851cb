"""dontpanic: fault-free alternatives to common risky operations.

Public API:
    - recover(): Intercept a fault raised inside a scope as an error value
    - guard() / guarded(): Run any callable under the interceptor
    - dereference(), divide(), modulo(), channel_send(), channel_close(),
      map_write(), make_sequence(), sequence_read(), sequence_write(),
      subsequence(), string_index(): Guarded operations
    - Guarded: The ``(value, error)`` pair they return
"""

from __future__ import annotations

import logging

from dontpanic.channel import Channel
from dontpanic.config import GuardConfig, default_config
from dontpanic.errors import (
    ArgumentCountError,
    ChannelClosedError,
    ConfigurationError,
    DontPanicError,
    Panic,
    PanicError,
)
from dontpanic.ops import (
    channel_close,
    channel_send,
    dereference,
    divide,
    make_sequence,
    map_write,
    modulo,
    sequence_read,
    sequence_write,
    string_index,
    subsequence,
)
from dontpanic.recover import Caught, Recover, guard, guarded, panic, recover
from dontpanic.ref import Ref
from dontpanic.result import Failure, Guarded, Result, Success
from dontpanic.sequence import Slice

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("dontpanic")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("dontpanic").addHandler(logging.NullHandler())

__all__ = [
    "ArgumentCountError",
    "Caught",
    "Channel",
    "ChannelClosedError",
    "ConfigurationError",
    "DontPanicError",
    "Failure",
    "GuardConfig",
    "Guarded",
    "Panic",
    "PanicError",
    "Recover",
    "Ref",
    "Result",
    "Slice",
    "Success",
    "channel_close",
    "channel_send",
    "default_config",
    "dereference",
    "divide",
    "guard",
    "guarded",
    "make_sequence",
    "map_write",
    "modulo",
    "panic",
    "recover",
    "sequence_read",
    "sequence_write",
    "string_index",
    "subsequence",
]
