from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Optional, Tuple, Type

from bridges.models import Bridge


# Marks nodes that only carry a timeout.
_NO_KEY = object()


class BridgeSlot(str, Enum):
    DEFAULT = "_default"
    PEER = "peer"


@dataclass(frozen=True, eq=False)
class CallContext:
    """
    Immutable, call-scoped carrier of values.

    Each attachment returns a child that points at its parent; lookups walk
    towards the root. A carrier is never modified once built, so it can be
    shared freely between tasks.
    """
    parent: Optional["CallContext"] = None
    key: Hashable = _NO_KEY
    value: Any = None
    timeout: Optional[float] = None

    @classmethod
    def background(cls) -> "CallContext":
        return cls()

    def with_value(self, key: Hashable, value: Any) -> "CallContext":
        return CallContext(parent=self, key=key, value=value, timeout=self.timeout)

    def with_timeout(self, seconds: float) -> "CallContext":
        return CallContext(parent=self, timeout=seconds)

    def lookup(self, key: Hashable) -> Tuple[Any, bool]:
        ctx: Optional[CallContext] = self
        while ctx is not None:
            if ctx.key is not _NO_KEY and ctx.key == key:
                return ctx.value, True
            ctx = ctx.parent
        return None, False


def _slot_key(name: str, value_type: Type) -> Tuple[str, Type]:
    if isinstance(name, BridgeSlot):
        name = name.value
    return name, value_type


def with_bridge(
    ctx: CallContext, bridge: Bridge, name: str = BridgeSlot.DEFAULT
) -> CallContext:
    """Return a new context carrying ``bridge`` under ``name``."""
    return ctx.with_value(_slot_key(name, Bridge), bridge)


def bridge_from_context(
    ctx: CallContext, name: str = BridgeSlot.DEFAULT
) -> Tuple[Optional[Bridge], bool]:
    value, found = ctx.lookup(_slot_key(name, Bridge))
    if not found or not isinstance(value, Bridge):
        return None, False
    return value, True
