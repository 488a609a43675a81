"""Insertion-ordered keyed collection with optional mutation events."""

from collections import OrderedDict
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Callable, Dict, Generic, Iterator, List, Mapping, Optional, TypeVar, Union

from pyee import EventEmitter

from wwbot.core.exceptions import (
    EventsSupportError,
    IncompatibleConfigurationError,
    InvalidArgumentsError,
    ReadOnlyError,
)
from wwbot.core.utils import random_between

K = TypeVar("K")
V = TypeVar("V")

# Event mechanism used by collections created with events enabled. None means
# the host has no event support.
EventCenter = EventEmitter

EVENT_ADD = "add"
EVENT_REMOVE = "remove"


def _is_index(i) -> bool:
    return isinstance(i, Integral) and not isinstance(i, bool)


def _is_key(k) -> bool:
    if k is None:
        return False
    try:
        hash(k)
    except TypeError:
        return False
    return True


@dataclass
class CollectionConfig:
    """Configuration for a BulletproofCollection.

    Attributes:
        key_extractor: Function deriving a key from a value, used by ``add``
        enable_events: Whether ``add``/``remove`` events are emitted
    """
    key_extractor: Optional[Callable[[Any], Any]] = None
    enable_events: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CollectionConfig":
        """Build a config from a plain mapping (camelCase keys are accepted)."""
        return cls(
            key_extractor=data.get("key_extractor", data.get("keyExtractor")),
            enable_events=bool(data.get("enable_events", data.get("enableEvents", False))),
        )


class NoEvents:
    """Event channel of a collection created without events."""

    enabled = False

    def emit(self, event: str, *args) -> None:
        pass

    def subscribe(self, event: str, listener: Callable, once: bool = False) -> None:
        raise IncompatibleConfigurationError(
            "Events are not enabled for this collection.",
            details={"event": event},
        )

    def unsubscribe(self, event: str, listener: Callable) -> None:
        raise IncompatibleConfigurationError(
            "Events are not enabled for this collection.",
            details={"event": event},
        )

    def listeners(self, event: str) -> List[Callable]:
        return []


class WithEvents:
    """Event channel backed by an owned emitter."""

    enabled = True

    def __init__(self):
        if EventCenter is None:
            raise EventsSupportError()
        self._emitter = EventCenter()

    def emit(self, event: str, *args) -> None:
        self._emitter.emit(event, *args)

    def subscribe(self, event: str, listener: Callable, once: bool = False) -> None:
        if once:
            self._emitter.once(event, listener)
        else:
            self._emitter.add_listener(event, listener)

    def unsubscribe(self, event: str, listener: Callable) -> None:
        # Unknown listeners are ignored
        if listener in self._emitter.listeners(event):
            self._emitter.remove_listener(event, listener)

    def listeners(self, event: str) -> List[Callable]:
        return self._emitter.listeners(event)


class BulletproofCollection(Generic[K, V]):
    """Ordered alternative to dicts.

    Has a lot of useful functions and optional mutation events support.
    Entries keep insertion order; re-adding an existing key overwrites the
    value in place. ``None`` and unhashable keys are rejected by
    ``add_custom``; lookups with them find nothing. Positional methods treat
    non-integer indexes (``True``, ``1.0``) as absent.

    Positional operations (``index``, ``index_to_key``, ``key_to_index``...)
    scan the entries in order, so they are O(size).

    Iterating ``keys``, ``keys_and_values`` or the collection itself while
    adding or removing entries raises ``RuntimeError`` on the next step.
    ``for_each``, ``map``, ``filter`` and ``filter_to_array`` work on a
    snapshot and tolerate mutation from their callbacks.
    """

    def __init__(self, config: Union[CollectionConfig, Mapping[str, Any], None] = None):
        """Initialize the collection.

        Args:
            config: CollectionConfig or mapping with ``key_extractor`` and
                ``enable_events``

        Raises:
            EventsSupportError: If events are requested but unsupported
        """
        if config is None:
            config = CollectionConfig()
        elif not isinstance(config, CollectionConfig):
            config = CollectionConfig.from_mapping(config)

        self._key_extractor = config.key_extractor
        self._enable_events = bool(config.enable_events)
        self._events = WithEvents() if self._enable_events else NoEvents()
        self._map: Dict[K, V] = {}

    def reset(self) -> None:
        """Reset the collection clearing it."""
        self._map.clear()

    #### Properties ####

    @property
    def key_extractor(self) -> Optional[Callable[[V], K]]:
        return self._key_extractor

    @property
    def events_enabled(self) -> bool:
        return self._events.enabled

    @property
    def size(self) -> int:
        """Number of elements in this collection."""
        return len(self._map)

    @size.setter
    def size(self, value):
        raise ReadOnlyError("size")

    @property
    def last_index(self) -> Optional[int]:
        """Last accessible index, or None if the collection is empty."""
        return None if self.size == 0 else self.size - 1

    @last_index.setter
    def last_index(self, value):
        raise ReadOnlyError("last_index")

    @property
    def first(self) -> Optional[V]:
        """First element in the collection."""
        return next(iter(self._map.values()), None)

    @first.setter
    def first(self, value):
        raise ReadOnlyError("first")

    @property
    def last(self) -> Optional[V]:
        """Last element in the collection."""
        last_index = self.last_index
        if last_index is not None:
            return self.index(last_index)
        return None

    @last.setter
    def last(self, value):
        raise ReadOnlyError("last")

    @property
    def keys(self):
        """Iterable of the keys in this collection."""
        return self._map.keys()

    @keys.setter
    def keys(self, value):
        raise ReadOnlyError("keys")

    @property
    def keys_and_values(self):
        """Iterable of (key, value) pairs."""
        return self._map.items()

    @keys_and_values.setter
    def keys_and_values(self, value):
        raise ReadOnlyError("keys_and_values")

    #### Basic methods ####

    def add(self, value: V) -> "BulletproofCollection[K, V]":
        """Add an element using the result of the key extractor as a key.

        Raises:
            IncompatibleConfigurationError: If no key extractor is configured
        """
        if self._key_extractor is None:
            raise IncompatibleConfigurationError(
                "'add' requires a key extractor; use 'add_custom' instead."
            )
        return self.add_custom(self._key_extractor(value), value)

    def add_custom(self, key: K, value: V) -> "BulletproofCollection[K, V]":
        """Add an element using a specific key.

        Raises:
            InvalidArgumentsError: If the key is None or unhashable
        """
        if key is None:
            raise InvalidArgumentsError("'None' keys are not allowed.")
        if not _is_key(key):
            raise InvalidArgumentsError(
                f"Keys must be hashable, got {type(key).__name__}.",
                details={"key": repr(key)},
            )

        self._map[key] = value
        self._events.emit(EVENT_ADD, value, key, self)

        return self

    def key(self, k: K) -> Optional[V]:
        """Return the element associated with the key."""
        return self._map.get(k) if _is_key(k) else None

    def index(self, i: int) -> Optional[V]:
        """Return the element at the index (None for non-integer indexes)."""
        if not _is_index(i):
            return None
        for c, v in enumerate(self):
            if c == i:
                return v
        return None

    def index_to_key(self, i: int) -> Optional[K]:
        """Get the key of the element at the index i."""
        if not _is_index(i):
            return None
        for c, k in enumerate(self.keys):
            if c == i:
                return k
        return None

    def key_to_index(self, k: K) -> Optional[int]:
        """Get the index of the element with key k."""
        for c, kk in enumerate(self.keys):
            if kk == k:
                return c
        return None

    def index_of(self, v: V) -> Optional[int]:
        """Search for an element and return its index."""
        for c, vv in enumerate(self):
            if vv is v or vv == v:
                return c
        return None

    def key_of(self, v: V) -> Optional[K]:
        """Search for an element and return its key."""
        for kk, vv in self.keys_and_values:
            if vv is v or vv == v:
                return kk
        return None

    def has_key(self, k: K) -> bool:
        return _is_key(k) and k in self._map

    def has_index(self, i: int) -> bool:
        return _is_index(i) and 0 <= i < self.size

    def remove_key(self, k: K) -> Optional[V]:
        """Remove the element associated to the key. Returns the element."""
        if not _is_key(k) or k not in self._map:
            return None

        value = self._map.pop(k)
        self._events.emit(EVENT_REMOVE, value, k, self)

        return value

    def remove_index(self, i: int) -> Optional[V]:
        """Remove the element at the index i. Returns the element."""
        return self.remove_key(self.index_to_key(i))

    def random_key(self) -> Optional[K]:
        """Return a random key of the collection."""
        if self.size:
            return self.index_to_key(random_between(0, self.last_index))
        return None

    def random(self) -> Optional[V]:
        """Return a random element of the collection."""
        random_key = self.random_key()
        return None if random_key is None else self.key(random_key)

    def pull_random_key(self) -> Optional[K]:
        """Delete a random entry and return its key."""
        random_key = self.random_key()
        self.remove_key(random_key)
        return random_key

    def pull_random(self) -> Optional[V]:
        """Delete a random entry and return its element."""
        return self.remove_key(self.random_key())

    def to_object(self) -> Dict[K, V]:
        """Return a new dict with the keys/values of this collection."""
        return dict(self._map)

    def to_map(self) -> "OrderedDict[K, V]":
        """Return a new OrderedDict with the keys/values of this collection."""
        return OrderedDict(self._map)

    #### Events ####

    def on(self, event: str, listener: Callable[[V, K, "BulletproofCollection[K, V]"], Any]) -> None:
        """Register a listener for ``add`` or ``remove`` events."""
        self._events.subscribe(event, listener)

    def once(self, event: str, listener: Callable[[V, K, "BulletproofCollection[K, V]"], Any]) -> None:
        """Register a listener called only for the next matching event."""
        self._events.subscribe(event, listener, once=True)

    def off(self, event: str, listener: Callable) -> None:
        """Remove a previously registered listener."""
        self._events.unsubscribe(event, listener)

    def listeners(self, event: str) -> List[Callable]:
        return self._events.listeners(event)

    #### Iteration utils ####

    def __iter__(self) -> Iterator[V]:
        """Iterate over the values (and only the values) in this collection."""
        return iter(self._map.values())

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, k) -> bool:
        return self.has_key(k)

    def for_each(self, fn: Callable[[V, K, "BulletproofCollection[K, V]"], Any]) -> None:
        """Call fn(value, key, collection) for every entry in order."""
        for key, value in list(self._map.items()):
            fn(value, key, self)

    def map(self, fn: Callable[[V, K, "BulletproofCollection[K, V]"], Any]) -> List[Any]:
        """Equivalent to list map but with key as second parameter."""
        res = []
        self.for_each(lambda value, key, bpc: res.append(fn(value, key, bpc)))
        return res

    def filter(self, fn: Callable[[V, K, "BulletproofCollection[K, V]"], Any]) -> "BulletproofCollection[K, V]":
        """Similar to filter_to_array but returns a minimal BulletproofCollection.

        The resulting collection has the same key extractor but no events support.
        """
        res = BulletproofCollection(CollectionConfig(key_extractor=self._key_extractor))

        def keep(value, key, bpc):
            if fn(value, key, bpc):
                res.add_custom(key, value)

        self.for_each(keep)
        return res

    def filter_to_array(self, fn: Callable[[V, K, "BulletproofCollection[K, V]"], Any]) -> List[V]:
        """Values of the entries for which fn returns truthy, in order."""
        res = []

        def keep(value, key, bpc):
            if fn(value, key, bpc):
                res.append(value)

        self.for_each(keep)
        return res

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._map.items())
        return f"{self.__class__.__name__}({{{items}}})"
