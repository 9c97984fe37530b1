"""
Hook bus for filesystem lifecycle hooks.

ONLY handles listener registration and synchronous, in-process dispatch of
before/after events, including listener vetoes.
"""

import itertools
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from loguru import logger


class FilesystemHook(str, Enum):
    """Events fired by the filesystem coordinator."""
    BEFORE_UPLOAD = "Filesystem.beforeUpload"
    AFTER_UPLOAD = "Filesystem.afterUpload"
    BEFORE_DELETE = "Filesystem.beforeDelete"
    AFTER_DELETE = "Filesystem.afterDelete"
    BEFORE_RENAME = "Filesystem.beforeRename"
    AFTER_RENAME = "Filesystem.afterRename"


class HookPriority(Enum):
    """Listener execution priorities, lowest value runs first."""
    HIGHEST = 0
    HIGH = 100
    NORMAL = 500
    LOW = 900
    LOWEST = 1000


@dataclass(frozen=True)
class Continue:
    """Listener result letting the operation go ahead."""


@dataclass(frozen=True)
class StopWith:
    """Listener result stopping the event with a substitute result."""
    result: Any = None


@dataclass
class HookEvent:
    """Event passed to listeners."""
    name: str
    subject: Any
    payload: Dict[str, Any] = field(default_factory=dict)
    stopped: bool = False
    result: Any = None
    stopped_by: Optional[str] = None

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)


HookResult = Union[Continue, StopWith, None]
Listener = Callable[[HookEvent], HookResult]


@dataclass
class RegisteredListener:
    """Registered listener information."""
    name: str
    event_name: str
    listener: Listener
    priority: int
    enabled: bool = True


def _event_key(event_name: Union[str, Enum]) -> str:
    if isinstance(event_name, Enum):
        return str(event_name.value)
    return str(event_name)


class HookBus:
    """
    Synchronous hook bus.

    Listeners run inline in priority order, registration order within a
    priority. The first listener returning ``StopWith`` stops the event and
    the remaining listeners are skipped. Listener exceptions propagate.
    """

    def __init__(self):
        self._listeners: Dict[str, List[RegisteredListener]] = defaultdict(list)
        self._sequence = itertools.count(1)

    def on(
        self,
        event_name: Union[str, Enum],
        listener: Listener,
        priority: Union[HookPriority, int] = HookPriority.NORMAL,
        name: Optional[str] = None
    ) -> str:
        """
        Register a listener for an event.

        Args:
            event_name: Event to listen to
            listener: Callable receiving the HookEvent
            priority: Execution priority
            name: Unique listener name; an existing listener with the same
                name on this event is replaced

        Returns:
            The listener name, usable with ``off``
        """
        key = _event_key(event_name)

        if name is None:
            qualname = getattr(listener, "__qualname__", type(listener).__name__)
            name = f"{qualname}#{next(self._sequence)}"
        elif self._find(key, name) is not None:
            logger.warning(f"Listener '{name}' already registered for {key}, replacing")
            self.off(key, name)

        registered = RegisteredListener(
            name=name,
            event_name=key,
            listener=listener,
            priority=int(getattr(priority, "value", priority)),
        )

        listeners = self._listeners[key]
        listeners.append(registered)
        # sort() is stable, registration order survives within a priority
        listeners.sort(key=lambda item: item.priority)

        logger.debug(f"Registered listener '{name}' for {key}")
        return name

    def off(self, event_name: Union[str, Enum], listener: Union[str, Listener]) -> bool:
        """
        Unregister a listener by name or by callable.

        Returns:
            True if a listener was found and removed
        """
        key = _event_key(event_name)
        listeners = self._listeners.get(key, [])

        for i, registered in enumerate(listeners):
            if registered.name == listener or registered.listener is listener:
                listeners.pop(i)
                logger.debug(f"Unregistered listener '{registered.name}' from {key}")
                return True

        return False

    def enable(self, event_name: Union[str, Enum], name: str) -> bool:
        """Enable a listener by name."""
        return self._set_enabled(event_name, name, True)

    def disable(self, event_name: Union[str, Enum], name: str) -> bool:
        """Disable a listener by name without unregistering it."""
        return self._set_enabled(event_name, name, False)

    def listeners(self, event_name: Union[str, Enum]) -> List[RegisteredListener]:
        """Registered listeners for an event, in execution order."""
        return list(self._listeners.get(_event_key(event_name), []))

    def has_listeners(self, event_name: Union[str, Enum]) -> bool:
        return any(item.enabled for item in self._listeners.get(_event_key(event_name), []))

    def clear(self, event_name: Union[str, Enum, None] = None) -> None:
        """Remove all listeners, or only those of one event."""
        if event_name is None:
            self._listeners.clear()
        else:
            self._listeners.pop(_event_key(event_name), None)

    def dispatch(self, event_name: Union[str, Enum], subject: Any = None, **payload: Any) -> HookEvent:
        """
        Dispatch an event to its listeners.

        Args:
            event_name: Event to fire
            subject: Object firing the event
            **payload: Named fields made available to listeners

        Returns:
            The event, with ``stopped``/``result`` set if a listener stopped it
        """
        key = _event_key(event_name)
        event = HookEvent(name=key, subject=subject, payload=payload)

        for registered in list(self._listeners.get(key, [])):
            if not registered.enabled:
                continue

            outcome = registered.listener(event)

            if isinstance(outcome, StopWith):
                event.stopped = True
                event.result = outcome.result
                event.stopped_by = registered.name
                logger.debug(f"Listener '{registered.name}' stopped {key}")
                break

            if outcome is not None and not isinstance(outcome, Continue):
                raise TypeError(
                    f"Listener '{registered.name}' returned {outcome!r}, "
                    f"expected Continue, StopWith or None"
                )

        return event

    def _find(self, key: str, name: str) -> Optional[RegisteredListener]:
        for registered in self._listeners.get(key, []):
            if registered.name == name:
                return registered
        return None

    def _set_enabled(self, event_name: Union[str, Enum], name: str, enabled: bool) -> bool:
        registered = self._find(_event_key(event_name), name)
        if registered is None:
            return False
        registered.enabled = enabled
        return True
