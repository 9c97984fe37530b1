"""Filesystem lifecycle hooks."""

from .hook_bus import (
    Continue,
    FilesystemHook,
    HookBus,
    HookEvent,
    HookPriority,
    HookResult,
    Listener,
    RegisteredListener,
    StopWith,
)

__all__ = [
    "Continue",
    "FilesystemHook",
    "HookBus",
    "HookEvent",
    "HookPriority",
    "HookResult",
    "Listener",
    "RegisteredListener",
    "StopWith",
]
