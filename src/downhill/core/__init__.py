"""Core framework components for DOWNHILL."""

from .state import GameMode, StateMachine
from .events import EventBus, Event, EventType
from .clock import Clock, FrameQueue, ManualClock, SystemClock

__all__ = [
    "GameMode",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "Clock",
    "FrameQueue",
    "ManualClock",
    "SystemClock",
]
