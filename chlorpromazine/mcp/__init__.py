"""Prompt and tool dispatch core."""

from .dispatcher import Dispatcher, build_dispatcher, get_dispatcher

__all__ = ["Dispatcher", "build_dispatcher", "get_dispatcher"]
