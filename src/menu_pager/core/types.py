"""Core type definitions."""

from typing import NewType

# Identifier of a menu link, unique across all menus in a store
LinkId = NewType("LinkId", str)
