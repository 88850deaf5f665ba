"""Procedural settlement and road network generation module."""

from .builder import build_roads, hub_count, split_hubs
from .generator import WorldGenerator, generate_world
from .params import WorldConfig
from .repair import ensure_connected, find_components
from .settlements import generate_settlements

__all__ = [
    "WorldConfig",
    "WorldGenerator",
    "build_roads",
    "ensure_connected",
    "find_components",
    "generate_settlements",
    "generate_world",
    "hub_count",
    "split_hubs",
]
