from __future__ import annotations

from enum import Enum
from typing import Any

from ..core.interfaces import PlateProber
from .vegvesen import VegvesenProber


class Registry(str, Enum):
    VEGVESEN = "vegvesen"


def make_prober(registry: Registry, **kwargs: Any) -> PlateProber:
    if registry == Registry.VEGVESEN:
        return VegvesenProber(**kwargs)
    raise ValueError(f"Unknown registry: {registry}")
