"""Shared utility functions for wwbot."""

import hashlib
import json
import math
import random
import time
from datetime import datetime
from typing import Any, Dict

import numpy as np


def seed_everything(seed: int) -> None:
    """Set seed for reproducibility across all random number generators."""
    random.seed(seed)
    np.random.seed(seed)


def random_between(min_value: float, max_value: float, rng: random.Random = None) -> int:
    """Return a random integer from the [min_value, max_value] interval.

    Both ends are inclusive. Non-integer bounds are narrowed to the integers
    they enclose.
    """
    low = math.ceil(min_value)
    high = math.floor(max_value)
    return (rng or random).randint(low, high)


def deep_merge(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries, with update taking precedence."""
    result = base.copy()
    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def generate_game_id(prefix: str = "game") -> str:
    """Generate a unique game ID."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    random_suffix = hashlib.md5(f"{time.time()}{random.random()}".encode()).hexdigest()[:8]
    return f"{prefix}_{timestamp}_{random_suffix}"


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """Safely dump object to JSON, handling datetime and other non-serializable types."""

    def default_handler(o):
        if isinstance(o, datetime):
            return o.isoformat()
        if hasattr(o, "to_dict"):
            return o.to_dict()
        if hasattr(o, "__dict__"):
            return o.__dict__
        return str(o)

    return json.dumps(obj, default=default_handler, **kwargs)


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{seconds / 60:.1f}m"
    else:
        return f"{seconds / 3600:.1f}h"
