from __future__ import annotations

import os
import random
from typing import Optional


def set_determinism(seed: Optional[int] = None, python_hash_seed: int = 0) -> Optional[random.Random]:
    """Apply determinism controls for reproducible quiz orders.

    - Sets PYTHONHASHSEED for child processes
    - Seeds the global Python ``random`` module
    - Returns a dedicated ``random.Random`` seeded the same way, or None when
      no seed is configured (runs are then freshly random)
    """
    if seed is None:
        return None
    os.environ["PYTHONHASHSEED"] = str(python_hash_seed)
    random.seed(seed)
    return random.Random(seed)
