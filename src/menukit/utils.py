"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Small helpers shared by cache and listing modules.
"""

import json
import time
from typing import Any


def now_ms() -> int:
    return int(time.time() * 1000)


def json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


def json_loads(s: str) -> Any:
    return json.loads(s)
