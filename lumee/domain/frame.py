from __future__ import annotations

import json
from typing import Any

from .models import ActuationSignal

# Deployed firmware reads these keys in this order; only append new ones.
FRAME_KEYS = ("r", "g", "b", "effect", "duration", "priority", "sound")


def to_indicator_frame(signal: ActuationSignal) -> dict[str, Any]:
    return {
        "r": signal.color.r,
        "g": signal.color.g,
        "b": signal.color.b,
        "effect": signal.effect.value,
        "duration": signal.duration_ms,
        "priority": signal.priority,
        "sound": signal.sound_id or 0,
    }


def encode_frame(signal: ActuationSignal) -> bytes:
    return json.dumps(to_indicator_frame(signal), separators=(",", ":")).encode("utf-8")
