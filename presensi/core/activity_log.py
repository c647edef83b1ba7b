"""
API Activity Logger
Catat aktivitas penting API (login, presensi, dll) ke log untuk monitoring.
"""

import json
import logging
from typing import Optional

logger = logging.getLogger("activity")

MASKED_FIELDS = ("pin", "password", "confirmPin", "current_pin", "new_pin")
TRUNCATED_FIELDS = ("token", "accessToken", "refreshToken")


def mask_details(details: dict) -> dict:
    safe = dict(details)
    for key in MASKED_FIELDS:
        if safe.get(key):
            safe[key] = "***"
    for key in TRUNCATED_FIELDS:
        if safe.get(key):
            safe[key] = str(safe[key])[:20] + "..."
    return safe


def log_activity(kind: str, action: str, details: Optional[dict] = None, success: bool = True):
    status_icon = "[OK]" if success else "[FAIL]"
    line = f"{status_icon} {kind.upper()}: {action}"
    if details:
        line += " | " + json.dumps(mask_details(details), default=str, ensure_ascii=False)

    if success:
        logger.info(line)
    else:
        logger.warning(line)


def activity_kind_for_path(path: str) -> str:
    if "/auth" in path or "/pin" in path or "/activation" in path:
        return "auth"
    if "/attendance" in path or "/checkin" in path or "/checkout" in path:
        return "attendance"
    return "info"
