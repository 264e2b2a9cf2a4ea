"""
Audit trail for payment decisions.

Every business outcome of an orchestration run (created, replayed,
conflicting, rejected, failed) is written as one structured log line:

  AUDIT | payment=<id> action=<action> | <json details>

Details must never contain a full card number or a CVV; callers pass the
last four digits at most.
"""

import json
import logging
from typing import Any, Optional

logger = logging.getLogger("payment_gateway.audit")


def log_event(
    action: str,
    payment_id: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
    level: int = logging.INFO,
) -> None:
    """
    Emit an audit log entry.

    Args:
        action: What happened (e.g. "payment_created", "idempotency_conflict").
        payment_id: The payment this event relates to, if one exists.
        details: Arbitrary context (serialized to JSON).
        level: Logging level for the entry.
    """
    logger.log(
        level,
        "AUDIT | payment=%s action=%s | %s",
        payment_id or "-",
        action,
        json.dumps(details, default=str)[:500] if details else "",
    )
