import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

from exchron.observability.logger import log_event


class AuditLogger:
    """
    Responsible for building and persisting audit records
    for proxied prediction requests.
    """
    def build_record(
        self,
        request_id: str,
        user_id: str,
        route: str,
        model: Optional[str],
        datasource: Optional[str],
        outcome: str,
        status_code: int,
        duration_seconds: float,
    ) -> Dict:
        return {
            "audit_id": str(uuid.uuid4()),
            "request_id": request_id,
            "user_id": user_id,
            "route": route,
            "model": model,
            "datasource": datasource,
            "outcome": outcome,
            "status_code": status_code,
            "duration_seconds": duration_seconds,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def persist(self, record: Dict):
        """
        For now: structured log output.
        """
        log_event("AUDIT_EVENT", record)
