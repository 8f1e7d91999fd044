"""Response dict builders shared by the routers."""

from __future__ import annotations

from app.application.use_cases.ingest_upload import IngestResult
from app.domain.entities.assignment import Assignment
from app.domain.entities.worker import Worker


def serialize_worker(w: Worker | None) -> dict | None:
    if w is None:
        return None
    return {"id": w.id, "name": w.name, "email": w.email, "mobile": w.mobile}


def serialize_assignment(a: Assignment, worker: Worker | None = None) -> dict:
    data = {
        "id": a.id,
        "kind": a.kind.value,
        "ordinal": a.ordinal,
        "display_name": a.display_name,
        "contact_number": a.contact_number,
        "email_address": a.email_address,
        "freeform_note": a.freeform_note,
        "worker_id": a.worker_id,
        "status": a.status.value,
        "created_at": a.created_at.isoformat() if a.created_at else None,
        "updated_at": a.updated_at.isoformat() if a.updated_at else None,
    }
    if worker is not None:
        data["worker"] = serialize_worker(worker)
    return data


def serialize_ingest(result: IngestResult) -> dict:
    return {
        "total_rows": result.total_rows,
        "total_workers": result.total_workers,
        "dropped_rows": result.dropped_rows,
        "dropped": [
            {
                "row_number": d.row_number,
                "missing": list(d.missing),
                "display_name": d.display_name,
                "contact_number": d.contact_number,
            }
            for d in result.dropped
        ],
        "counts_by_worker": {str(k): v for k, v in result.counts_by_worker.items()},
    }
