# crypto_intel/utils/readiness.py
from __future__ import annotations

import time
from typing import Any, Dict, List, Optional, Tuple

# A job is stalled once its last success is older than this many schedule periods.
STALL_MULTIPLIER_DEFAULT = 2.5


def _coerce_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def annotate_refresh_jobs(
    status: Dict[str, Any],
    now_ts: float | None = None,
    stall_multiplier: float = STALL_MULTIPLIER_DEFAULT,
) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """
    Adds stall detection to the refresh job status payload.

    Each entry of ``status["per_job"]`` gains ``age_s``, ``allowed_age_s``,
    ``stalled`` and ``never_succeeded``. The age is measured from the last
    success, falling back to the last run and then to the job start time.

    Returns (status, stalled_jobs).
    """
    now = float(now_ts) if now_ts is not None else time.time()
    started_at = _coerce_float((status.get("meta") or {}).get("started_at"))

    stale: List[Dict[str, Any]] = []

    for job_id, job in (status.get("per_job") or {}).items():
        schedule_s = _coerce_float(job.get("schedule_s")) or 0.0
        allowed_age_s = schedule_s * stall_multiplier if schedule_s > 0 else None

        last_success = _coerce_float(job.get("last_success_ts"))
        ref_ts = last_success
        if ref_ts is None:
            ref_ts = _coerce_float(job.get("last_run_ts"))
        if ref_ts is None:
            ref_ts = started_at

        age_s = max(0.0, now - ref_ts) if ref_ts is not None else None
        stalled = allowed_age_s is not None and age_s is not None and age_s > allowed_age_s

        job["age_s"] = age_s
        job["allowed_age_s"] = allowed_age_s
        job["stalled"] = stalled
        job["never_succeeded"] = last_success is None

        if stalled:
            stale.append(
                {
                    "job_id": job_id,
                    "age_s": age_s,
                    "allowed_age_s": allowed_age_s,
                    "consecutive_failures": job.get("consecutive_failures"),
                    "last_error": job.get("last_error"),
                    "never_succeeded": last_success is None,
                }
            )

    status["stale_jobs"] = stale
    status["stale_count"] = len(stale)
    return status, stale
