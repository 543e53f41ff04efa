import hashlib
import json
import os
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..reconcile.verify import Report

ARTIFACT_DIR = "data/_artifacts"


def ensure_artifact_dir(artifact_dir: str = ARTIFACT_DIR):
    os.makedirs(artifact_dir, exist_ok=True)


def sha256_of_bytes(b: bytes) -> str:
    h = hashlib.sha256()
    h.update(b)
    return h.hexdigest()


def sha256_of_payload(payload: Any) -> str:
    """Deterministic sha256 over a JSON-serialisable payload (sorted keys, compact separators)."""
    canonical = json.dumps(
        payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str
    )
    return sha256_of_bytes(canonical.encode("utf-8"))


def git_commit_hash() -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL, text=True
        )
        return out.strip()
    except (OSError, subprocess.CalledProcessError):
        return None


def drift_manifest(
    report: Optional[Report],
    orphans: Optional[Sequence[Path]] = None,
    root: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the manifest payload for a verification or orphan pass."""
    m: Dict[str, Any] = {"data_root": str(root) if root is not None else None}
    if report is not None:
        m["summary"] = report.summary()
        m["series"] = report.to_records()
    if orphans is not None:
        m["orphans"] = [str(p) for p in orphans]
    return m


def write_manifest(
    manifest: Dict[str, Any],
    prefix: str = "drift",
    artifact_dir: str = ARTIFACT_DIR,
) -> str:
    """Write a manifest JSON to ``artifact_dir`` and return its path.

    The manifest is augmented with a UTC timestamp, the git commit (when run
    inside a checkout) and a sha256 over the stable part of the payload, so
    two passes over an unchanged tree carry the same hash.
    """
    ensure_artifact_dir(artifact_dir)
    m = dict(manifest)  # shallow copy
    m.setdefault("run_timestamp_utc", datetime.now(timezone.utc).isoformat())
    m["git_commit"] = git_commit_hash()

    stable_keys: List[str] = ["data_root", "summary", "series", "orphans"]
    stable_payload = {k: m.get(k) for k in stable_keys if k in m}
    m["sha256"] = sha256_of_payload(stable_payload)

    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    path = os.path.join(artifact_dir, f"{prefix}_{ts}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(m, f, ensure_ascii=False, indent=2, default=str)
    return path
