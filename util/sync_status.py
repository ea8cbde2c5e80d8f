from typing import List, Tuple


def remote_status_fragments(pending: int, failed: int, syncing: bool, labels: dict) -> List[Tuple[str, str]]:
    """Status-bar fragments for the remote queue: pending, failed and sync state."""
    entries: List[Tuple[str, str]] = []
    if syncing:
        entries.append(("class:status.warn", labels.get("syncing", "syncing…")))
    if pending:
        entries.append(("class:status.warn", labels.get("pending", f"{pending} pending")))
    if failed:
        entries.append(("class:status.fail", labels.get("failed", f"{failed} failed")))
    if not entries:
        entries.append(("class:status.ok", "■"))
    return entries


__all__ = ["remote_status_fragments"]
