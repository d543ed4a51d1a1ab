"""SQLite-backed usage log storage."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from makeyourtext.logging.models import RewriteLog

DEFAULT_DB_PATH = Path.home() / ".makeyourtext" / "usage.db"

_COLUMNS = (
    "id", "session_id", "timestamp", "mode", "tone_id", "purpose_id",
    "audience_id", "relationship_id", "plan_tier", "variant_count", "blocked",
    "input_chars", "elapsed_seconds", "language", "success", "error_message",
)


class UsageStore:
    """SQLite-backed store for rewrite usage logs with WAL mode."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS rewrite_logs (
                    id TEXT PRIMARY KEY,
                    session_id TEXT NOT NULL,
                    timestamp TEXT NOT NULL,
                    mode TEXT NOT NULL,
                    tone_id TEXT,
                    purpose_id TEXT,
                    audience_id TEXT,
                    relationship_id TEXT,
                    plan_tier TEXT NOT NULL DEFAULT 'free',
                    variant_count INTEGER NOT NULL DEFAULT 0,
                    blocked INTEGER NOT NULL DEFAULT 0,
                    input_chars INTEGER NOT NULL DEFAULT 0,
                    elapsed_seconds REAL NOT NULL DEFAULT 0.0,
                    language TEXT NOT NULL DEFAULT 'ko',
                    success INTEGER NOT NULL DEFAULT 1,
                    error_message TEXT
                )
            """)

    def save_log(self, log: RewriteLog) -> None:
        """Persist a usage log entry."""
        placeholders = ", ".join("?" for _ in _COLUMNS)
        with self._connect() as conn:
            conn.execute(
                f"INSERT OR REPLACE INTO rewrite_logs ({', '.join(_COLUMNS)}) "
                f"VALUES ({placeholders})",
                (
                    log.id,
                    log.session_id,
                    log.timestamp.isoformat(),
                    log.mode,
                    log.tone_id,
                    log.purpose_id,
                    log.audience_id,
                    log.relationship_id,
                    log.plan_tier,
                    log.variant_count,
                    1 if log.blocked else 0,
                    log.input_chars,
                    log.elapsed_seconds,
                    log.language,
                    1 if log.success else 0,
                    log.error_message,
                ),
            )

    def get_logs(
        self,
        session_id: str | None = None,
        limit: int = 50,
    ) -> list[RewriteLog]:
        """Retrieve usage logs, optionally filtered by session_id."""
        columns = ", ".join(_COLUMNS)
        with self._connect() as conn:
            if session_id is not None:
                rows = conn.execute(
                    f"SELECT {columns} FROM rewrite_logs WHERE session_id = ? "
                    "ORDER BY timestamp DESC LIMIT ?",
                    (session_id, limit),
                ).fetchall()
            else:
                rows = conn.execute(
                    f"SELECT {columns} FROM rewrite_logs ORDER BY timestamp DESC LIMIT ?",
                    (limit,),
                ).fetchall()
        return [self._row_to_log(row) for row in rows]

    def get_monthly_stats(self) -> dict:
        """Get aggregated stats for the current month."""
        now = datetime.now()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        with self._connect() as conn:
            row = conn.execute(
                """SELECT
                       COUNT(*) as total_runs,
                       SUM(variant_count) as total_variants,
                       SUM(CASE WHEN blocked = 1 THEN 1 ELSE 0 END) as blocked_count,
                       SUM(input_chars) as total_chars,
                       AVG(elapsed_seconds) as avg_elapsed,
                       SUM(CASE WHEN success = 1 THEN 1 ELSE 0 END) as success_count
                   FROM rewrite_logs
                   WHERE timestamp >= ?""",
                (month_start.isoformat(),),
            ).fetchone()
        return {
            "total_runs": row[0] or 0,
            "total_variants": row[1] or 0,
            "blocked_count": row[2] or 0,
            "total_input_chars": row[3] or 0,
            "avg_elapsed_seconds": round(row[4], 3) if row[4] is not None else None,
            "success_rate": (row[5] / row[0] * 100) if row[0] else 0.0,
            "month": now.strftime("%Y-%m"),
        }

    def get_tone_counts(self) -> dict[str, int]:
        """Number of logged runs per tone id."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT tone_id, COUNT(*) FROM rewrite_logs "
                "WHERE tone_id IS NOT NULL GROUP BY tone_id ORDER BY COUNT(*) DESC"
            ).fetchall()
        return {tone_id: count for tone_id, count in rows}

    @staticmethod
    def _row_to_log(row: tuple) -> RewriteLog:
        data = dict(zip(_COLUMNS, row))
        data["timestamp"] = datetime.fromisoformat(data["timestamp"])
        data["blocked"] = bool(data["blocked"])
        data["success"] = bool(data["success"])
        return RewriteLog(**data)
