import os
import sqlite3
from contextlib import contextmanager

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "..", "data")


def resolve_db_path(db_path: str | None = None) -> str:
    if db_path:
        return os.path.abspath(db_path)
    data_dir = os.getenv("FLOWCASER_DATA_DIR", DEFAULT_DATA_DIR)
    return os.path.abspath(os.getenv("FLOWCASER_DB_PATH", os.path.join(data_dir, "flowcaser.db")))


def _ensure_db(db_path: str) -> None:
    os.makedirs(os.path.dirname(db_path), exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS teams (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                description TEXT,
                created_at TEXT
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS bugs (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                status TEXT NOT NULL DEFAULT 'open'
                    CHECK (status IN ('open', 'in_progress', 'resolved', 'closed')),
                priority TEXT NOT NULL DEFAULT 'medium'
                    CHECK (priority IN ('low', 'medium', 'high', 'critical')),
                assigned_to TEXT,
                team_id TEXT NOT NULL,
                created_by TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT,
                FOREIGN KEY(team_id) REFERENCES teams(id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS feature_requests (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                status TEXT NOT NULL DEFAULT 'pending'
                    CHECK (status IN ('pending', 'approved', 'in_development', 'completed', 'rejected')),
                priority TEXT NOT NULL DEFAULT 'medium'
                    CHECK (priority IN ('low', 'medium', 'high')),
                votes INTEGER NOT NULL DEFAULT 0 CHECK (votes >= 0),
                team_id TEXT NOT NULL,
                created_by TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT,
                FOREIGN KEY(team_id) REFERENCES teams(id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS knowledge_cases (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL DEFAULT '',
                category TEXT NOT NULL DEFAULT '',
                tags TEXT,
                team_id TEXT NOT NULL,
                created_by TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT,
                FOREIGN KEY(team_id) REFERENCES teams(id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS time_logs (
                id TEXT PRIMARY KEY,
                description TEXT NOT NULL DEFAULT '',
                hours REAL NOT NULL DEFAULT 0 CHECK (hours >= 0),
                date TEXT NOT NULL,
                project TEXT,
                team_id TEXT NOT NULL,
                user_id TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT,
                FOREIGN KEY(team_id) REFERENCES teams(id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS chat_messages (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT UNIQUE NOT NULL,
                content TEXT NOT NULL,
                role TEXT NOT NULL,
                team_id TEXT NOT NULL,
                user_id TEXT,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_chat_messages_team ON chat_messages(team_id, created_at)"
        )
        conn.commit()


def _connect(db_path: str):
    conn = sqlite3.connect(db_path, timeout=5.0, isolation_level=None)
    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA busy_timeout=5000;")
    except sqlite3.DatabaseError:
        # Best-effort pragmas; ignore if not supported
        pass
    return conn


@contextmanager
def get_conn(db_path: str | None = None):
    path = resolve_db_path(db_path)
    _ensure_db(path)
    conn = _connect(path)
    try:
        yield conn
    finally:
        conn.close()
