"""
SQLite connection management and schema initialization.

Used by the durable store backends. WAL mode plus a busy timeout lets
concurrent requests read while another request appends.

IMPORTANT: Database instantiation should be done through the DI layer.
health_chat.core.dependencies.create_stores() builds the one instance the
service uses; instantiate directly only in tests.
"""
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from health_chat.core.config import DATABASE_BUSY_TIMEOUT, DATABASE_PATH
from health_chat.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class Database:
    """
    SQLite database connection manager.

    Usage:
        from health_chat.core.dependencies import create_stores
        metric_store, conversation_store = create_stores()

        # Direct instantiation (for testing):
        db = Database(db_path="/tmp/test.db")
    """

    def __init__(self, db_path: Optional[str] = None, busy_timeout: Optional[int] = None):
        """
        Initialize the database and create the schema if needed.

        Args:
            db_path: Path to SQLite database file. Defaults to config DATABASE_PATH.
            busy_timeout: SQLite busy timeout in milliseconds. Defaults to config value.
        """
        self.db_path = db_path or DATABASE_PATH
        self.busy_timeout = busy_timeout if busy_timeout is not None else DATABASE_BUSY_TIMEOUT

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _configure_connection(self, conn: sqlite3.Connection) -> None:
        conn.execute(f"PRAGMA busy_timeout = {self.busy_timeout}")

    def _init_db(self) -> None:
        """Create tables and enable WAL mode."""
        conn = sqlite3.connect(self.db_path)
        self._configure_connection(conn)
        cursor = conn.cursor()

        cursor.execute("PRAGMA journal_mode = WAL")
        result = cursor.fetchone()
        if result and result[0].lower() == 'wal':
            logger.info(f"SQLite WAL mode enabled for {self.db_path}")
        else:
            logger.warning(f"Failed to enable WAL mode, current mode: {result}")

        # seq is the insertion order; "latest" lookups depend on it, not on timestamp
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS measurements (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                record_id TEXT UNIQUE NOT NULL,
                user_key TEXT NOT NULL,
                metric_type TEXT NOT NULL,
                value TEXT NOT NULL,
                unit TEXT NOT NULL,
                timestamp TEXT NOT NULL,
                notes TEXT
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_measurements_user ON measurements (user_key, seq)"
        )

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS conversation_turns (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                session_key TEXT NOT NULL,
                role TEXT NOT NULL,
                text TEXT NOT NULL,
                timestamp TEXT NOT NULL
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_turns_session ON conversation_turns (session_key, seq)"
        )

        conn.commit()
        conn.close()

        logger.info(
            f"Database initialized: {self.db_path} "
            f"(busy_timeout={self.busy_timeout}ms)"
        )

    def get_connection(self) -> sqlite3.Connection:
        """Get a new connection with the busy timeout applied."""
        conn = sqlite3.connect(self.db_path)
        self._configure_connection(conn)
        return conn

    def ping(self) -> None:
        """
        Run a trivial query to prove the database file is usable.

        Raises:
            StorageError: If the query fails.
        """
        try:
            conn = self.get_connection()
            try:
                conn.execute("SELECT 1")
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(operation="ping") from e
