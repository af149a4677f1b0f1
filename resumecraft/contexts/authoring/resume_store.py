"""
Persistent SQLite record store for resume snapshots.

Each record holds one ResumeDocument snapshot (as JSON) keyed by a generated
record id and the owner's id. The store never looks inside the snapshot beyond
serializing and deserializing it.
"""

import json
import os
import sqlite3
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from resumecraft.contexts.authoring.exceptions import RecordNotFoundError
from resumecraft.contexts.authoring.logger import log_record_change
from resumecraft.contexts.authoring.resume_data_structure import ResumeDocument
from resumecraft.utils.event_logging import log_event
from resumecraft.utils.timestamp import now_exact, today

load_dotenv()
RESUME_STORE_PATH = Path(os.getenv("RESUME_STORE_PATH", "outs/resumes.db"))


@dataclass
class StoredResume:
    """
    One record from the store.

    Attributes:
        id: Record id issued by the store
        owner_id: Id of the owning account
        name: Display name
        document: The resume snapshot
        created_at: ISO 8601 creation timestamp
        updated_at: ISO 8601 timestamp of the last modification
    """

    id: str
    owner_id: str
    name: str
    document: ResumeDocument
    created_at: str
    updated_at: str


class ResumeStore:
    """
    SQLite-backed create/read/update/delete/list of resume snapshots.

    The database is persistent - create it once with initialize(), then open it
    later by instantiating with the db_path.
    """

    def __init__(self, db_path: Path = RESUME_STORE_PATH):
        """
        Open an existing store.

        To create a new store, use ResumeStore.initialize() instead.

        Raises:
            FileNotFoundError: If the database file doesn't exist
        """
        self.db_path = Path(db_path)

        if not self.db_path.exists():
            raise FileNotFoundError(
                f"Resume store not found: {self.db_path}\n"
                f"To create a new store, use ResumeStore.initialize()"
            )

        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row

    @classmethod
    def initialize(cls, db_path: Path = RESUME_STORE_PATH) -> "ResumeStore":
        """
        Create the store schema if needed and open the store.

        Existing records are kept.
        """
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(db_path))
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS resumes (
                id TEXT PRIMARY KEY,
                owner_id TEXT NOT NULL,
                name TEXT NOT NULL,
                data TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_owner_id ON resumes(owner_id)")
        conn.commit()
        conn.close()

        return cls(db_path)

    def create(
        self, owner_id: str, document: ResumeDocument, name: Optional[str] = None
    ) -> StoredResume:
        """
        Store a new snapshot.

        Args:
            owner_id: Id of the owning account
            document: Snapshot to store
            name: Display name (default: "Resume YYYY-MM-DD")

        Returns:
            The stored record with its new id
        """
        resume_id = uuid.uuid4().hex
        timestamp = now_exact()
        name = name or f"Resume {today()}"

        self.conn.execute(
            "INSERT INTO resumes (id, owner_id, name, data, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (resume_id, owner_id, name, _dump(document), timestamp, timestamp),
        )
        self.conn.commit()

        log_record_change("created", resume_id, owner_id)
        log_event("resume_created", source="authoring", resume_id=resume_id, owner_id=owner_id)

        return self.get(resume_id)

    def get(self, resume_id: str) -> StoredResume:
        """
        Fetch one record.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        row = self.conn.execute("SELECT * FROM resumes WHERE id = ?", (resume_id,)).fetchone()
        if row is None:
            raise RecordNotFoundError(resume_id)
        return _to_record(row)

    def update(
        self,
        resume_id: str,
        document: Optional[ResumeDocument] = None,
        name: Optional[str] = None,
    ) -> StoredResume:
        """
        Replace the snapshot and/or rename a record.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        current = self.get(resume_id)
        new_document = document if document is not None else current.document
        new_name = name if name is not None else current.name

        self.conn.execute(
            "UPDATE resumes SET data = ?, name = ?, updated_at = ? WHERE id = ?",
            (_dump(new_document), new_name, now_exact(), resume_id),
        )
        self.conn.commit()

        log_record_change("updated", resume_id)
        return self.get(resume_id)

    def delete(self, resume_id: str) -> None:
        """
        Delete a record.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        cursor = self.conn.execute("DELETE FROM resumes WHERE id = ?", (resume_id,))
        self.conn.commit()
        if cursor.rowcount == 0:
            raise RecordNotFoundError(resume_id)

        log_record_change("deleted", resume_id)

    def list(self, owner_id: str) -> List[StoredResume]:
        """All records of an owner, most recently updated first."""
        rows = self.conn.execute(
            "SELECT * FROM resumes WHERE owner_id = ? ORDER BY updated_at DESC",
            (owner_id,),
        ).fetchall()
        return [_to_record(row) for row in rows]

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "ResumeStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def _dump(document: ResumeDocument) -> str:
    return json.dumps(document.to_dict(), ensure_ascii=False)


def _to_record(row: sqlite3.Row) -> StoredResume:
    return StoredResume(
        id=row["id"],
        owner_id=row["owner_id"],
        name=row["name"],
        document=ResumeDocument.from_dict(json.loads(row["data"])),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
