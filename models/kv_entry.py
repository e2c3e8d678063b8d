# models/kv_entry.py

from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime, timezone

from core.database import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    # Fixed storage key, e.g. LZRYEK_EPILEPSY_PATIENTS
    key = Column(String, primary_key=True)

    # Serialized payload (the whole patient collection as JSON)
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self):
        return f"<KeyValueEntry {self.key} ({len(self.value or '')} chars)>"
