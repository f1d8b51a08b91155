"""
Record Status

Verification stage shared by companies, people and projects.

Any status can be set from any other; the order below is only the usual
progression a record goes through.
"""
import enum
from typing import Optional


class RecordStatus(str, enum.Enum):
    DRAFT = "Draft"
    AI_GENERATED = "AI-Generated"
    PURELY_VERIFIED = "Purely Verified"
    CLIENT_VERIFIED = "Client Verified"

    @classmethod
    def coerce(cls, value: Optional[str]) -> "RecordStatus":
        """Map a stored or submitted value to a status, defaulting to Draft."""
        if value is None or value == "":
            return cls.DRAFT
        return cls(value)
