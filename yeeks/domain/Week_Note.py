"""WeekNote domain entity: free-text note attached to a week number of a year."""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WeekNote:
    def __init__(self, content: str = "", last_modified: Optional[datetime] = None):
        self.content = content
        self.last_modified = last_modified or utc_now()

    @property
    def has_content(self) -> bool:
        '''Whether the week is visibly marked; an empty note is stored but not shown.'''
        return bool(self.content)

    def __eq__(self, other):
        if not isinstance(other, WeekNote):
            return NotImplemented
        return self.content == other.content and self.last_modified == other.last_modified

    def __repr__(self) -> str:
        return f"WeekNote({self.content!r}, {self.last_modified.isoformat()})"

    @staticmethod
    def from_dict(data):
        '''Creates a WeekNote from its persisted form. Raises ValueError on a malformed record.'''
        if not isinstance(data, dict):
            raise ValueError(f"note record must be an object, got {type(data).__name__}")
        content = data.get("content")
        stamp = data.get("lastModified")
        if not isinstance(content, str) or not isinstance(stamp, str):
            raise ValueError("note record needs string 'content' and 'lastModified'")
        last_modified = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
        if last_modified.tzinfo is None:
            last_modified = last_modified.replace(tzinfo=timezone.utc)
        return WeekNote(content, last_modified)

    def to_dict(self):
        '''Converts the note to its persisted form (ISO-8601 timestamp, microsecond precision).'''
        return {
            "content": self.content,
            "lastModified": self.last_modified.isoformat(),
        }
