"""Item data model for dash-marked todo lists."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple


@dataclass(frozen=True)
class Time:
    """Hours and minutes exactly as written, without range checks."""
    hours: int
    minutes: int

    def to_dict(self) -> Dict[str, Any]:
        return {"hours": self.hours, "minutes": self.minutes}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Time':
        return cls(hours=data["hours"], minutes=data["minutes"])


@dataclass(frozen=True)
class DateTime:
    """Calendar date with an optional time of day.

    Values are the raw numeric components; month 13 is accepted.
    """
    year: int
    month: int
    day: int
    time: Optional[Time] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "time": self.time.to_dict() if self.time else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DateTime':
        time_data = data.get("time")
        return cls(
            year=data["year"],
            month=data["month"],
            day=data["day"],
            time=Time.from_dict(time_data) if time_data else None,
        )


@dataclass(frozen=True)
class Item:
    """A single todo/outline entry.

    ``todo`` is True for a ticked box, False for an empty box and None when
    the line has no box at all.
    """

    text: str
    todo: Optional[bool] = None
    time: Optional[DateTime] = None
    description: Optional[str] = None  # Body text, never ""
    children: Tuple['Item', ...] = field(default_factory=tuple)

    @property
    def completed(self) -> bool:
        """Check if the item carries a ticked box."""
        return self.todo is True

    @property
    def has_checkbox(self) -> bool:
        return self.todo is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Item to a plain dictionary."""
        return {
            "todo": self.todo,
            "title": self.text,
            "datetime": self.time.to_dict() if self.time else None,
            "body": self.description,
            "children": [child.to_dict() for child in self.children],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Item':
        """Create an Item from a dictionary produced by ``to_dict``."""
        time_data = data.get("datetime")
        return cls(
            text=data.get("title", ""),
            todo=data.get("todo"),
            time=DateTime.from_dict(time_data) if time_data else None,
            description=data.get("body") or None,
            children=tuple(cls.from_dict(c) for c in data.get("children", [])),
        )
