from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MemberRecord:
    id: str  # e.g. "4821", from ".../members/mem-4821"
    name: str
    source_url: str
    area: str  # governorate
    terms: list[str] = field(default_factory=list)  # session short names, e.g. "9"
    electoral_districts: list[str] = field(default_factory=list)
    chambers: list[str] = field(default_factory=list)  # "house of representatives" | ...

    def to_row(self) -> dict:
        """Serialize with the sink's column names (``source`` not ``source_url``)."""
        return {
            "id": self.id,
            "name": self.name,
            "source": self.source_url,
            "area": self.area,
            "terms": list(self.terms),
            "electoral_districts": list(self.electoral_districts),
            "chambers": list(self.chambers),
        }

    @classmethod
    def from_row(cls, row: dict) -> MemberRecord:
        return cls(
            id=row["id"],
            name=row["name"],
            source_url=row.get("source", ""),
            area=row.get("area", ""),
            terms=row.get("terms", []),
            electoral_districts=row.get("electoral_districts", []),
            chambers=row.get("chambers", []),
        )
