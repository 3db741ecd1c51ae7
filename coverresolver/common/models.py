from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class GameItem:
    title: str
    system_name: str
    image_url: Optional[str] = None
    # Input object minus any stale imageUrl, in its original key order
    fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameItem":
        fields = {k: v for k, v in data.items() if k != "imageUrl"}
        return cls(title=data["title"], system_name=data["systemName"], fields=fields)

    def with_cover(self, image_url: Optional[str]) -> "GameItem":
        return GameItem(
            title=self.title,
            system_name=self.system_name,
            image_url=image_url or None,
            fields=dict(self.fields),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.fields)
        out["title"] = self.title
        out["systemName"] = self.system_name
        if self.image_url:
            out["imageUrl"] = self.image_url
        return out


@dataclass
class BatchResult:
    items: List[GameItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def covers_found(self) -> int:
        return sum(1 for item in self.items if item.image_url)

    @property
    def summary(self) -> str:
        return f"Found covers for {self.covers_found} out of {self.total} games."

    def to_list(self) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in self.items]
