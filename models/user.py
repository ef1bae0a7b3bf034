from dataclasses import dataclass, asdict


@dataclass
class User:
    id: str
    username: str
    email: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "User":
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            username=data.get("username", ""),
            email=data.get("email", ""),
        )

    def to_json(self) -> dict:
        return asdict(self)
