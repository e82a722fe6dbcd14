from dataclasses import dataclass
from datetime import datetime

@dataclass
class User:
    id: int | None
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
