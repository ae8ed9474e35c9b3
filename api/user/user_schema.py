from pydantic import BaseModel
from typing import List


class UserMe(BaseModel):
    id: int
    name: str
    roles: List[str]
