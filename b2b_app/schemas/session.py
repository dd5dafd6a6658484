from typing import Optional

from pydantic import BaseModel


class SessionTokenData(BaseModel):
    shop: Optional[str] = None
    user_id: Optional[str] = None
