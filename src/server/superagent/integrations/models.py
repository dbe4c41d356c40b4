from pydantic import BaseModel
from typing import Optional

class ConnectionRequest(BaseModel):
    action: Optional[str] = None
    platform: Optional[str] = None
    connectionId: Optional[str] = None
    user_id: Optional[str] = None
