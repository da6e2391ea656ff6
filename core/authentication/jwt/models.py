from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DecodedToken(BaseModel):
    """Claims of a verified access token"""

    model_config = ConfigDict(extra="allow")

    sub: str = Field(..., description="Subject (user id or reserved admin id)")
    exp: int = Field(..., description="Expiration time")
    iat: Optional[int] = Field(None, description="Issued at")
    role: Optional[str] = Field(None, description="Role claim, synthetic admin only")
    username: Optional[str] = Field(None, description="Username claim, synthetic admin only")
