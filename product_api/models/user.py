"""
Identity model for the authenticated caller
"""

from pydantic import BaseModel, ConfigDict


class Identity(BaseModel):
    """The caller resolved from the request credential, valid for one request"""

    model_config = ConfigDict(frozen=True)

    id: str
    is_admin: bool = False
