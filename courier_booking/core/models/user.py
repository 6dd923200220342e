"""
Acting account context.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AccountContext(BaseModel):
    """Account and tenant of the user driving the wizard."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    user_id: Optional[str] = None
    tenant_id: Optional[str] = None
    email: Optional[str] = None
