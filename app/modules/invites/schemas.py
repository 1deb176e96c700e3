from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class InviteCodeResponse(BaseModel):
    code: str
    expires_at: datetime


class UseInviteRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=32)


class PartnerSummary(BaseModel):
    id: str
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    avatar: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class PartnerResponse(BaseModel):
    couple_id: str = Field(..., alias="coupleId")
    partner: PartnerSummary

    model_config = ConfigDict(populate_by_name=True)


class PairingResponse(PartnerResponse):
    message: str
