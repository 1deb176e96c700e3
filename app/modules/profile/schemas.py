from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from datetime import date, datetime


class ProfileUpdate(BaseModel):
    """Accepts the camelCase names the frontend sends as well as column names."""
    first_name: Optional[str] = Field(None, validation_alias=AliasChoices("firstName", "first_name"))
    last_name: Optional[str] = Field(None, validation_alias=AliasChoices("lastName", "last_name"))
    gender: Optional[str] = None
    avatar_url: Optional[str] = Field(None, validation_alias=AliasChoices("avatar_url", "avatarUrl"))
    date_of_birth: Optional[date] = Field(None, validation_alias=AliasChoices("date_of_birth", "dateOfBirth"))
    relationship_start_date: Optional[date] = Field(
        None, validation_alias=AliasChoices("relationship_start_date", "relationshipStartDate")
    )

    def to_columns(self) -> Dict[str, Any]:
        """Only truthy values are written; blanks never erase stored data."""
        return {k: v for k, v in self.model_dump(mode="json").items() if v}


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    gender: Optional[str] = None
    avatar: Optional[str] = None
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth")
    partner_id: Optional[str] = Field(None, alias="partnerId")
    couple_id: Optional[str] = Field(None, alias="coupleId")
    relationship_start_date: Optional[str] = Field(None, alias="relationshipStartDate")

    model_config = ConfigDict(populate_by_name=True)


class ProfileSaveResponse(BaseModel):
    message: str
    profile: Dict[str, Any]


class AvatarUploadResponse(BaseModel):
    message: str
    avatar_url: str = Field(..., alias="avatarUrl")

    model_config = ConfigDict(populate_by_name=True)
