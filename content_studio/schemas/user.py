from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from content_studio.models.user import UserType


class UserSettings(BaseModel):
    email_notifications: bool = True
    new_features: bool = True
    tips: bool = True
    dark_theme: bool = False


class UserSettingsUpdate(BaseModel):
    email_notifications: Optional[bool] = None
    new_features: Optional[bool] = None
    tips: Optional[bool] = None
    dark_theme: Optional[bool] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=40)
    address: Optional[str] = Field(None, max_length=300)
    city: Optional[str] = Field(None, max_length=120)
    state: Optional[str] = Field(None, max_length=120)
    postal_code: Optional[str] = Field(None, max_length=20)
    document: Optional[str] = Field(None, max_length=40)
    birth_date: Optional[date] = None


class UserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    user_type: UserType
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    document: Optional[str] = None
    birth_date: Optional[date] = None
    settings: UserSettings = Field(default_factory=UserSettings)
    is_profile_complete: bool = False
    is_first_login: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SessionUser(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    user_type: UserType
    is_profile_complete: bool = False
    is_first_login: bool = False


class UserTypeUpdate(BaseModel):
    user_type: UserType
