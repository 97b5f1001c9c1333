from typing import Dict

from pydantic import BaseModel

from content_studio.models.user import UserType


class UsageCounters(BaseModel):
    scripts_used: int
    titles_used: int
    images_used: int
    audios_used: int


class RemainingUsage(BaseModel):
    remaining_scripts: int
    remaining_titles: int
    remaining_images: int
    remaining_audios: int


class PlanLimits(BaseModel):
    max_scripts_per_month: int
    max_titles_per_month: int
    max_images_per_month: int
    max_audios_per_month: int
    max_script_length: int
    has_access_to_images: bool
    has_access_to_audio: bool
    has_access_to_complete_package: bool


class UsageResponse(BaseModel):
    user_type: UserType
    month: int
    year: int
    limits: PlanLimits
    used: UsageCounters
    usage: RemainingUsage


class PlanCatalogResponse(BaseModel):
    plans: Dict[str, PlanLimits]
