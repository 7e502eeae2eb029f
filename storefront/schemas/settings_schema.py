# storefront/schemas/settings_schema.py
"""
Pydantic schemas for site settings (home hero, flash sale) and uploads.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, field_validator

from storefront.schemas.base import CamelModel


class HomeSettings(CamelModel):
    """Hero section of the home page."""
    hero_video_url: str = ""
    hero_heading: str = ""
    hero_subtitle: str = ""

    model_config = ConfigDict(extra="allow")


class FlashSaleSettings(CamelModel):
    """Global flash sale switch and its end time."""
    is_active: bool = False
    end_time: Optional[datetime] = None

    @field_validator("is_active", mode="before")
    @classmethod
    def _null_flag(cls, value):
        return False if value is None else value

    @field_validator("end_time", mode="before")
    @classmethod
    def _empty_time(cls, value):
        return value or None

    def is_running(self, now: Optional[datetime] = None) -> bool:
        """Active and not past its end time."""
        from storefront.flash_sale import time_left

        if not self.is_active:
            return False
        if self.end_time is None:
            return True
        return not time_left(self.end_time, now=now).expired


class UploadedImage(CamelModel):
    """Image stored by POST /api/upload."""
    url: str
    public_id: Optional[str] = None
