# storefront/backend/services/settings_service.py
"""
Site settings for the development backend (home hero and flash sale).
"""

from storefront.schemas.settings_schema import FlashSaleSettings, HomeSettings


class SettingsService:
    def __init__(self):
        self.home = HomeSettings(
            hero_video_url="https://cdn.seekon.local/video/hero.mp4",
            hero_heading="STEP INTO THE FUTURE",
            hero_subtitle="New season sneakers and apparel",
        )
        self.flash_sale = FlashSaleSettings()

    def update_home(self, home: HomeSettings) -> HomeSettings:
        self.home = home
        return self.home

    def update_flash_sale(self, flash_sale: FlashSaleSettings) -> FlashSaleSettings:
        self.flash_sale = flash_sale
        return self.flash_sale
