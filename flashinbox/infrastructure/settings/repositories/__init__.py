from .app_setting_repository import AppSettingRepository

__all__ = ["AppSettingRepository"]
