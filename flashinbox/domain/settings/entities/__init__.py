from .app_setting import AppSetting

__all__ = ["AppSetting"]
