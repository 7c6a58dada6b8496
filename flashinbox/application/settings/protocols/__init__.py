from .app_setting_repository import AppSettingRepositoryProtocol

__all__ = ["AppSettingRepositoryProtocol"]
