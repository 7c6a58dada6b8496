"""Use case for key/value application settings."""

import structlog

from flashinbox.application.common.result import returns_result
from flashinbox.application.settings.protocols import AppSettingRepositoryProtocol
from flashinbox.domain.common.exceptions import EntityNotFoundError
from flashinbox.domain.settings.entities import AppSetting

logger = structlog.get_logger(__name__)


class AppSettingUseCase:
    """Use case for reading and writing application settings."""

    def __init__(self, app_setting_repository: AppSettingRepositoryProtocol) -> None:
        self.app_setting_repository = app_setting_repository

    @returns_result
    def get_setting(self, key: str) -> AppSetting:
        """
        Get a stored setting.

        Raises:
            EntityNotFoundError: If the key was never stored
        """
        setting = self.app_setting_repository.find_by_key(key)
        if setting is None:
            raise EntityNotFoundError("Setting", key)
        return setting

    @returns_result
    def set_setting(self, key: str, value: str | None) -> AppSetting:
        """Store a value under key, replacing any previous value."""
        setting = self.app_setting_repository.save(AppSetting(key=key, value=value))
        logger.info("saved_setting", key=key)
        return setting

    @returns_result
    def delete_setting(self, key: str) -> None:
        """
        Remove a setting.

        Raises:
            EntityNotFoundError: If the key was never stored
        """
        if not self.app_setting_repository.delete(key):
            raise EntityNotFoundError("Setting", key)
        logger.info("deleted_setting", key=key)
