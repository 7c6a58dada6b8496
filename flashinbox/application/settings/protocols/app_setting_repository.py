"""Protocol for AppSetting repository."""

from typing import Protocol

from flashinbox.domain.settings.entities import AppSetting


class AppSettingRepositoryProtocol(Protocol):
    def find_by_key(self, key: str) -> AppSetting | None:
        """Find a setting by key, None if it was never stored."""
        ...

    def save(self, setting: AppSetting) -> AppSetting:
        """Insert or replace a setting."""
        ...

    def delete(self, key: str) -> bool:
        """Delete a setting; True if it existed."""
        ...
