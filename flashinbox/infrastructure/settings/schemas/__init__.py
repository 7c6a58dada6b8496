from flashinbox.infrastructure.settings.schemas.setting_schemas import (
    SettingDeleteResponse,
    SettingResponse,
    SettingUpdateRequest,
)

__all__ = ["SettingDeleteResponse", "SettingResponse", "SettingUpdateRequest"]
