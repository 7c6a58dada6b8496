"""API routes for application settings."""

from fastapi import APIRouter, Depends, status

from flashinbox.application.settings.use_cases.app_setting_use_case import AppSettingUseCase
from flashinbox.infrastructure.common.di import inject_use_case
from flashinbox.infrastructure.common.errors import unwrap_or_raise
from flashinbox.infrastructure.settings.schemas import (
    SettingDeleteResponse,
    SettingResponse,
    SettingUpdateRequest,
)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/{key}", response_model=SettingResponse, status_code=status.HTTP_200_OK)
def get_setting(
    key: str,
    use_case: AppSettingUseCase = Depends(inject_use_case(lambda c: c.app_setting_use_case)),
) -> SettingResponse:
    setting = unwrap_or_raise(use_case.get_setting(key))
    return SettingResponse(key=setting.key, value=setting.value)


@router.put("/{key}", response_model=SettingResponse, status_code=status.HTTP_200_OK)
def set_setting(
    key: str,
    request: SettingUpdateRequest,
    use_case: AppSettingUseCase = Depends(inject_use_case(lambda c: c.app_setting_use_case)),
) -> SettingResponse:
    setting = unwrap_or_raise(use_case.set_setting(key, request.value))
    return SettingResponse(key=setting.key, value=setting.value)


@router.delete("/{key}", response_model=SettingDeleteResponse, status_code=status.HTTP_200_OK)
def delete_setting(
    key: str,
    use_case: AppSettingUseCase = Depends(inject_use_case(lambda c: c.app_setting_use_case)),
) -> SettingDeleteResponse:
    unwrap_or_raise(use_case.delete_setting(key))
    return SettingDeleteResponse(success=True, message=f"Setting '{key}' deleted")
