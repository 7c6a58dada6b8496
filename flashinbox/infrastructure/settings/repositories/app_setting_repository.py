"""Repository for AppSetting entities."""

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashinbox.domain.settings.entities import AppSetting
from flashinbox.models import AppSetting as AppSettingORM


class AppSettingRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_key(self, key: str) -> AppSetting | None:
        orm_model = self.db.get(AppSettingORM, key)
        return AppSetting(key=orm_model.key, value=orm_model.value) if orm_model else None

    def save(self, setting: AppSetting) -> AppSetting:
        try:
            orm_model = self.db.get(AppSettingORM, setting.key)
            if orm_model is None:
                self.db.add(AppSettingORM(key=setting.key, value=setting.value))
            else:
                orm_model.value = setting.value
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return setting

    def delete(self, key: str) -> bool:
        try:
            result = self.db.execute(
                delete(AppSettingORM)
                .where(AppSettingORM.key == key)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return result.rowcount > 0
