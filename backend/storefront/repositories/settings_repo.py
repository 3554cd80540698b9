from typing import Optional

from sqlalchemy.orm import Session

from storefront.models.store_settings import StoreSettings


class SettingsRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self) -> Optional[StoreSettings]:
        return self.db.query(StoreSettings).order_by(StoreSettings.id).first()
