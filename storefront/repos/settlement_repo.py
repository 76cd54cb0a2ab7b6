# storefront/repos/settlement_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.settlement import SettlementModel


class SettlementRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_settlement(self, settlement: SettlementModel) -> SettlementModel:
        # bez commit - zapis wchodzi do transakcji checkoutu
        self.db.add(settlement)
        self.db.flush()
        return settlement

    def list_for_user(self, user_id: int) -> list[SettlementModel]:
        return list(
            self.db.execute(
                select(SettlementModel)
                .where(SettlementModel.user_id == user_id)
                .order_by(SettlementModel.id)
            ).scalars()
        )
