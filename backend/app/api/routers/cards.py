from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.models.user import BankUser
from app.schemas.card import CardCreate, CardOut
from app.services.card import CardService
from app.services.models import CardCreateServiceModel, CardDetailsServiceModel

router = APIRouter(prefix="/cards", tags=["cards"])


def _to_out(row: CardDetailsServiceModel) -> CardOut:
    return CardOut(
        id=row.id,
        name=row.name,
        number=row.number,
        expiryDate=row.expiry_date,
        securityCode=row.security_code,
        accountId=row.account_id,
    )


@router.get("", response_model=list[CardOut])
def list_cards(
    db: Session = Depends(get_db),
    current_user: BankUser = Depends(get_current_user),
) -> list[CardOut]:
    return [_to_out(r) for r in CardService(db).get_cards_by_user_id(current_user.id)]


@router.post("", response_model=list[CardOut])
def create_card(
    payload: CardCreate,
    db: Session = Depends(get_db),
    current_user: BankUser = Depends(get_current_user),
) -> list[CardOut]:
    service = CardService(db)
    created = service.create(
        CardCreateServiceModel(name=payload.name, account_id=payload.accountId, user_id=current_user.id)
    )
    if not created:
        raise HTTPException(status_code=400, detail="Invalid accountId")

    return [_to_out(r) for r in service.get_cards_by_user_id(current_user.id)]


@router.delete("/{card_id}")
def delete_card(
    card_id: str,
    db: Session = Depends(get_db),
    current_user: BankUser = Depends(get_current_user),
) -> dict:
    service = CardService(db)
    card = service.get(card_id)
    if not card or card.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Card not found")

    service.delete(card_id)
    return {"ok": True}
