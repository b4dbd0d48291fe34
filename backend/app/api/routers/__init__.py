from fastapi import APIRouter

from app.api.routers import auth, bank_accounts, cards, money_transfers, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(bank_accounts.router)
api_router.include_router(cards.router)
api_router.include_router(money_transfers.router)
api_router.include_router(users.router)
