"""
Main API router.
"""

from fastapi import APIRouter
from subscout.api import accounts, transactions, sync, imports, subscriptions

api_router = APIRouter()

api_router.include_router(accounts.router)
api_router.include_router(transactions.router)
api_router.include_router(sync.router)
api_router.include_router(imports.router)
api_router.include_router(subscriptions.router)
