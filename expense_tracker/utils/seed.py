# expense_tracker/utils/seed.py
"""
Demo data for a fresh database.

Each group (login accounts, categories, person records) is only seeded when
its table is empty, so running this against a populated database is a no-op.
"""
import logging
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.security import get_password_hash
from expense_tracker.crud import category as category_crud
from expense_tracker.crud import credential as credential_crud
from expense_tracker.crud import person as person_crud
from expense_tracker.models.credential import Role

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS: List[Dict] = [
    {"username": "admin", "email": "admin@example.com", "password": "admin123", "role": Role.ADMIN},
    {"username": "user", "email": "user@example.com", "password": "user123", "role": Role.USER},
]

DEFAULT_CATEGORIES: List[Dict] = [
    {"name": "Food & Dining", "description": "Restaurants, groceries, and food delivery", "color": "#FF6B6B", "icon": "fas fa-utensils"},
    {"name": "Transportation", "description": "Gas, public transport, rideshare, parking", "color": "#4ECDC4", "icon": "fas fa-car"},
    {"name": "Shopping", "description": "Clothing, electronics, and general shopping", "color": "#45B7D1", "icon": "fas fa-shopping-bag"},
    {"name": "Entertainment", "description": "Movies, games, subscriptions, and fun activities", "color": "#96CEB4", "icon": "fas fa-gamepad"},
    {"name": "Utilities", "description": "Electricity, water, internet, phone bills", "color": "#FFEAA7", "icon": "fas fa-bolt"},
    {"name": "Healthcare", "description": "Medical expenses, pharmacy, insurance", "color": "#DDA0DD", "icon": "fas fa-heartbeat"},
    {"name": "Education", "description": "Books, courses, tuition, and learning materials", "color": "#98D8C8", "icon": "fas fa-graduation-cap"},
    {"name": "Travel", "description": "Flights, hotels, vacation expenses", "color": "#F7DC6F", "icon": "fas fa-plane"},
    {"name": "Other", "description": "Miscellaneous expenses", "color": "#BDC3C7", "icon": "fas fa-question-circle"},
]

DEFAULT_PERSONS: List[Dict] = [
    {"first_name": "John", "last_name": "Doe", "email": "john.doe@example.com", "phone_number": "1234567890"},
    {"first_name": "Jane", "last_name": "Smith", "email": "jane.smith@example.com", "phone_number": "0987654321"},
    {"first_name": "Bob", "last_name": "Johnson", "email": "bob.johnson@example.com", "phone_number": "5555555555"},
    {"first_name": "Alice", "last_name": "Brown", "email": "alice.brown@example.com", "phone_number": "1111111111"},
    {"first_name": "Charlie", "last_name": "Wilson", "email": "charlie.wilson@example.com", "phone_number": "2222222222"},
]


async def seed_demo_data(db: AsyncSession) -> Dict[str, int]:
    """Returns how many rows were created per group."""
    created = {"accounts": 0, "categories": 0, "persons": 0}

    if await credential_crud.count_credentials(db) == 0:
        for account in DEFAULT_ACCOUNTS:
            await credential_crud.create_credential(
                username=account["username"],
                email=account["email"],
                hashed_password=get_password_hash(account["password"]),
                role=account["role"],
                db=db,
            )
            created["accounts"] += 1

    if await category_crud.count_categories(db) == 0:
        for category in DEFAULT_CATEGORIES:
            await category_crud.create_category(dict(category, is_active=True), db)
            created["categories"] += 1

    if await person_crud.count_persons(db) == 0:
        for person in DEFAULT_PERSONS:
            await person_crud.create_person(dict(person), db)
            created["persons"] += 1

    logger.info(f"Seeded demo data: {created}")
    return created
