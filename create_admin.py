#!/usr/bin/env python3
"""
Standalone script to create an ADMIN account for the Expense Tracker API.
Registration through the API only ever creates USER accounts.
Usage: python create_admin.py
"""

import asyncio
import getpass
from expense_tracker.core.database import AsyncSessionLocal, engine
from expense_tracker.core.security import get_password_hash
from expense_tracker.crud import credential as credential_crud
from expense_tracker.models.credential import Role

async def create_admin():
    print("Creating admin account...")

    username = input("Enter admin username [admin]: ") or "admin"
    email = input("Enter admin email [admin@example.com]: ") or "admin@example.com"
    password = getpass.getpass("Enter admin password: ")
    if not password:
        print("A password is required.")
        return

    async with AsyncSessionLocal() as session:
        try:
            if await credential_crud.username_exists(username, session):
                print(f"User {username} already exists!")
                return
            if await credential_crud.email_exists(email, session):
                print(f"Email {email} is already registered!")
                return

            admin = await credential_crud.create_credential(
                username=username,
                email=email,
                hashed_password=get_password_hash(password),
                role=Role.ADMIN,
                db=session,
            )
            print("Admin created successfully!")
            print(f"Username: {admin.username}")
            print(f"Email: {admin.email}")
            print(f"ID: {admin.id}")
        finally:
            await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_admin())
