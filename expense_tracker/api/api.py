from fastapi import APIRouter

from expense_tracker.api.routes import auth, categories, expenses, health, persons

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(categories.router)
api_router.include_router(expenses.router)
api_router.include_router(persons.router)

# Mounted at the application root, outside /api
root_router = APIRouter()
root_router.include_router(health.router)
