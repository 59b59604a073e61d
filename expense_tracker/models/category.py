# expense_tracker/models/category.py
from sqlalchemy import Column, Integer, String, Boolean
from expense_tracker.core.database import Base
from .mixins import TimestampMixin

class ExpenseCategory(TimestampMixin, Base):
    __tablename__ = "expense_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(length=50), unique=True, index=True, nullable=False)
    description = Column(String(length=255), nullable=True)
    color = Column(String(length=20), nullable=True)   # e.g. "#FF6B6B"
    icon = Column(String(length=50), nullable=True)    # e.g. "fas fa-utensils"
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<ExpenseCategory name={self.name} active={self.is_active}>"
