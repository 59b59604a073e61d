# expense_tracker/models/expense.py
import enum
from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Boolean, Enum, Date
from sqlalchemy.orm import relationship
from expense_tracker.core.database import Base
from .category import ExpenseCategory
from .mixins import TimestampMixin

class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    DIGITAL_WALLET = "DIGITAL_WALLET"
    CHECK = "CHECK"
    OTHER = "OTHER"

class RecurringFrequency(str, enum.Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"

class Expense(TimestampMixin, Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(String(length=255), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    expense_date = Column(Date, nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("credentials.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("expense_categories.id"), nullable=False, index=True)
    notes = Column(String(length=500), nullable=True)
    payment_method = Column(
        Enum(PaymentMethod, name="payment_method"), default=PaymentMethod.CASH, nullable=False
    )
    receipt_url = Column(String(length=500), nullable=True)
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurring_frequency = Column(Enum(RecurringFrequency, name="recurring_frequency"), nullable=True)

    # Always rendered together with the expense
    category = relationship(ExpenseCategory, lazy="joined")

    def __repr__(self):
        return f"<Expense description={self.description} amount={self.amount} owner_id={self.owner_id}>"
