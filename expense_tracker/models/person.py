# expense_tracker/models/person.py
from sqlalchemy import Column, Integer, String
from expense_tracker.core.database import Base
from .mixins import TimestampMixin

class Person(TimestampMixin, Base):
    __tablename__ = "persons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(length=50), nullable=False)
    last_name = Column(String(length=50), nullable=False)
    email = Column(String(length=255), unique=True, index=True, nullable=False)
    phone_number = Column(String(length=20), nullable=True)

    def __repr__(self):
        return f"<Person name={self.first_name} {self.last_name} email={self.email}>"
