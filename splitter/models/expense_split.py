from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from splitter.db.session import Base


class ExpenseSplit(Base):
    __tablename__ = "expense_splits"

    id = Column(Integer, primary_key=True, index=True)
    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    # NULL until a user with this name registers
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    # display cache of the participant's name, kept in sync on rename
    username = Column(String, nullable=False, index=True)
    share = Column(Numeric(10, 2), nullable=False)

    expense = relationship("Expense", back_populates="splits")
