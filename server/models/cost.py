# server/models/cost.py

from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey
from . import Base


class Cost(Base):
    __tablename__ = "costs"

    cost_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False)
    category = Column(String(255), nullable=False)
