# server/core/store.py

from datetime import date as date_type
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import DuplicateUsername, MissingField
from models.user import User
from models.cost import Cost

# DECIMAL(10,2) holds at most 8 integer digits
MAX_AMOUNT = Decimal("1e8")


# -------------------------------
# Credential Store
# -------------------------------

def create_user(db: Session, username: str, password_hash: str) -> int:
    """
    Inserts a new user row and returns its generated id.
    Raises DuplicateUsername when the unique constraint rejects the name.
    """
    user = User(username=username, password=password_hash)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateUsername(username) from e
    return user.user_id


def find_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


# -------------------------------
# Cost Ledger
# -------------------------------

def add_cost(db: Session, user_id: int, amount, date, category) -> Cost:
    """
    Records a cost owned by ``user_id``.

    Any falsy amount, date or category counts as missing. Beyond what the
    DECIMAL(10,2) column can hold, values are taken as given: no sign or
    category checks.
    """
    if not amount or not date or not category:
        raise MissingField()

    value = Decimal(str(amount))
    if not value.is_finite() or abs(value) >= MAX_AMOUNT:
        raise ValueError(f"Amount out of range for DECIMAL(10,2): {amount}")

    cost = Cost(
        user_id=user_id,
        amount=value,
        date=date if isinstance(date, date_type) else date_type.fromisoformat(str(date)),
        category=str(category),
    )
    db.add(cost)
    db.commit()
    return cost


def list_costs(db: Session, user_id: int) -> list[Cost]:
    return (
        db.query(Cost)
        .filter(Cost.user_id == user_id)
        .order_by(Cost.cost_id.asc())
        .all()
    )
