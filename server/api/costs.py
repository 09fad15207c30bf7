# server/api/costs.py

import logging
from datetime import date as date_type
from decimal import Decimal

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from api.auth import get_current_api_user
from core.errors import MissingField
from core.security import UserIdentity
from core.store import add_cost, list_costs
from core.utils import read_payload
from database import get_db


logger = logging.getLogger(__name__)

router = APIRouter()


class CostOut(BaseModel):
    """
    A cost row as returned to its owner.
    """
    model_config = ConfigDict(from_attributes=True)

    cost_id: int
    user_id: int
    amount: Decimal
    date: date_type
    category: str


@router.post("/costs")
def create_cost(
    user: UserIdentity = Depends(get_current_api_user),
    payload: dict = Depends(read_payload),
    db: Session = Depends(get_db),
):
    try:
        add_cost(db, user.id, payload.get("amount"), payload.get("date"), payload.get("category"))
        return {"message": "Cost added successfully"}
    except MissingField as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": e.message})
    except Exception:
        logger.exception("Error adding cost for user %s", user.id)
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


@router.get("/costs", response_model=list[CostOut])
def get_costs(user: UserIdentity = Depends(get_current_api_user), db: Session = Depends(get_db)):
    try:
        return [CostOut.model_validate(cost) for cost in list_costs(db, user.id)]
    except Exception:
        logger.exception("Error fetching costs for user %s", user.id)
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})
