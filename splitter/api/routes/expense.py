from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from splitter.db.session import get_db
from splitter.schemas.expense import ExpenseCreate, ExpenseOut
from splitter.services.expense_validation import validate_expense
from splitter.services.expense_services import (
    create_expense, get_expense_by_id, get_expenses_for_user, is_participant, serialize_expense,
)
from splitter.core.dependencies import get_current_user
from splitter.core.config import settings
from splitter.core.errors import NotFound

router = APIRouter()


@router.post("", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
async def add_expense(
    data: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    current_user = Depends(get_current_user),
):
    validated = validate_expense(data.description, data.amount, data.split_between)
    expense = await create_expense(db, validated, payer=current_user)
    return serialize_expense(expense, current_user.name)


@router.get("", response_model=List[ExpenseOut])
async def my_expenses(
    db: AsyncSession = Depends(get_db),
    current_user = Depends(get_current_user),
):
    rows = await get_expenses_for_user(db, current_user.id, current_user.name)
    return [serialize_expense(expense, payer_name) for expense, payer_name in rows]


@router.get("/{expense_id}", response_model=ExpenseOut)
async def fetch(
    expense_id: int,
    db: AsyncSession = Depends(get_db),
    current_user = Depends(get_current_user),
):
    expense, payer_name = await get_expense_by_id(db, expense_id)

    if settings.EXPENSE_READ_SCOPE == "participants" and not is_participant(expense, current_user):
        raise NotFound("Expense not found")

    return serialize_expense(expense, payer_name)
