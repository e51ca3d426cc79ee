import logging
from datetime import timezone
from sqlalchemy import select, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from splitter.models.expense import Expense
from splitter.models.expense_split import ExpenseSplit
from splitter.models.user import User
from splitter.services.expense_validation import ValidatedExpense
from splitter.core.errors import NotFound

logger = logging.getLogger(__name__)

UNKNOWN_PAYER = "Unknown"
# ids are stored as signed 64-bit integers
MAX_ID = 2**63 - 1


async def create_expense(db: AsyncSession, data: ValidatedExpense, payer: User):
    names = {s.username for s in data.splits}
    res = await db.execute(select(User.name, User.id).where(User.name.in_(list(names))))
    user_ids = {name: uid for name, uid in res.all()}

    expense = Expense(
        paid_by=payer.id,
        amount=data.amount,
        description=data.description,
    )
    expense.splits = [
        ExpenseSplit(
            position=i,
            user_id=user_ids.get(s.username),
            username=s.username,
            share=s.share,
        )
        for i, s in enumerate(data.splits)
    ]

    db.add(expense)
    await db.commit()

    logger.info(
        "User %s created expense %s (%s split %d ways)",
        payer.id, expense.id, expense.amount, len(expense.splits),
    )
    return expense


def _with_payer_name():
    return (
        select(Expense, User.name.label("payer_name"))
        .outerjoin(User, User.id == Expense.paid_by)
        .options(selectinload(Expense.splits))
    )


async def get_expense_by_id(db: AsyncSession, expense_id: int):
    """Return ``(expense, payer_name)`` or raise NotFound."""
    if not 0 < expense_id <= MAX_ID:
        raise NotFound("Expense not found")

    res = await db.execute(_with_payer_name().where(Expense.id == expense_id))
    row = res.first()

    if not row:
        raise NotFound("Expense not found")

    return row.Expense, row.payer_name or UNKNOWN_PAYER


async def get_expenses_for_user(db: AsyncSession, user_id: int, user_name: str):
    """Expenses the user paid or is split into, once each, in insertion order."""
    participant_of = select(ExpenseSplit.expense_id).where(
        or_(
            ExpenseSplit.user_id == user_id,
            and_(ExpenseSplit.user_id.is_(None), ExpenseSplit.username == user_name),
        )
    )

    q = (
        _with_payer_name()
        .where(or_(Expense.paid_by == user_id, Expense.id.in_(participant_of)))
        .order_by(Expense.id)
    )

    res = await db.execute(q)
    return [(row.Expense, row.payer_name or UNKNOWN_PAYER) for row in res.all()]


def is_participant(expense: Expense, user: User) -> bool:
    if expense.paid_by == user.id:
        return True
    return any(
        s.user_id == user.id or (s.user_id is None and s.username == user.name)
        for s in expense.splits
    )


def serialize_expense(expense: Expense, payer_name: str) -> dict:
    created_at = expense.created_at
    if created_at is not None and created_at.tzinfo is None:
        # sqlite hands timestamps back without their zone; they are stored as UTC
        created_at = created_at.replace(tzinfo=timezone.utc)

    return {
        "id": expense.id,
        "description": expense.description,
        "amount": float(expense.amount),
        "paid_by": payer_name,
        "split_between": [
            {"username": s.username, "share": float(s.share)}
            for s in expense.splits
        ],
        "created_at": created_at,
    }
