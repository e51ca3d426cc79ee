"""Validation of a proposed expense before it is stored.

``validate_expense`` is a pure function: it never touches the database and
raises one of the 400-class domain errors when the input cannot be stored.
"""
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List, Sequence

from splitter.core.errors import InvalidInput, NoValidSplits, ShareMismatch

CENTS = Decimal("0.01")
SHARE_TOLERANCE = CENTS
# amounts and shares are stored as Numeric(10, 2)
MAX_AMOUNT = Decimal("100000000")


@dataclass(frozen=True)
class ValidSplit:
    username: str
    share: Decimal


@dataclass(frozen=True)
class ValidatedExpense:
    description: str
    amount: Decimal
    splits: List[ValidSplit]

    @property
    def total_shares(self) -> Decimal:
        return sum((s.share for s in self.splits), Decimal("0"))


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a share
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return math.isfinite(value)


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def _to_cents(value) -> Decimal:
    """Round a finite number to cents; InvalidInput if the column cannot hold it."""
    d = Decimal(str(value))
    if abs(d) >= MAX_AMOUNT:
        raise InvalidInput("Amount is too large")
    d = qround(d)
    if abs(d) >= MAX_AMOUNT:
        raise InvalidInput("Amount is too large")
    return d


def filter_valid_splits(split_between: Sequence) -> List[ValidSplit]:
    """Keep splits that name a participant and carry a share that is positive once rounded to cents."""
    valid = []
    for split in split_between:
        username = getattr(split, "username", None)
        share = getattr(split, "share", None)

        if not isinstance(username, str) or not username.strip():
            continue
        if not _is_number(share) or share <= 0:
            continue

        cents = _to_cents(share)
        if cents <= 0:
            continue

        valid.append(ValidSplit(username=username.strip(), share=cents))
    return valid


def validate_expense(description, amount, split_between) -> ValidatedExpense:
    if not isinstance(description, str) or not description.strip():
        raise InvalidInput()

    if not _is_number(amount) or amount <= 0:
        raise InvalidInput()

    amount = _to_cents(amount)
    if amount <= 0:
        raise InvalidInput()

    if split_between is None or isinstance(split_between, (str, bytes)):
        raise InvalidInput()

    splits = filter_valid_splits(split_between)
    if not splits:
        raise NoValidSplits()

    expense = ValidatedExpense(
        description=description.strip(),
        amount=amount,
        splits=splits,
    )

    if abs(expense.total_shares - expense.amount) > SHARE_TOLERANCE:
        raise ShareMismatch()

    return expense
