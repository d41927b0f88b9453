"""
Expense Models for Anthaathi

One line item in the farmer's local ledger.

DESIGN DECISION: Categories are a closed set rather than free text,
so totals per category stay meaningful and labels can be translated.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


TITLE_MAX_LENGTH = 200


class ExpenseCategory(str, Enum):
    """Farm spending categories."""
    SEEDS = "seeds"
    FERTILIZER = "fertilizer"
    LABOUR = "labour"
    EQUIPMENT = "equipment"
    TRANSPORT = "transport"
    OTHER = "other"


class Expense(BaseModel):
    """
    A single ledger entry.

    Entries are never edited: they are appended or deleted.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        default_factory=lambda: uuid4().hex,
        description="Unique expense ID"
    )
    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="What the money was spent on"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount in INR"
    )
    category: ExpenseCategory = Field(
        default=ExpenseCategory.SEEDS,
        description="Spending category"
    )
    date: dt.date = Field(
        default_factory=dt.date.today,
        description="Day the entry was recorded"
    )
