"""Domain models for transfer records."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class Deposit:
    """Fresh capital added to an asset."""

    category: str
    source: str
    name: str
    amount: Decimal


@dataclass(frozen=True)
class Withdraw:
    """Capital taken out of an asset."""

    category: str
    source: str
    name: str
    amount: Decimal


@dataclass(frozen=True)
class Move:
    """Capital moved between two assets; neutral at portfolio level."""

    from_category: str
    from_source: str
    from_name: str
    to_category: str
    to_source: str
    to_name: str
    amount: Decimal


Transfer = Union[Deposit, Withdraw, Move]


@dataclass(frozen=True)
class TransferBatch:
    """Transfers read from one transfer file.

    Attributes:
        date: Date from the file metadata, or the month id as fallback.
        transfers: Transfers in file order.
    """

    date: str
    transfers: tuple[Transfer, ...] = field(default_factory=tuple)


__all__ = ["Deposit", "Withdraw", "Move", "Transfer", "TransferBatch"]
