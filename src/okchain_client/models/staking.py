"""
Staking-related models for OKChain client.

Immutable data structures for validators, delegators and undelegations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class Description:
    """Validator description."""
    moniker: str = ""
    identity: str = ""
    website: str = ""
    details: str = ""


@dataclass(frozen=True)
class Validator:
    """Validator record as stored by the staking module."""
    operator_address: str
    cons_pub_key: str
    jailed: bool
    status: int  # 0 unbonded, 1 unbonding, 2 bonded
    delegator_shares: Decimal
    description: Description
    unbonding_height: int
    unbonding_completion_time: datetime
    min_self_delegation: Decimal


@dataclass(frozen=True)
class Delegator:
    """Delegator record as stored by the staking module."""
    delegator_address: str
    validator_addresses: List[str]
    shares: Decimal
    tokens: Decimal
    is_proxy: bool
    total_delegated_tokens: Decimal
    proxy_address: str


@dataclass(frozen=True)
class Undelegation:
    """Tokens an address is unbonding."""
    delegator_address: str
    quantity: Decimal
    completion_time: datetime


@dataclass(frozen=True)
class DelegatorResponse:
    """Delegator info merged with its pending undelegation."""
    delegator_address: str
    validator_addresses: List[str] = field(default_factory=list)
    shares: Decimal = Decimal("0")
    tokens: Decimal = Decimal("0")
    unbonded_tokens: Decimal = Decimal("0")
    completion_time: datetime = datetime(1970, 1, 1, tzinfo=timezone.utc)
    is_proxy: bool = False
    total_delegated_tokens: Decimal = Decimal("0")
    proxy_address: str = ""
