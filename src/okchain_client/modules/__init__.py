"""
Module clients of the OKChain client.

Each client wraps one chain module and shares the owning client's BaseClient.
"""

from .auth import AuthClient
from .backend import BackendClient
from .base import ModuleClient
from .dex import DexClient
from .order import OrderClient
from .staking import StakingClient
from .token import TokenClient

__all__ = [
    "ModuleClient",
    "AuthClient",
    "BackendClient",
    "DexClient",
    "OrderClient",
    "StakingClient",
    "TokenClient",
]
