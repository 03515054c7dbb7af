"""
Delegator Info Example

This example demonstrates:
- Listing validators from the staking store
- Reading delegation and unbonding info of an address

Usage: python examples/delegator_info.py okchain1...
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import okchain_client
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from okchain_client import OKChainClient


async def display_delegator(addr: str):
    """Fetch and display validators and the delegation of addr."""
    async with OKChainClient.from_env() as client:
        validators = await client.staking.query_validators()
        print(f"\n🏛  {len(validators)} validator(s)")
        for validator in validators:
            state = "jailed" if validator.jailed else f"status {validator.status}"
            print(f"   {validator.description.moniker:<20} {validator.operator_address} ({state})")

        delegator = await client.staking.query_delegator(addr)
        print(f"\n👤 {delegator.delegator_address}")
        print(f"   Tokens:      {delegator.tokens}")
        print(f"   Shares:      {delegator.shares}")
        print(f"   Unbonding:   {delegator.unbonded_tokens} (until {delegator.completion_time:%Y-%m-%d %H:%M:%S} UTC)")
        print(f"   Voted for:   {', '.join(delegator.validator_addresses) or '-'}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    asyncio.run(display_delegator(sys.argv[1]))
