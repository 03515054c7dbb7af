"""
Market Overview Example

This example demonstrates:
- Fetching tickers for every product
- Reading the depth book of one product
- Listing the most recent matches

Set OKCHAIN_NODE_URI (or add it to .env) to point at a node. No keys required.
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import okchain_client
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from okchain_client import OKChainClient


async def display_market(product: str = "btc-000_okt"):
    """Fetch and display market data for a product."""
    async with OKChainClient.from_env() as client:
        tickers = await client.backend.query_tickers("", 20)

        print("=" * 70)
        print(f"📈 Tickers ({len(tickers)})")
        print("=" * 70)
        for ticker in tickers:
            print(f"   {ticker.product:<20} price {ticker.price:>16}  volume {ticker.volume:>16}")

        book = await client.order.query_depth_book(product, 5)
        print(f"\n📊 {product} depth book")
        for level in reversed(book.asks):
            print(f"   ASK {level.price:>16} x {level.quantity}")
        for level in book.bids:
            print(f"   BID {level.price:>16} x {level.quantity}")

        matches = await client.backend.query_recent_tx_record(product, 0, 0, 1, 10)
        print(f"\n💱 Recent matches on {product}")
        for match in matches:
            print(f"   height {match.block_height:<10} {match.quantity} @ {match.price}")


if __name__ == "__main__":
    product = sys.argv[1] if len(sys.argv) > 1 else "btc-000_okt"
    asyncio.run(display_market(product))
