"""
Constants for the OKChain client.
"""

# Node Configuration
DEFAULT_NODE_URI = "http://localhost:26657"
DEFAULT_CHAIN_ID = "okchain"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_MAX_RETRIES = 0

# Transaction Configuration
DEFAULT_FEES = "0.01okt"
DEFAULT_GAS = 200000

# Address Prefixes
ACC_ADDRESS_PREFIX = "okchain"
VAL_ADDRESS_PREFIX = "okchainvaloper"
ADDRESS_LENGTH = 20

# Query Defaults
DEFAULT_BOOK_SIZE = 200
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 50
DEFAULT_TICKERS_COUNT = 10
MAX_CANDLES_SIZE = 1000
CANDLE_GRANULARITIES = (60, 180, 300, 900, 1800, 3600, 7200, 14400, 21600, 43200, 86400, 604800)

# Order Sides
SIDE_BUY = "BUY"
SIDE_SELL = "SELL"

# Store Names
STAKING_STORE = "staking"

# Staking Store Key Prefixes
VALIDATORS_KEY = bytes([0x21])
DELEGATOR_KEY = bytes([0x52])

# Query Paths
CANDLES_PATH = "custom/backend/candles"
TICKERS_PATH = "custom/backend/tickers"
DEALS_PATH = "custom/backend/deals"
OPEN_ORDERS_PATH = "custom/backend/orders/open"
CLOSED_ORDERS_PATH = "custom/backend/orders/closed"
RECENT_TX_RECORD_PATH = "custom/backend/matches"
TRANSACTIONS_PATH = "custom/backend/txs"
UNBOND_DELEGATION_PATH = "custom/staking/unbondingDelegation"
PRODUCTS_PATH = "custom/dex/products"
ACCOUNT_TOKENS_PATH = "custom/token/accounts"
DEPTH_BOOK_PATH = "custom/order/depthbook"
ACCOUNT_PATH = "custom/acc/account"

# Message Types
MSG_TRANSFER = "okchain/token/MsgTransfer"
MSG_MULTI_TRANSFER = "okchain/token/MsgMultiTransfer"
MSG_NEW_ORDER = "okchain/order/MsgNew"
MSG_CANCEL_ORDER = "okchain/order/MsgCancel"
MSG_DELEGATE = "okchain/staking/MsgDelegate"
MSG_UNDELEGATE = "okchain/staking/MsgUndelegate"
MSG_ADD_SHARES = "okchain/staking/MsgAddShares"

# Status Codes
SUCCESS_CODE = 0
