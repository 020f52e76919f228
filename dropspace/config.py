import os

CONTRACT_NAME = 'dropspace'

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

PRIVATE_METHOD_PREFIX = '_'
EXECUTE_EXPORT = 'execute'
QUERY_EXPORT = 'query'

# Pagination
DEFAULT_LIMIT = 10
MAX_LIMIT = 1000

# Integer widths for checked arithmetic
U64_MAX = 2 ** 64 - 1
U128_MAX = 2 ** 128 - 1

# Funds
DENOM = 'unibi'

# Economics defaults applied at instantiate
DEFAULT_MINT_PER_TX = 1
DEFAULT_MINT_FEE = 0
DEFAULT_DEV_FEE = 0
DEFAULT_SUPPLY_LIMIT = 100000
DEFAULT_RESERVED_AMOUNT = 0
DEFAULT_SALE_TIME = 0

DEFAULT_TOKEN_ID_BASE = 'jarvis #'
DEFAULT_BASE_URI = 'https://ipfs.io/ipfs/bafybeigrytqzipxv4sekrofqfz4etp4f6c7a3bssi5oyerccmeksm4czku/'

# Block context used when the host does not supply one
DEFAULT_BLOCK_HEIGHT = 12345
DEFAULT_BLOCK_TIME = 1571797419
DEFAULT_CHAIN_ID = 'dropspace-testing'

# Principals
MIN_ADDRESS_LENGTH = 3
MAX_ADDRESS_LENGTH = 256

LOG_LEVEL = os.getenv('LOG_LEVEL', None)
LOG_FILE = os.getenv('LOG_FILE', None)
