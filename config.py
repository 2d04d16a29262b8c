"""
Local configuration defaults for the Binance client.

Keep real credentials out of version control: leave the placeholders below
empty and export BINANCE_API_KEY / BINANCE_API_SECRET instead. Environment
variables always take precedence over the values in this module.
"""

BINANCE_BASE_URL = "https://api.binance.com"

# Placeholder credentials (public endpoints work without them).
BINANCE_API_KEY = ""
BINANCE_API_SECRET = ""

# HTTP timeout (seconds) handed to the transport.
BINANCE_TIMEOUT = 10.0

# Default recvWindow (milliseconds) sent with new orders.
BINANCE_RECV_WINDOW = 60000
