"""
Project constants definitions
"""

# ============================================================
# Remote Command
# ============================================================

REMOTE_PROGRAM = "cec-ctl"
ECHO_OFF_PREFIX = "stty -echo; "
INTERRUPT_BYTE = b"\x03"

# ============================================================
# Configuration Discovery
# ============================================================

CONFIG_FILE_NAME = "cec-ssh_config.json"
SEARCH_PATH_ENV = "PATH"
ENV_PREFIX = "CEC_SSH_"

# ============================================================
# Default Values
# ============================================================

DEFAULT_SSH_PORT = 22
DEFAULT_LOG_LEVEL = "WARNING"

# ============================================================
# Pseudo-terminal
# ============================================================

TERMINAL_TYPE = "xterm"
TERMINAL_COLUMNS = 80
TERMINAL_ROWS = 24
TERMINAL_WIDTH_PIXELS = 800
TERMINAL_HEIGHT_PIXELS = 600

# ============================================================
# Session Timings (seconds)
# ============================================================

SETTLE_DELAY = 0.3
DRAIN_POLL_INTERVAL = 0.05
DRAIN_EMPTY_POLLS = 2
DRAIN_CHUNK_SIZE = 2048
READ_CHUNK_SIZE = 1024
READ_TIMEOUT = 0.2
LIVENESS_INTERVAL = 0.2
GRACE_PERIOD = 2.0

# ============================================================
# Exit Codes
# ============================================================

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_CONFIG_FLAG_MISSING_VALUE = 2
EXIT_EXPLICIT_CONFIG_NOT_FOUND = 3
EXIT_CONFIG_NOT_FOUND = 4
EXIT_CONFIG_UNREADABLE = 5
EXIT_CONNECT_FAILED = 6
EXIT_SHELL_OPEN_FAILED = 7
EXIT_DISPATCH_FAILED = 8
EXIT_SETTINGS_INVALID = 9
