"""
Project constants definitions
"""

# ============================================================
# Connection Defaults
# ============================================================

DEFAULT_SSH_HOST = "snips.sh"
DEFAULT_SSH_PORT = 22
DEFAULT_SSH_USER = "ubuntu"

# ============================================================
# Key Generation
# ============================================================

RSA_KEY_BITS = 4096
PUBLIC_KEY_COMMENT = "snips"
PRIVATE_KEY_MODE = 0o600
PUBLIC_KEY_MODE = 0o644

# ============================================================
# Remote Commands
# ============================================================

UPLOAD_VERB = ""
PRIVATE_FLAG = "-private"
SIGN_VERB = "sign"
SIGN_TTL = "5m"
SIGN_USER_PREFIX = "f:"

# ============================================================
# Configuration
# ============================================================

SSH_CONFIG_PATH = "~/.ssh/config"
ENV_PREFIX = "SNIPS_"
