"""Sample environment file creation for first-time setup."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_TEMPLATE = """# plaidbridge configuration
# Fill in your credentials; never commit this file to version control

# Plaid API Configuration
# Get these from https://dashboard.plaid.com/team/keys
PLAID_CLIENT_ID=your_plaid_client_id_here
PLAID_SECRET=your_plaid_secret_here
PLAID_ENV=sandbox

# Access token of a linked item, used by `plaidbridge export transactions`
# and to seed the server (obtain one via /api/exchange_public_token)
# ACCESS_TOKEN=access-sandbox-xxx

# Export overrides
# PLAIDBRIDGE_EXPORT__START_DATE=2022-01-01
# PLAIDBRIDGE_EXPORT__END_DATE=2024-12-31
# PLAIDBRIDGE_EXPORT__OUTPUT_PATH=transactions.csv

# Server overrides
# PLAIDBRIDGE_SERVER__PORT=3003

# Logging
LOG_LEVEL=INFO
LOG_TO_FILE=true
LOG_FILE_PATH=logs/plaidbridge.log
# One line per HTTP request when serving
LOG_ACCESS=false
"""


def setup_sample_environment(env_file: Path = Path(".env")) -> bool:
    """Write a sample environment file unless one already exists.

    Args:
        env_file: Where to write the template

    Returns:
        bool: True if the file was created
    """
    if env_file.exists():
        logger.info(f"{env_file} already exists - leaving it untouched")
        return False

    env_file.parent.mkdir(parents=True, exist_ok=True)
    env_file.write_text(ENV_TEMPLATE, encoding="utf-8")

    logger.info(f"Created environment template at {env_file}")
    logger.warning(f"IMPORTANT: Fill in your actual credentials in {env_file}")
    return True
