import logging
import os
import sys

from bookstore.rules.models import Rules

logger = logging.getLogger(__name__)


def missing_env(rules: Rules) -> list[str]:
    return [name for name in rules.ops.required_env if not os.environ.get(name)]


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.
    Exits the process when a required environment variable is missing.
    """
    missing = missing_env(rules)
    if missing:
        print(
            f"CRITICAL: Missing required environment variables: {', '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)

    logger.info(f"Configuration validated (backend: {rules.api.base_url})")
