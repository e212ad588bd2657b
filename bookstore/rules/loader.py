import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from bookstore.rules.models import Rules

DEFAULT_RULES_PATH = "rules.yaml"

_YAML_FENCE = re.compile(r"^```yaml[^\n]*\n(.*?)^```", re.MULTILINE | re.DOTALL)


def yaml_body(content: str) -> str:
    """The first ```yaml block when the file is markdown, else the whole text."""
    match = _YAML_FENCE.search(content)
    return match.group(1) if match else content


def rules_path_from_env() -> Path:
    return Path(os.environ.get("BOOKSTORE_RULES_PATH", DEFAULT_RULES_PATH))


def load_rules(path: Path) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.

    BOOKSTORE_API_URL, when set, replaces api.base_url.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path, encoding="utf-8") as f:
        content = f.read()

    try:
        data = yaml.safe_load(yaml_body(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        rules = Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e

    api_url = os.environ.get("BOOKSTORE_API_URL")
    if api_url:
        rules.api.base_url = api_url

    return rules
