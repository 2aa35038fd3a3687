"""Load command suites from YAML files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from tap_emit.sources.command.models import SuiteDefinition


async def load_suite_definition(suite_path: Path) -> SuiteDefinition:
    """Load and validate a command suite.

    Raises:
        FileNotFoundError: If the suite file does not exist
        ValueError: If the file is empty, not YAML, or fails validation

    """
    if not suite_path.is_file():
        raise FileNotFoundError(f"Test suite not found: {suite_path}")

    try:
        data = yaml.safe_load(suite_path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {suite_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty suite file: {suite_path}")

    try:
        return SuiteDefinition.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid suite definition schema in {suite_path}: {e}") from e
