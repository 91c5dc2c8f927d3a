"""Plan file persistence for smartmsg.

Contains functions for reading and writing plan files:
- dumps_plan / loads_plan: Plan <-> JSON text
- save_plan / load_plan: Plan <-> JSON file
"""

import json
from pathlib import Path

from pydantic import ValidationError

from smartmsg.exceptions import SchemaError
from smartmsg.plan.models import Plan


def dumps_plan(plan: Plan) -> str:
    """Serialize a plan to indented JSON."""
    return plan.model_dump_json(indent=2)


def loads_plan(text: str) -> Plan:
    """Deserialize a plan from JSON text.

    Args:
        text: The JSON document.

    Returns:
        The validated Plan.

    Raises:
        SchemaError: If the text is not JSON, misses required fields, has
            wrongly typed fields or holds no items.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Plan is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise SchemaError("Plan must be a JSON object")

    try:
        return Plan.model_validate(data)
    except ValidationError as e:
        raise SchemaError(f"Plan does not match the expected schema:\n{e}")


def save_plan(plan: Plan, path: str | Path) -> Path:
    """Write a plan to disk, replacing any existing file.

    Args:
        plan: The plan to write.
        path: Destination file.

    Returns:
        The path written.
    """
    path = Path(path)
    path.write_text(dumps_plan(plan) + "\n")
    return path


def load_plan(path: str | Path) -> Plan:
    """Read and validate a plan file.

    Raises:
        SchemaError: If the file is missing, unreadable or malformed.
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise SchemaError(f"Cannot read plan file {path}: {e}")
    return loads_plan(text)
