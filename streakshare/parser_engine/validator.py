import json
import os
from functools import lru_cache
from typing import Dict, Any, Tuple

from jsonschema import validate, ValidationError

# Path: streakshare/parser_engine/schemas/
SCHEMA_DIR = os.path.join(
    os.path.dirname(__file__),
    "schemas"
)

GAME_RESULT_SCHEMA = "game_result.json"


@lru_cache(maxsize=None)
def load_schema(filename: str = GAME_RESULT_SCHEMA) -> Dict[str, Any]:
    """
    Load a JSON schema file shipped with the package.
    """
    path = os.path.join(SCHEMA_DIR, filename)

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_record(record: Dict[str, Any]) -> Tuple[bool, str]:
    """
    Validate an assembled record (GameResult.to_dict()) against the schema.

    Returns:
        (True, "") if valid
        (False, "<error message>") if invalid
    """
    try:
        validate(instance=record, schema=load_schema())
        return True, ""
    except ValidationError as e:
        return False, e.message
    except (OSError, json.JSONDecodeError) as e:
        return False, f"Schema load error: {e}"
