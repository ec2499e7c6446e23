"""Load and validate the bundled regulatory schedule tables.

Tables live in shiftpay/tax-rules/ as one YAML file per version:

    tax-rules/schedule1/2024-06-17.yaml
    tax-rules/schedule8/2024-07-01.yaml
    tax-rules/schedule8/2025-09-24.yaml

The file stem must equal the table's effective_from date. All tables are
validated when this module is imported; a table that fails validation raises
ScheduleValidationError immediately instead of producing wrong withholding
later. Loaded tables are frozen and shared read-only by every caller.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from ..errors import ScheduleValidationError
from .schemas import Schedule1Data, Schedule8Data

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class ScheduleTables:
    """All schedule versions, each tuple ordered by effective date."""

    schedule1: Tuple[Schedule1Data, ...]
    schedule8: Tuple[Schedule8Data, ...]


def get_tax_rules_dir() -> Path:
    """Get the bundled tax-rules directory path."""
    package_root = Path(__file__).parent.parent.parent  # taxes -> sdk -> shiftpay
    return package_root / "tax-rules"


def _read_yaml(path: Path) -> dict:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ScheduleValidationError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ScheduleValidationError(f"{path}: expected a mapping at top level")
    return data


def load_schedule_file(path: Path, model: Type[ModelT]) -> ModelT:
    """Load one schedule table and validate it against its schema.

    Raises:
        ScheduleValidationError: If the file is unreadable, fails schema
            validation, or its name does not match its effective_from date.
    """
    data = _read_yaml(path)
    try:
        record = model.model_validate(data)
    except ValidationError as e:
        raise ScheduleValidationError(f"{path}: {e}") from e

    effective = record.effective_from.isoformat()
    if path.stem != effective:
        raise ScheduleValidationError(
            f"{path}: file name must match effective_from ({effective})"
        )
    return record


def load_schedule_dir(directory: Path, model: Type[ModelT]) -> Tuple[ModelT, ...]:
    """Load every *.yaml table in a directory, ordered by effective date.

    Raises:
        ScheduleValidationError: If the directory holds no tables or any
            table is invalid.
    """
    paths = sorted(directory.glob("*.yaml"))
    if not paths:
        raise ScheduleValidationError(f"No schedule tables found in {directory}")

    records = [load_schedule_file(path, model) for path in paths]
    records.sort(key=lambda record: record.effective_from)
    logger.debug(
        f"Loaded {len(records)} {model.__name__} table(s): "
        f"{', '.join(record.effective_from.isoformat() for record in records)}"
    )
    return tuple(records)


def load_schedules(rules_dir: Optional[Path] = None) -> ScheduleTables:
    """Load Schedule 1 and Schedule 8 tables from rules_dir (default: bundled)."""
    rules_dir = rules_dir or get_tax_rules_dir()
    return ScheduleTables(
        schedule1=load_schedule_dir(rules_dir / "schedule1", Schedule1Data),
        schedule8=load_schedule_dir(rules_dir / "schedule8", Schedule8Data),
    )


SCHEDULES = load_schedules()
