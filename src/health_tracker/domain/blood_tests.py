"""Domain models for blood-test results."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID

BLOOD_MARKERS: tuple[str, ...] = (
    "glucose",
    "hba1c",
    "totalCholesterol",
    "hdlCholesterol",
    "ldlCholesterol",
    "triglycerides",
    "hemoglobin",
    "ferritin",
    "vitaminD",
    "vitaminB12",
    "creatinine",
    "tsh",
)


class BloodTestSource(StrEnum):
    """How a blood-test record was entered."""

    MANUAL = "manual"
    LAB_REPORT = "lab_report"


@dataclass(frozen=True)
class BloodTestRecord:
    """Blood marker values measured on one day."""

    user_id: UUID
    taken_on: date
    values: dict[str, float]
    source: BloodTestSource
