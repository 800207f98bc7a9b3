"""Models for lab-report extraction results."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class LabReportValues(BaseModel):
    """Blood marker values read from a report; unreadable markers stay None."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    glucose: float | None = Field(default=None, ge=0)
    hba1c: float | None = Field(default=None, ge=0, alias="hba1c")
    total_cholesterol: float | None = Field(default=None, ge=0)
    hdl_cholesterol: float | None = Field(default=None, ge=0)
    ldl_cholesterol: float | None = Field(default=None, ge=0)
    triglycerides: float | None = Field(default=None, ge=0)
    hemoglobin: float | None = Field(default=None, ge=0)
    ferritin: float | None = Field(default=None, ge=0)
    vitamin_d: float | None = Field(default=None, ge=0)
    vitamin_b12: float | None = Field(default=None, ge=0)
    creatinine: float | None = Field(default=None, ge=0)
    tsh: float | None = Field(default=None, ge=0)


class LabReportExtract(BaseModel):
    """Structured output for lab-report extraction."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    report_date: date | None = None
    values: LabReportValues

    @field_validator("report_date", mode="before")
    @classmethod
    def _lenient_date(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                return None
        return value

    def marker_values(self) -> dict[str, float]:
        """Return only the markers that were read, keyed by wire name."""
        dumped = self.values.model_dump(by_alias=True, exclude_none=True)
        return {key: float(value) for key, value in dumped.items()}
