"""Blood-test value extraction from photographed lab reports."""

from dataclasses import dataclass

from health_tracker.domain.blood_tests import BLOOD_MARKERS
from health_tracker.domain.lab_reports import LabReportExtract
from health_tracker.services.generative import GenerativeClient, to_data_url

_NULLABLE_NUMBER = {"anyOf": [{"type": "number", "minimum": 0}, {"type": "null"}]}

LAB_REPORT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "reportDate": {"anyOf": [{"type": "string"}, {"type": "null"}]},
        "values": {
            "type": "object",
            "properties": {marker: _NULLABLE_NUMBER for marker in BLOOD_MARKERS},
            "required": list(BLOOD_MARKERS),
            "additionalProperties": False,
        },
    },
    "required": ["reportDate", "values"],
    "additionalProperties": False,
}

_PROMPT = (
    "Read this blood-test lab report. For each listed marker, return the "
    "measured value converted to these units: glucose mg/dL, hba1c %, "
    "cholesterol and triglycerides mg/dL, hemoglobin g/dL, ferritin ng/mL, "
    "vitaminD ng/mL, vitaminB12 pg/mL, creatinine mg/dL, tsh mIU/L. "
    "Use null when a marker is not on the report. Return the collection date "
    "as YYYY-MM-DD if printed, otherwise null."
)


@dataclass
class LabReportService:
    """Prepares lab-report prompts and validates the structured result."""

    client: GenerativeClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def extract(self, image_bytes: bytes) -> LabReportExtract:
        """Extract blood marker values from a report image."""
        if not image_bytes:
            raise ValueError("Lab report image is empty")
        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=_PROMPT,
            schema=LAB_REPORT_SCHEMA,
            schema_name="lab_report",
            image_data_url=to_data_url(image_bytes),
        )
        return LabReportExtract.model_validate(raw)
