import logging
from dataclasses import dataclass
from typing import Optional

from relief.api import ApiError

logger = logging.getLogger(__name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXPORT_FAILED = "Failed to download Excel file."


def export_filename(event_date: str) -> str:
    return f"household_assessments_{event_date}.xlsx"


@dataclass
class ExportFile:
    name: str
    content: Optional[bytes]
    mime: str = XLSX_MIME

    @property
    def released(self) -> bool:
        return self.content is None

    def release(self) -> None:
        """Drop the held bytes once the download has been handed to the browser."""
        self.content = None


def prepare_export(client, event_date: str):
    """Return (ExportFile, None) or (None, error message); never raises for backend failures."""
    try:
        content = client.export_today_assessments_excel()
    except ApiError:
        logger.exception("Excel export failed")
        return None, EXPORT_FAILED
    logger.info("Excel export ready (%d bytes)", len(content))
    return ExportFile(name=export_filename(event_date), content=content), None
