import logging
from dataclasses import dataclass
from typing import Optional

from relief.api import ApiError, error_message, is_ok
from relief.draft import AssessmentDraft, new_draft
from relief.payload import to_backend_payload, validate_for_submission

logger = logging.getLogger(__name__)

SAVED = "Saved successfully."
SAVE_FAILED = "Failed to save. Please try again."
SAVE_UNREACHABLE = "Failed to save. Please check the backend and try again."


class SubmissionGuard:
    """Advisory busy flag: the form disables Submit while one save is outstanding."""

    def __init__(self):
        self.busy = False

    def claim(self) -> bool:
        """Mark a save as pending; False when one is already outstanding."""
        if self.busy:
            return False
        self.busy = True
        return True

    def __enter__(self):
        self.busy = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.busy = False
        return False


@dataclass
class SubmitOutcome:
    ok: bool
    message: str
    draft: AssessmentDraft
    sent: bool = False      # whether the backend was called


def submit_assessment(draft: AssessmentDraft, client, guard: Optional[SubmissionGuard] = None) -> SubmitOutcome:
    """
    Validate, send, and on "OK" hand back a fresh draft.
    Any failure hands back the same draft so the user can retry.
    """
    guard = guard or SubmissionGuard()
    with guard:
        err = validate_for_submission(draft)
        if err:
            return SubmitOutcome(ok=False, message=err, draft=draft)
        try:
            body = client.create_assessment(to_backend_payload(draft))
        except ApiError:
            logger.exception("Saving assessment failed")
            return SubmitOutcome(ok=False, message=SAVE_UNREACHABLE, draft=draft, sent=True)

    if is_ok(body):
        logger.info("Assessment saved")
        return SubmitOutcome(ok=True, message=SAVED, draft=new_draft(), sent=True)
    logger.warning("Backend rejected assessment: %s", body.get("code"))
    return SubmitOutcome(ok=False, message=error_message(body, SAVE_FAILED), draft=draft, sent=True)
