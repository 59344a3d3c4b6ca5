# ==============================================
# Inconsistency Reporting
# ==============================================
#
# PURPOSE:
#   Out-of-band signals for the cases where the structured store and
#   the blob store have drifted apart but the operation itself has
#   either succeeded or already raised a more important error.
#
# WHY THIS MODULE EXISTS:
#   These conditions can't be raised: a delete whose blob cleanup
#   failed has still deleted the document, and a failed compensation
#   during put must not hide the blob error that caused it. They are
#   handed to a handler instead (logged by default) so operators can
#   repair the pair.
#
# ENUM: InconsistencyKind
# -----------------------
#   - COMPENSATION_FAILURE → put's blob write failed AND the undo of the
#                            structured write failed; item points at a
#                            blob that does not exist
#   - BLOB_DELETE_FAILED   → structured delete succeeded, blob cleanup
#                            failed; blob is orphaned
#   - PARTIAL_UPDATE       → one side of an update transition failed
#                            while the other applied or was still running
#
# DATA CLASS: Inconsistency
# -------------------------
#   - kind: InconsistencyKind
#   - path: str
#   - error: BaseException
#   - detail: str
#
# FUNCTION:
# ---------
# - log_inconsistency(inconsistency) -> None
#     Default handler. Logs at ERROR with the traceback of the cause.
#
# ==============================================

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class InconsistencyKind(Enum):
    COMPENSATION_FAILURE = "compensation_failure"
    BLOB_DELETE_FAILED = "blob_delete_failed"
    PARTIAL_UPDATE = "partial_update"


@dataclass
class Inconsistency:
    kind: InconsistencyKind
    path: str
    error: BaseException
    detail: str = ""

    def describe(self) -> str:
        text = f"{self.kind.value} for '{self.path}': {self.error!r}"
        if self.detail:
            text = f"{text} ({self.detail})"
        return text


InconsistencyHandler = Callable[[Inconsistency], None]


def log_inconsistency(inconsistency: Inconsistency) -> None:
    logger.error(
        "Structured/blob stores out of sync: %s",
        inconsistency.describe(),
        exc_info=(type(inconsistency.error), inconsistency.error, inconsistency.error.__traceback__),
    )
