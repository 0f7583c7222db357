"""Error taxonomy for the seller report run. Every error aborts the run."""

from typing import Optional


class SalesReportError(RuntimeError):
    """Base error carrying a stable code plus an optional detail."""

    code = "SALES_REPORT_ERROR"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        message = f"{self.code}:{detail}" if detail else self.code
        super().__init__(message)


class InvalidInputError(SalesReportError):
    """A required input collection is missing, not a sequence, empty or malformed."""

    code = "INVALID_INPUT"


class MissingPolicyError(SalesReportError):
    """The revenue or bonus policy was not supplied."""

    code = "MISSING_POLICY"


class UnknownReferenceError(SalesReportError):
    """A purchase record points at a seller or sku that is not in the input."""

    code = "UNKNOWN_REFERENCE"

    def __init__(self, kind: str, reference_id, context: Optional[str] = None):
        self.kind = kind
        self.reference_id = reference_id
        detail = f"{kind} '{reference_id}' not found"
        if context:
            detail = f"{detail} ({context})"
        super().__init__(detail)
