"""Error taxonomy shared by services and the HTTP boundary.

Every error carries a user-facing ``message`` and the HTTP status the route
layer maps it to. ``detail`` is for logs only and never returned to clients.
"""


class AssistantError(Exception):
    status_code: int = 500
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None, *, detail: str | None = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AssistantError):
    """Missing or invalid input (no file, text too short, bad field)."""

    status_code = 400
    default_message = "Invalid request."


class NotAResumeError(AssistantError):
    status_code = 400
    default_message = (
        "This doesn't appear to be a resume. "
        "Please upload a valid resume or CV document."
    )


class ResumeMismatchError(AssistantError):
    """The relevance check judged the resume unrelated to the job."""

    status_code = 400

    def __init__(self, reason: str = ""):
        self.reason = reason.strip().rstrip(".")
        message = "Your resume doesn't match this job description."
        if self.reason:
            message += f" {self.reason}."
        message += " Please upload a relevant resume or change the job description."
        super().__init__(message)


class InappropriateContentError(AssistantError):
    status_code = 400
    default_message = (
        "This job description contains inappropriate or illegal content. "
        "Please provide a legitimate job description for a legal profession."
    )

    def __init__(self, message: str | None = None, *, term: str | None = None):
        self.term = term
        super().__init__(message, detail=f"blocked term: {term}" if term else None)


class ResponseFormatError(AssistantError):
    """Model output could not be parsed into the expected JSON shape."""

    status_code = 500
    default_message = "AI response format error. Please try again or simplify your inputs."


class UpstreamServiceError(AssistantError):
    status_code = 500
    default_message = "AI service error. Please check your API key and try again."


class ConfigurationError(AssistantError):
    status_code = 500
    default_message = "Service is not configured."


class SessionStateError(AssistantError):
    """An interview session operation was attempted out of order."""

    status_code = 409
    default_message = "That action isn't available at this point of the interview."
