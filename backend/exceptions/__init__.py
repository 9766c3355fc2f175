from typing import Optional, Dict, Any


class FactCheckException(Exception):
    """Base error. `message` and `details` are diagnostics for the log; clients only see `user_message`."""
    status_code: int = 500
    user_message: str = "An unexpected error occurred while processing your request."

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class InvalidInput(FactCheckException):
    status_code = 400

    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Validation failed for {field}: {reason}",
            {"field": field, "reason": reason}
        )
        self.user_message = reason


class AuthenticationRequired(FactCheckException):
    status_code = 401
    user_message = "Not authorized: no user identity was provided."

    def __init__(self, header: str):
        super().__init__(f"Missing identity header {header}", {"header": header})


class NotFound(FactCheckException):
    status_code = 404
    user_message = "History item not found."

    def __init__(self, record_id: str):
        super().__init__(f"Analysis {record_id} not found", {"id": record_id})
        self.record_id = record_id


class ProviderException(FactCheckException):
    status_code = 502
    user_message = "The AI service failed to analyze this claim. Please try again."


class ProviderConfigurationError(ProviderException):
    status_code = 503
    user_message = "AI service is not configured. Check server configuration."

    def __init__(self, reason: str):
        super().__init__(f"LLM provider misconfigured: {reason}", {"reason": reason})


class ProviderUnavailableError(ProviderException):
    user_message = "Error calling the AI service. Check API key and quota, then try again."

    def __init__(self, reason: str, upstream_status: Optional[int] = None, busy: bool = False):
        super().__init__(
            f"LLM service error: {reason}",
            {"reason": reason, "upstream_status": upstream_status}
        )
        self.status_code = 503 if busy else 502


class EmptyProviderResponse(ProviderException):
    user_message = "The AI model returned an empty response. Please try again or rephrase your claim."

    def __init__(self, reason: str = "no text in reply"):
        super().__init__(f"LLM returned an empty response: {reason}", {"reason": reason})


class ResponseFormatException(ProviderException):
    user_message = "There was an issue processing the AI's response format."

    def __init__(self, reason: str, raw_text: str):
        super().__init__(reason, {"reason": reason, "raw_text": raw_text})
        self.raw_text = raw_text


class MalformedResponse(ResponseFormatException):
    pass


class IncompleteResponse(ResponseFormatException):
    pass


class PersistenceError(FactCheckException):
    status_code = 500
    user_message = "Error accessing analysis history."

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"History store {operation} failed: {reason}",
            {"operation": operation, "reason": reason}
        )
