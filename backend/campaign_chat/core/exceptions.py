"""Custom exceptions for the application."""

from __future__ import annotations


class ChatError(Exception):
    """Base class for failures reported back to the chat client.

    ``message`` is the client-safe text; driver detail stays in the logs.
    """

    status_code = 500
    message = "An unexpected error occurred. Please try again."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRequestError(ChatError):
    """Raised when the request body is malformed or has no message."""

    status_code = 400
    message = "Invalid request format. Please send a valid JSON body with a message field."


class ConfigurationMissingError(ChatError):
    """Raised when required warehouse credentials are not configured."""

    message = "Missing Snowflake credentials. Please check your .env.local file."

    def __init__(self, missing: list[str] | None = None) -> None:
        self.missing = list(missing or [])
        super().__init__()


class DatabaseError(ChatError):
    """Raised when a warehouse operation fails."""

    pass


class ConnectionFailureError(DatabaseError):
    """Raised when a warehouse session cannot be established."""

    message = "Failed to connect to Snowflake. Please check your credentials and try again."


class ExecutionFailureError(DatabaseError):
    """Raised when the warehouse rejects or fails a statement."""

    message = "Query execution failed. Please try rephrasing your question."


class UnexpectedFailureError(ChatError):
    """Raised for any other failure inside the chat pipeline."""

    pass


NO_MESSAGE = "No message provided. Please include a message in your request."
