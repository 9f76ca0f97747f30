class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class SchedulerError(AppError):
    """Raised when the scheduler is given invalid inputs or is used in an invalid state."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class ReportWriteError(AppError):
    """Raised when a schedule report cannot be written to its destination."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not write report to {path}: {reason}", status_code=500, details={"path": path})

class ConfigurationError(AppError):
    """Raised when system configuration is invalid."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
