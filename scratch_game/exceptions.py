from scratch_game.error_codes import ErrorCodes

class AppException(Exception):
    def __init__(self, error_code, status_message, exit_code=1, details=None):
        super().__init__(status_message)
        self.error_code = error_code
        self.status_message = status_message
        self.exit_code = exit_code
        self.details = details if details is not None else {}

    def to_dict(self):
        return {
            "error_code": self.error_code,
            "status_message": self.status_message,
            "details": self.details,
        }

class ValidationException(AppException):
    def __init__(self, status_message="Validation failed", details=None, error_code=ErrorCodes.VALIDATION_ERROR):
        super().__init__(
            error_code=error_code,
            status_message=status_message,
            exit_code=2,
            details=details
        )

class ConfigurationException(AppException):
    def __init__(self, status_message="Invalid game configuration", details=None):
        super().__init__(
            error_code=ErrorCodes.GAME_CONFIG_ERROR,
            status_message=status_message,
            exit_code=1,
            details=details
        )

class ConfigNotFoundException(AppException):
    def __init__(self, status_message="Game configuration not found", details=None):
        super().__init__(
            error_code=ErrorCodes.CONFIG_NOT_FOUND,
            status_message=status_message,
            exit_code=1,
            details=details
        )

class GameLogicException(AppException):
    def __init__(self, status_message="Game logic error", details=None):
        super().__init__(
            error_code=ErrorCodes.GAME_LOGIC_ERROR,
            status_message=status_message,
            exit_code=1,
            details=details
        )
