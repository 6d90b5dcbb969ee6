class ErrorCodes:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_BET = "INVALID_BET"
    GAME_CONFIG_ERROR = "GAME_CONFIG_ERROR"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    GAME_LOGIC_ERROR = "GAME_LOGIC_ERROR"
