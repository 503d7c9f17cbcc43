class TableStateError(Exception):
    """Base exception for all table_state errors"""
    pass

class ConfigError(TableStateError):
    """Unreadable or malformed global.json / table config file"""
    pass

class UnknownFormatterError(ConfigError):
    """A column config names a formatter that is not registered"""
    pass
