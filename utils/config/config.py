import os
from tools.logger.custom_logging import custom_log

LOGGING_SWITCH = False

# Configuration priority: Files > Environment > Default
# Secrets/settings files are plain text, one value per file.

SECRET_FILE_DIRS = [
    "/run/secrets",      # Kubernetes / Docker secrets
    "/app/secrets",      # Container local secrets
    "./secrets",         # Relative path fallback
]


def read_secret_file(secret_name: str) -> str:
    """Read a setting from the secret file locations (returns None if not found)."""
    for directory in SECRET_FILE_DIRS:
        path = os.path.join(directory, secret_name)
        try:
            with open(path, 'r') as f:
                content = f.read().strip()
                if content:  # Only return non-empty content
                    custom_log(f"✅ Found secret '{secret_name}' in {path}", isOn=LOGGING_SWITCH)
                    return content
        except OSError:
            continue

    return None


def get_file_first_config_value(file_name: str, env_name: str, default_value: str = ""):
    """
    Get configuration value with priority: Files > Environment > Default

    Args:
        file_name: Secret file name
        env_name: Environment variable name
        default_value: Default value if all sources fail
    """
    # 1. Try secret files first
    file_value = read_secret_file(file_name)
    if file_value is not None:
        custom_log(f"✅ Config '{file_name}' retrieved from secret file", isOn=LOGGING_SWITCH)
        return file_value

    # 2. Try environment variable
    env_value = os.getenv(env_name)
    if env_value is not None:
        custom_log(f"✅ Config '{env_name}' retrieved from environment", isOn=LOGGING_SWITCH)
        return env_value

    # 3. Return default value
    return default_value


def get_bool_config_value(file_name: str, env_name: str, default_value: str = "false") -> bool:
    return str(get_file_first_config_value(file_name, env_name, default_value)).lower() in ("true", "1", "yes")


class Config:
    # Debug mode
    DEBUG = get_bool_config_value("flask_debug", "FLASK_DEBUG", "False")

    # Application Identity Configuration
    APP_NAME = get_file_first_config_value("app_name", "APP_NAME", "uno_room_server")
    APP_VERSION = get_file_first_config_value("app_version", "APP_VERSION", "1.0.0")

    # Server binding
    HOST = get_file_first_config_value("host", "HOST", "0.0.0.0")
    PORT = int(get_file_first_config_value("port", "PORT", "8080"))

    # WebSocket Configuration
    WS_ALLOWED_ORIGINS = get_file_first_config_value("ws_allowed_origins", "WS_ALLOWED_ORIGINS", "*").split(",")
    WS_MAX_PAYLOAD_SIZE = int(get_file_first_config_value("ws_max_payload_size", "WS_MAX_PAYLOAD_SIZE", "65536"))  # 64KB default
    WS_PING_TIMEOUT = int(get_file_first_config_value("ws_ping_timeout", "WS_PING_TIMEOUT", "60"))  # 60 seconds
    WS_PING_INTERVAL = int(get_file_first_config_value("ws_ping_interval", "WS_PING_INTERVAL", "25"))  # 25 seconds

    # Game Configuration
    # Off: trust the client (turn order and card matching are not checked)
    UNO_ENFORCE_RULES = get_bool_config_value("uno_enforce_rules", "UNO_ENFORCE_RULES", "false")
    UNO_RULES_PATH = get_file_first_config_value("uno_rules_path", "UNO_RULES_PATH", "")
    ROOM_CODE_MAX_ATTEMPTS = int(get_file_first_config_value("room_code_max_attempts", "ROOM_CODE_MAX_ATTEMPTS", "20"))

    @classmethod
    def refresh(cls):
        """Re-read every setting (used after secrets are mounted or env changes)."""
        cls.DEBUG = get_bool_config_value("flask_debug", "FLASK_DEBUG", "False")
        cls.APP_NAME = get_file_first_config_value("app_name", "APP_NAME", "uno_room_server")
        cls.APP_VERSION = get_file_first_config_value("app_version", "APP_VERSION", "1.0.0")
        cls.HOST = get_file_first_config_value("host", "HOST", "0.0.0.0")
        cls.PORT = int(get_file_first_config_value("port", "PORT", "8080"))
        cls.WS_ALLOWED_ORIGINS = get_file_first_config_value("ws_allowed_origins", "WS_ALLOWED_ORIGINS", "*").split(",")
        cls.WS_MAX_PAYLOAD_SIZE = int(get_file_first_config_value("ws_max_payload_size", "WS_MAX_PAYLOAD_SIZE", "65536"))
        cls.WS_PING_TIMEOUT = int(get_file_first_config_value("ws_ping_timeout", "WS_PING_TIMEOUT", "60"))
        cls.WS_PING_INTERVAL = int(get_file_first_config_value("ws_ping_interval", "WS_PING_INTERVAL", "25"))
        cls.UNO_ENFORCE_RULES = get_bool_config_value("uno_enforce_rules", "UNO_ENFORCE_RULES", "false")
        cls.UNO_RULES_PATH = get_file_first_config_value("uno_rules_path", "UNO_RULES_PATH", "")
        cls.ROOM_CODE_MAX_ATTEMPTS = int(get_file_first_config_value("room_code_max_attempts", "ROOM_CODE_MAX_ATTEMPTS", "20"))
        custom_log("Configuration refreshed", isOn=LOGGING_SWITCH)
