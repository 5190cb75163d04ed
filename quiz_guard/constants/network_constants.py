"""Network configuration constants for the quiz application."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
DEFAULT_SERVER_URL: str = "http://127.0.0.1:8000"
TEACHER_TOKEN_HEADER: str = "X-Teacher-Token"
