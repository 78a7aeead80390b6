"""
Configuration module for the application.
All configuration values are read from environment variables,
after python-dotenv has merged the local .env file.
"""
import os
import secrets
import warnings


def _env_bool(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Flask Configuration
        self.SECRET_KEY: str = os.getenv("SECRET_KEY", "")
        self.FLASK_ENV: str = os.getenv("FLASK_ENV", "")

        # Generate a development SECRET_KEY if not set and in development mode
        if not self.SECRET_KEY and self.FLASK_ENV != "production":
            self.SECRET_KEY = secrets.token_urlsafe(32)
            warnings.warn(
                "SECRET_KEY not set. Generated a temporary key for development. "
                "Set SECRET_KEY in your .env file for production!",
                UserWarning
            )

        # Database Configuration
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "")
        self.DB_USER: str = os.getenv("DB_USER", "")
        self.DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
        self.DB_HOST: str = os.getenv("DB_HOST", "")
        self.DB_PORT: str = os.getenv("DB_PORT", "3306")
        self.DB_NAME: str = os.getenv("DB_NAME", "")
        self.SQLITE_PATH: str = os.getenv("SQLITE_PATH", "quizportal.db")

        # API Configuration
        self.API_PREFIX: str = os.getenv("API_PREFIX", "/api")
        self.AUTH_API_PREFIX: str = os.getenv("AUTH_API_PREFIX", "/api/auth")

        # User Type Validation
        valid_user_types = os.getenv("VALID_USER_TYPES", "student,teacher")
        self.VALID_USER_TYPES: list[str] = [t.strip() for t in valid_user_types.split(",") if t.strip()]
        self.DEFAULT_USER_TYPE: str = os.getenv("DEFAULT_USER_TYPE", "student")

        # Password Validation
        min_pass_len = os.getenv("MIN_PASSWORD_LENGTH", "")
        self.MIN_PASSWORD_LENGTH: int = int(min_pass_len) if min_pass_len else 6

        # Session Configuration
        self.SESSION_COOKIE_SECURE: bool = _env_bool("SESSION_COOKIE_SECURE")
        self.SESSION_COOKIE_HTTPONLY: bool = _env_bool("SESSION_COOKIE_HTTPONLY", "true")
        self.SESSION_COOKIE_SAMESITE: str = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")

        # SQLAlchemy Configuration
        self.SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
        self.SQLALCHEMY_ECHO: bool = _env_bool("SQLALCHEMY_ECHO")

        # Demo accounts
        self.SEED_DEMO_USERS: bool = _env_bool("SEED_DEMO_USERS")

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct database URI from environment variables."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST and self.DB_NAME:
            return (
                f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
            )
        return f"sqlite:///{os.path.abspath(self.SQLITE_PATH)}"

    def validate(self) -> None:
        """
        Validate required configuration values.
        Only enforces SECRET_KEY in production environment.
        """
        if not self.SECRET_KEY:
            if self.FLASK_ENV == "production":
                raise ValueError(
                    "SECRET_KEY environment variable is required in production. "
                    "Set it in your .env file or environment variables."
                )
        if self.DEFAULT_USER_TYPE not in self.VALID_USER_TYPES:
            raise ValueError(
                f"DEFAULT_USER_TYPE '{self.DEFAULT_USER_TYPE}' is not one of "
                f"VALID_USER_TYPES ({', '.join(self.VALID_USER_TYPES)})"
            )


# Global config instance - will be re-initialized after load_dotenv()
config = Config()
