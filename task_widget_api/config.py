import datetime
import logging
import os
import sys
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, ValidationError, ConfigDict
from pydantic_settings import BaseSettings

from .constants import NOISY_LOGGERS, SUPPORTED_JWT_ALGORITHMS

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_ignore_empty=False,
        case_sensitive=False  # Make env vars case-insensitive
    )

    logging_level: str = "INFO"
    timezone: str = "UTC"

    host: str = "0.0.0.0"
    port: int = 8080

    # Bearer token verification
    jwt_secret: str | None = Field(default=None, validate_default=True)
    jwt_algorithm: str = "HS256"
    jwt_issuer: str | None = None
    jwt_audience: str | None = None

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, v):
        if v is None or str(v).strip() == "":
            raise ValueError("jwt_algorithm cannot be empty")
        alg = str(v).strip().upper()
        if alg not in SUPPORTED_JWT_ALGORITHMS:
            raise ValueError(f"jwt_algorithm must be one of {sorted(SUPPORTED_JWT_ALGORITHMS)}")
        return alg

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if int(v) < 1 or int(v) > 65535:
            raise ValueError("port must be between 1 and 65535")
        return int(v)

    @field_validator("jwt_issuer", "jwt_audience", mode="before")
    @classmethod
    def _empty_as_none(cls, v):
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("jwt_secret", mode="before")
    @classmethod
    def _prefer_docker_secret(cls, v, info):
        """
        Prefer Docker secrets mounted at /run/secrets/<NAME> over environment variables.
        Tries secret files with the field name upper-cased and as-is.
        """
        secret = None
        try:
            candidates = [info.field_name.upper(), info.field_name]
            for name in candidates:
                path = f"/run/secrets/{name}"
                if os.path.isfile(path):
                    with open(path, "r", encoding="utf-8") as f:
                        data = f.read().strip()
                    if data:
                        secret = data
                        break
        except (OSError, UnicodeDecodeError):
            secret = None
        if secret:
            logger.debug("Using docker secret for %s", info.field_name)
            return secret
        return v

    def model_post_init(self, __context):
        if not self.jwt_secret:
            logger.warning("JWT_SECRET is not set; every bearer token will be rejected")


def load_settings() -> Settings:
    try:
        settings = Settings()
        return settings
    except ValidationError as e:
        logger.error("Configuration error:")
        for err in e.errors():
            logger.error(" - %s: %s", err.get('loc'), err.get('msg'))
        sys.exit(1)


class LocalISOFormatter(logging.Formatter):
    def __init__(self, fmt=None, datefmt=None, tz_name: str | None = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._tz = None
        self._tz_name = tz_name
        if tz_name:
            try:
                self._tz = ZoneInfo(tz_name)
            except (ZoneInfoNotFoundError, ValueError):
                self._tz = None

    def formatTime(self, record, datefmt=None):
        if self._tz is not None:
            dt = datetime.datetime.fromtimestamp(record.created, tz=self._tz)
        else:
            dt = datetime.datetime.fromtimestamp(record.created).astimezone()
        return dt.isoformat(timespec='milliseconds')


def configure_logging(settings: Settings | None = None):
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        tzname = getattr(settings, 'timezone', None) if settings is not None else None
        formatter = LocalISOFormatter('%(asctime)s %(levelname)s %(name)s %(message)s', tz_name=tzname)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    if settings is not None:
        lvl = str(getattr(settings, 'logging_level', 'INFO')).strip().upper()
        numeric = getattr(logging, lvl, None)
        if not isinstance(numeric, int):
            root.setLevel(logging.INFO)
        else:
            root.setLevel(numeric)
    else:
        root.setLevel(logging.INFO)

    logger.info("Logging configured; root level=%s", logging.getLevelName(root.level))

    for n in NOISY_LOGGERS:
        logging.getLogger(n).setLevel(logging.WARNING)

    for logger_name in ['uvicorn', 'uvicorn.error']:
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    access = logging.getLogger('uvicorn.access')
    if root.level <= logging.DEBUG:
        access.setLevel(logging.DEBUG)
    else:
        access.setLevel(logging.WARNING)
