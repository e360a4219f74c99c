# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load process-wide tagging configuration from environment
#   variables / .env file. The resulting objects are read-only
#   after construction and are passed explicitly into the
#   taggable plugin and the Mongo store.
#
# CLASSES:
# --------
# - MongoConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 27017)
#     user: str | None   (default None)
#     password: str | None (default None)
#     database: str      (default "taggable")
#
# - TaggableConfig (dataclass)
#     blacklist: tuple[str, ...]           (TAGGABLE_BLACKLIST, comma separated)
#     date_format: str                     (TAGGABLE_DATE_FORMAT, default "%A %B %Y")
#     stopword_languages: tuple[str, ...]  (TAGGABLE_STOPWORD_LANGUAGES, empty = all)
#     mongo: MongoConfig
#
# FUNCTION:
# ---------
# - get_config(reload: bool = False) -> TaggableConfig
#     Load .env using python-dotenv, construct TaggableConfig.
#     Returns the same singleton on repeated calls unless reload=True.
#
# USAGE:
# ------
#   from taggable.config import get_config
#   config = get_config()
#   print(config.blacklist)
#   print(config.date_format)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_DATE_FORMAT = "%A %B %Y"


@dataclass(frozen=True)
class MongoConfig:
    """MongoDB database configuration."""
    host: str = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: str = "taggable"


@dataclass(frozen=True)
class TaggableConfig:
    """Process-wide tagging configuration."""
    blacklist: Tuple[str, ...] = ()
    date_format: str = DEFAULT_DATE_FORMAT
    stopword_languages: Tuple[str, ...] = ()  # empty means every language in the corpus
    mongo: MongoConfig = field(default_factory=MongoConfig)


def get_strings(name: str, default: Tuple[str, ...] = ()) -> Tuple[str, ...]:
    """
    Read a comma separated environment variable as a tuple of strings.

    Args:
        name: Environment variable name
        default: Value used when the variable is unset or blank

    Returns:
        Tuple of stripped, non-empty entries
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return tuple(default)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


# Singleton instance
_config_instance: Optional[TaggableConfig] = None


def get_config(reload: bool = False) -> TaggableConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Args:
        reload: Rebuild the singleton from the current environment

    Returns:
        TaggableConfig: Tagging configuration
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build MongoDB configuration
    mongo_config = MongoConfig(
        host=os.getenv("MONGO_HOST", "localhost"),
        port=int(os.getenv("MONGO_PORT", "27017")),
        user=os.getenv("MONGO_USER") or None,
        password=os.getenv("MONGO_PASSWORD") or None,
        database=os.getenv("MONGO_DATABASE", "taggable")
    )

    _config_instance = TaggableConfig(
        blacklist=get_strings("TAGGABLE_BLACKLIST"),
        date_format=os.getenv("TAGGABLE_DATE_FORMAT") or DEFAULT_DATE_FORMAT,
        stopword_languages=get_strings("TAGGABLE_STOPWORD_LANGUAGES"),
        mongo=mongo_config
    )

    return _config_instance
