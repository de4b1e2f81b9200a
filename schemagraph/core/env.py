import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    default_dialect: str = "sanity"
    infer_plurals: bool = True
    log_level: str = "INFO"
    graph_name: str = "SchemaGraph"


def load_env(env_file: Optional[str] = None) -> None:
    """
    Load environment variables from a .env file if present.
    Does nothing if file is missing.
    """
    path = Path(env_file) if env_file else Path(".env")
    if path.exists():
        load_dotenv(dotenv_path=path)


def get_settings() -> Settings:
    return Settings(
        default_dialect=os.getenv("SCHEMAGRAPH_DEFAULT_DIALECT", "sanity"),
        infer_plurals=os.getenv("SCHEMAGRAPH_INFER_PLURALS", "1") == "1",
        log_level=os.getenv("SCHEMAGRAPH_LOG_LEVEL", "INFO").upper(),
        graph_name=os.getenv("SCHEMAGRAPH_GRAPH_NAME", "SchemaGraph"),
    )


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
