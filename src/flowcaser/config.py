from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_LLM_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_LLM_MODEL = "gpt-4o-mini"


@dataclass
class FlowcaserConfig:
    env: str = "dev"
    db_path: str = ""
    llm_api_key: Optional[str] = None
    llm_url: str = DEFAULT_LLM_URL
    llm_model: str = DEFAULT_LLM_MODEL
    llm_temperature: float = 0.3
    llm_max_tokens: int = 600
    llm_connect_timeout: float = 5.0
    llm_read_timeout: float = 30.0
    llm_retries: int = 1
    history_limit: int = 50
    random_seed: Optional[int] = None

    @property
    def remote_enabled(self) -> bool:
        return bool(self.llm_api_key)


def _optional_int(value: str | None) -> Optional[int]:
    if value is None or not value.strip():
        return None
    return int(value)


def load_config() -> FlowcaserConfig:
    """Load configuration from environment at call time (runtime-safe)."""
    env = os.getenv("FLOWCASER_ENV", "dev")
    default_db = Path(__file__).resolve().parent.parent.parent / "data" / "flowcaser.db"
    db_path = os.path.abspath(os.getenv("FLOWCASER_DB_PATH", str(default_db)))
    llm_api_key = os.getenv("FLOWCASER_LLM_API_KEY") or os.getenv("OPENAI_API_KEY") or None
    llm_url = os.getenv("FLOWCASER_LLM_URL", DEFAULT_LLM_URL)
    llm_model = os.getenv("FLOWCASER_LLM_MODEL", DEFAULT_LLM_MODEL)
    llm_temperature = float(os.getenv("FLOWCASER_LLM_TEMPERATURE", "0.3"))
    llm_max_tokens = int(os.getenv("FLOWCASER_LLM_MAX_TOKENS", "600"))
    llm_connect_timeout = float(os.getenv("FLOWCASER_LLM_CONNECT_TIMEOUT", "5"))
    llm_read_timeout = float(os.getenv("FLOWCASER_LLM_READ_TIMEOUT", "30"))
    llm_retries = int(os.getenv("FLOWCASER_LLM_RETRIES", "1"))
    history_limit = int(os.getenv("FLOWCASER_HISTORY_LIMIT", "50"))
    random_seed = _optional_int(os.getenv("FLOWCASER_RANDOM_SEED"))

    return FlowcaserConfig(
        env=env,
        db_path=db_path,
        llm_api_key=llm_api_key,
        llm_url=llm_url,
        llm_model=llm_model,
        llm_temperature=llm_temperature,
        llm_max_tokens=llm_max_tokens,
        llm_connect_timeout=llm_connect_timeout,
        llm_read_timeout=llm_read_timeout,
        llm_retries=llm_retries,
        history_limit=history_limit,
        random_seed=random_seed,
    )
