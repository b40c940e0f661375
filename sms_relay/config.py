"""
Centralized configuration for the SMS relay.
All settings loaded from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv


@dataclass
class LLMConfig:
    """Completion API configuration."""
    api_key: str = ""
    base_url: str = "https://api.openai.com/v1"
    model: str = "text-davinci-003"
    timeout: float = 30.0
    max_retries: int = 3


@dataclass
class PromptConfig:
    """Prompt template provider configuration."""
    source: str = "http"  # "http" or "local"
    base_url: str = "https://promptable.ai/api"
    api_key: str = ""
    local_path: str = "prompts.json"
    timeout: float = 10.0
    max_retries: int = 3


@dataclass
class CompactionConfig:
    """Transcript compaction configuration."""
    max_tokens: int = 4000  # total context window for the final prompt
    encoding: str = "r50k_base"  # GPT-3 vocabulary


@dataclass
class ServerConfig:
    """HTTP gateway configuration."""
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class AppConfig:
    """Top-level application configuration."""
    llm: LLMConfig = field(default_factory=LLMConfig)
    prompts: PromptConfig = field(default_factory=PromptConfig)
    compaction: CompactionConfig = field(default_factory=CompactionConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    default_agent_name: str = "Assistant"
    default_prompt_id: str = "clbilb0kh0008h7eg8jv8owdu"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables (including .env file)."""
        load_dotenv()
        config = cls()

        # LLM config
        config.llm.api_key = os.getenv("OPENAI_API_KEY", config.llm.api_key)
        config.llm.base_url = os.getenv("LLM_BASE_URL", config.llm.base_url)
        config.llm.model = os.getenv("LLM_MODEL", config.llm.model)
        timeout = os.getenv("LLM_TIMEOUT")
        if timeout:
            config.llm.timeout = float(timeout)
        retries = os.getenv("LLM_MAX_RETRIES")
        if retries:
            config.llm.max_retries = int(retries)

        # Prompt provider config
        config.prompts.source = os.getenv("PROMPT_SOURCE", config.prompts.source)
        config.prompts.base_url = os.getenv("PROMPT_BASE_URL", config.prompts.base_url)
        config.prompts.api_key = os.getenv("PROMPT_API_KEY", config.prompts.api_key)
        config.prompts.local_path = os.getenv("PROMPT_FILE", config.prompts.local_path)
        prompt_timeout = os.getenv("PROMPT_TIMEOUT")
        if prompt_timeout:
            config.prompts.timeout = float(prompt_timeout)
        prompt_retries = os.getenv("PROMPT_MAX_RETRIES")
        if prompt_retries:
            config.prompts.max_retries = int(prompt_retries)

        # Compaction config
        max_tokens = os.getenv("CONTEXT_MAX_TOKENS")
        if max_tokens:
            config.compaction.max_tokens = int(max_tokens)
        config.compaction.encoding = os.getenv(
            "TOKENIZER_ENCODING", config.compaction.encoding
        )

        # Server config
        config.server.host = os.getenv("SERVER_HOST", config.server.host)
        port = os.getenv("SERVER_PORT")
        if port:
            config.server.port = int(port)

        config.default_agent_name = os.getenv("DEFAULT_AGENT_NAME", config.default_agent_name)
        config.default_prompt_id = os.getenv("DEFAULT_PROMPT_ID", config.default_prompt_id)
        config.log_level = os.getenv("LOG_LEVEL", config.log_level).upper()

        return config
