from pydantic_settings import BaseSettings

from schema_bridge.json_schema.validation_nodes import UnknownFieldPolicy


class Settings(BaseSettings):
    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4.1-mini"
    openai_base_url: str = "https://api.openai.com/v1"

    # Structured output
    structured_output_max_retries: int = 1
    schema_unknown_fields: UnknownFieldPolicy = UnknownFieldPolicy.STRICT

    # Custom events
    event_log_path: str = "custom_events.log"

    class Config:
        env_file = ".env"
        env_prefix = "APP_"


settings = Settings()
