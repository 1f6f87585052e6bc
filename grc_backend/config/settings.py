from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    supabase_url: str = ""
    supabase_key: str = ""
    request_timeout: float = 30.0

    # Dashboard windows and thresholds
    review_window_days: int = 30
    high_risk_scenario_threshold: int = 12

    class Config:
        env_file = ".env"
