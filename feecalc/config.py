from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "FEECALC_"}

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Persisted calculator state (scenario + offers)
    state_file: str = "data/calculator_state.json"

    # Offers
    max_offers: int = 5

    # Sensitivity sweep: exit price grid as multiples of the base exit price
    sensitivity_steps: int = 25
    sensitivity_low_multiple: float = 0.25
    sensitivity_high_multiple: float = 3.0


settings = Settings()
