from typing import Optional

from pydantic_settings import BaseSettings

from summit.analysis.vital_score import ScoreWeights


class Settings(BaseSettings):
    database_url: str = "sqlite:///./summit.db"
    score_weight_recovery: float = 0.35
    score_weight_sleep: float = 0.35
    score_weight_stress: float = 0.20
    score_weight_hrv: float = 0.10
    default_scenario: str = "burnout"
    mock_seed: Optional[int] = None
    recent_metrics_days: int = 7
    app_version: str = "0.1.0"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def score_weights(self) -> ScoreWeights:
        return ScoreWeights(
            recovery=self.score_weight_recovery,
            sleep=self.score_weight_sleep,
            stress=self.score_weight_stress,
            hrv=self.score_weight_hrv,
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
