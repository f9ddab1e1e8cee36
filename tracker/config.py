from pathlib import Path
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

# Load .env from repo root for local development and scripts.
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)
    db_path: str = Field(default="./data/tracker.db", alias="DB_PATH")
    local_tz: str = Field(default="America/Los_Angeles", alias="LOCAL_TZ")
    poll_interval_seconds: float = Field(default=3.0, alias="POLL_INTERVAL_SECONDS")
    page_origin: str = Field(default="https://robinhood.com", alias="PAGE_ORIGIN")
    page_path_pattern: str = Field(default=r"^/account/investing/?$", alias="PAGE_PATH_PATTERN")
    total_return_label: str = Field(default="Total return", alias="TOTAL_RETURN_LABEL")
    equity_label: str = Field(default="Equity", alias="EQUITY_LABEL")
    row_href_prefix: str = Field(default="/stocks/", alias="ROW_HREF_PREFIX")
    # Fragments of the arrow icon's path data; swap these when the icon set changes.
    glyph_down_pattern: str = Field(default=r"\b9\.5\b", alias="GLYPH_DOWN_PATTERN")
    glyph_up_pattern: str = Field(default=r"\b2\.5\b", alias="GLYPH_UP_PATTERN")
    color_margin: int = Field(default=25, alias="COLOR_MARGIN")
    chart_width: int = Field(default=920, alias="CHART_WIDTH")
    chart_height: int = Field(default=520, alias="CHART_HEIGHT")

settings = Settings()
