# toolboard/config.py
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_SITE_URL = "https://toolboard.ademisler.com"
DEFAULT_STORE_URL = (
    "https://chromewebstore.google.com/detail/efecahgaobadfmaecclkfnfdfmincbmm"
)


class Settings(BaseModel):
    """Runtime and build settings, read from ``TOOLBOARD_*`` environment variables."""

    site_url: str = DEFAULT_SITE_URL
    store_url: str = DEFAULT_STORE_URL
    repo_root: Path = Field(default_factory=Path.cwd)
    site_root: Optional[Path] = None
    manifest_path: Optional[Path] = None
    locale_path: Optional[Path] = None
    # File path or http(s) URL of the generated tools.json
    catalog_source: Optional[str] = None
    page_size: int = Field(default=6, ge=1)
    search_debounce: float = Field(default=0.11, ge=0)
    log_level: str = "INFO"

    @property
    def site_dir(self) -> Path:
        return self.site_root or self.repo_root / "site"

    @property
    def manifest_file(self) -> Path:
        return self.manifest_path or (
            self.repo_root / "extension" / "config" / "tools-manifest.json"
        )

    @property
    def locale_file(self) -> Path:
        return self.locale_path or (
            self.repo_root / "extension" / "_locales" / "en" / "messages.json"
        )

    @property
    def catalog_file(self) -> str:
        if self.catalog_source:
            return self.catalog_source
        return str(self.site_dir / "assets" / "data" / "tools.json")

    @property
    def site_host(self) -> str:
        return self.site_url.split("://", 1)[-1].rstrip("/")

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        values = {}
        if env.get("TOOLBOARD_SITE_URL"):
            values["site_url"] = env["TOOLBOARD_SITE_URL"].rstrip("/")
        if env.get("TOOLBOARD_STORE_URL"):
            values["store_url"] = env["TOOLBOARD_STORE_URL"]
        for key, name in (
            ("repo_root", "TOOLBOARD_REPO_ROOT"),
            ("site_root", "TOOLBOARD_SITE_ROOT"),
            ("manifest_path", "TOOLBOARD_MANIFEST"),
            ("locale_path", "TOOLBOARD_LOCALE"),
        ):
            if env.get(name):
                values[key] = Path(env[name])
        if env.get("TOOLBOARD_CATALOG_SOURCE"):
            values["catalog_source"] = env["TOOLBOARD_CATALOG_SOURCE"]
        if env.get("TOOLBOARD_PAGE_SIZE"):
            values["page_size"] = int(env["TOOLBOARD_PAGE_SIZE"])
        if env.get("TOOLBOARD_SEARCH_DEBOUNCE"):
            values["search_debounce"] = float(env["TOOLBOARD_SEARCH_DEBOUNCE"])
        if env.get("TOOLBOARD_LOG_LEVEL"):
            values["log_level"] = env["TOOLBOARD_LOG_LEVEL"].upper()
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
