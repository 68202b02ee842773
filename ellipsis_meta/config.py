from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ellipsis_meta import __app_name__, __version__
from ellipsis_meta.core.privacy import PrivacyLevel
from ellipsis_meta.core.timeline import DEFAULT_DISPLAY_FORMAT

DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org/reverse"
DEFAULT_USER_AGENT = f"{__app_name__}/{__version__}"
DEFAULT_GEOCODER_TIMEOUT = 10.0


@dataclass
class ExtractorSettings:
    privacy_level: PrivacyLevel = PrivacyLevel.BASIC
    date_display_format: str = DEFAULT_DISPLAY_FORMAT
    geocoder_base_url: str = DEFAULT_GEOCODER_URL
    geocoder_user_agent: str = DEFAULT_USER_AGENT
    geocoder_language: str = "ko"
    geocoder_timeout: float = DEFAULT_GEOCODER_TIMEOUT

    def __post_init__(self) -> None:
        self.privacy_level = PrivacyLevel.parse(self.privacy_level)
        if self.geocoder_timeout <= 0:
            raise ValueError("geocoder_timeout must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExtractorSettings":
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get("ELLIPSIS_PRIVACY_LEVEL"):
            settings.privacy_level = PrivacyLevel.parse(env["ELLIPSIS_PRIVACY_LEVEL"])
        if env.get("ELLIPSIS_DATE_FORMAT"):
            settings.date_display_format = env["ELLIPSIS_DATE_FORMAT"]
        if env.get("ELLIPSIS_GEOCODER_URL"):
            settings.geocoder_base_url = env["ELLIPSIS_GEOCODER_URL"]
        if env.get("ELLIPSIS_GEOCODER_USER_AGENT"):
            settings.geocoder_user_agent = env["ELLIPSIS_GEOCODER_USER_AGENT"]
        if env.get("ELLIPSIS_GEOCODER_LANGUAGE"):
            settings.geocoder_language = env["ELLIPSIS_GEOCODER_LANGUAGE"]
        if env.get("ELLIPSIS_GEOCODER_TIMEOUT"):
            timeout = float(env["ELLIPSIS_GEOCODER_TIMEOUT"])
            if timeout <= 0:
                raise ValueError("ELLIPSIS_GEOCODER_TIMEOUT must be positive")
            settings.geocoder_timeout = timeout
        return settings
