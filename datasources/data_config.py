"""
Settings for the allow-list backend the correlation engine appends to

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings

CLOUDFLARE_API_BASE = "https://api.cloudflare.com/client/v4"


class AllowListSettings(BaseSettings):
    cloudflare_api_base: str = CLOUDFLARE_API_BASE
    cloudflare_account_id: str = ""
    cloudflare_list_id: str = ""
    cloudflare_api_token: str = ""
    allowlist_timeout: float = 10.0

    @field_validator("cloudflare_api_base", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return str(v).rstrip("/")

    @field_validator("cloudflare_account_id", "cloudflare_list_id", "cloudflare_api_token", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return str(v or "").strip()

    @field_validator("allowlist_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"allowlist_timeout must be positive, got {v}")
        return v

    model_config = {"env_prefix": "DNILIST_", "extra": "ignore"}
