"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class SupabaseConfig(BaseSettings):
    """Hosted store and auth configuration."""

    model_config = {"env_prefix": "INSPECTROUTE_SUPABASE_"}

    url: str = ""
    service_role_key: str = ""
    profiles_table: str = "company_profiles"


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "INSPECTROUTE_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    catalog_ttl: int = 60  # seconds


class WorkflowConfig(BaseSettings):
    """External workflow (n8n webhook) configuration."""

    model_config = {"env_prefix": "INSPECTROUTE_WORKFLOW_"}

    upload_url: str = "https://visionairy.app.n8n.cloud/webhook/upload-inspections"
    route_query_url: str = "https://visionairy.app.n8n.cloud/webhook/route-query"
    timeout: float = 120.0


class StripeConfig(BaseSettings):
    """Payments provider configuration."""

    model_config = {"env_prefix": "INSPECTROUTE_STRIPE_"}

    secret_key: str = ""
    individual_price_id: str = "price_1SdzI9GG50M447BhdYORbWbG"
    team_price_id: str = "price_1SdzSXGG50M447BhQ2vMf8xn"
    individual_product_id: str = "prod_TbBO42W3Tde65u"
    team_product_id: str = "prod_TbBqMsplBvazKf"
    trial_days: int = 14
    team_min_seats: int = 3
    default_origin: str = "https://inspectorroute.com"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "INSPECTROUTE_"}

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"
    cache_backend: Literal["memory", "redis"] = "memory"

    supabase: SupabaseConfig = SupabaseConfig()
    redis: RedisConfig = RedisConfig()
    workflow: WorkflowConfig = WorkflowConfig()
    stripe: StripeConfig = StripeConfig()
