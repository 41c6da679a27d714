# src/service_kernel/config/base_settings.py
from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class ExecutionContext(str, Enum):
    """Where the locator runs; decides what a lookup miss does."""

    LIVE = "live"
    AUTHORING = "authoring"


class LocatorSettings(BaseSettings):
    """
    Shared settings for every ServiceLocator.
    Each host can subclass and extend it.
    """

    execution_context: ExecutionContext = ExecutionContext.LIVE
    # Drop scheduled set-completions in unregister_all() as well
    clear_completions_on_reset: bool = False
    log_level: str = "INFO"
    app_name: str = "Service Kernel"

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_KERNEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_live(self) -> bool:
        return self.execution_context is ExecutionContext.LIVE
