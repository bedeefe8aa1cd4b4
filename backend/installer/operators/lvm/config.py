"""Environment configuration of the LVM operator plugin."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from installer.config import ENV_CONFIG_PREFIX


class LVMConfig(BaseSettings):
    """Resources LVMS needs on every host that provides storage."""

    model_config = SettingsConfigDict(env_prefix=f"{ENV_CONFIG_PREFIX}LVM_", extra="ignore")

    cpu_per_host: int = 1
    memory_mib_per_host: int = 400
    min_openshift_version: str = "4.12"
