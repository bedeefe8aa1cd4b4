"""Environment configuration of the OpenShift Virtualization operator plugin."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from installer.config import ENV_CONFIG_PREFIX


class CNVConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=f"{ENV_CONFIG_PREFIX}CNV_", extra="ignore")

    master_cpu: int = 4
    master_memory_mib: int = 150
    worker_cpu: int = 2
    worker_memory_mib: int = 360
    supported_architectures: list[str] = ["x86_64", "aarch64"]
