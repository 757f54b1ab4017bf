"""Configuration management for multivm."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IMAGE_URL = (
    "http://n42-h01-b06-mx750c.rdu3.labs.perfscale.redhat.com/ekuric/rhel9/"
    "Fedora-Cloud-Base-Generic-42-1.1.x86_64.qcow2"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MULTIVM_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Cluster settings
    namespace: str = Field(default="default", description="Namespace for created VMs")
    client_binary: str = Field(default="oc", description="Orchestrator CLI used to create VMs")

    # VM defaults not covered by command-line flags
    storage_class: str = Field(
        default="ocs-storagecluster-ceph-rbd", description="Default storage class"
    )
    image_url: str = Field(default=DEFAULT_IMAGE_URL, description="Default boot image URL")
    ssh_secret_name: str = Field(
        default="vmkeyroot", description="Secret holding the SSH public key to inject"
    )
    root_password: str = Field(default="fedora", description="Cloud-init root password")

    # Pacing
    startup_delay_seconds: float = Field(
        default=3.0, ge=0, description="Pause before the first submission"
    )
    submit_delay_seconds: float = Field(
        default=1.0, ge=0, description="Pause after each submission"
    )

    log_level: str = Field(default="INFO", description="Log level for diagnostics on stderr")


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
