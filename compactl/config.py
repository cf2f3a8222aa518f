"""Configuration management for the compactl application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

class Config:
    """Application configuration with sensible defaults."""

    # Management API
    API_URL: str = os.getenv("COMPACTL_API_URL", "")
    CLUSTER_NAME: str = os.getenv("COMPACTL_CLUSTER", "")
    API_USER: str = os.getenv("COMPACTL_USER", "admin")
    API_PASSWORD: str = os.getenv("COMPACTL_PASSWORD", "")
    REQUESTED_BY: str = os.getenv("COMPACTL_REQUESTED_BY", "ambari")

    # Timeouts (in seconds)
    API_TIMEOUT: int = int(os.getenv("API_TIMEOUT", "30"))

    # Retry configuration
    MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "3"))
    RETRY_DELAY: float = float(os.getenv("RETRY_DELAY", "1.0"))

    # Batch settings sent with every request schedule
    BATCH_INTERVAL_SECONDS: int = int(os.getenv("BATCH_INTERVAL_SECONDS", "1"))
    BATCH_TOLERATE_SIZE: int = int(os.getenv("BATCH_TOLERATE_SIZE", "0"))

    # Scheduler queue refresh
    SCHEDULER_FILENAME: str = os.getenv("SCHEDULER_FILENAME", "capacity-scheduler.xml")
    REFRESH_SERVICE: str = os.getenv("REFRESH_SERVICE", "YARN")
    REFRESH_COMPONENT: str = os.getenv("REFRESH_COMPONENT", "RESOURCEMANAGER")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Security
    API_KEY: str = os.getenv("COMPACTL_API_KEY", "compactl-secret")
    REDACT_KEYS: tuple = ("api_key", "password", "secret", "token")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration needed to talk to a live cluster."""
        required = {
            "COMPACTL_API_URL": cls.API_URL,
            "COMPACTL_CLUSTER": cls.CLUSTER_NAME,
        }
        missing = [k for k, v in required.items() if not v]
        if missing:
            raise ValueError(f"Missing required configuration: {', '.join(missing)}")

# Don't validate on import to allow for dynamic configuration
# Call Config.validate() explicitly when needed
