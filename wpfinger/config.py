import os
from pydantic import BaseModel, Field

class Settings(BaseModel):
    DEFAULT_TIMEOUT: float = Field(default=10.0, description="Default HTTP timeout in seconds")
    USER_AGENT: str = Field(default="wpfinger/0.1", description="User-Agent string")
    VERIFY_TLS: bool = Field(default=False, description="Verify TLS certificates of the target")
    FOLLOW_REDIRECTS: bool = Field(default=True, description="Follow HTTP redirects")
    RATE_LIMIT_DELAY: float = Field(default=0.0, description="Delay between requests in seconds")

    # WordPress layout
    WP_CONTENT_DIR: str = Field(default="wp-content", description="Name of the wp-content directory")

    @classmethod
    def load(cls) -> "Settings":
        # Basic env var loading for key fields
        return cls(
            DEFAULT_TIMEOUT=float(os.getenv("WPFINGER_DEFAULT_TIMEOUT", 10.0)),
            USER_AGENT=os.getenv("WPFINGER_USER_AGENT", "wpfinger/0.1"),
            VERIFY_TLS=os.getenv("WPFINGER_VERIFY_TLS", "false").lower() == "true",
            FOLLOW_REDIRECTS=os.getenv("WPFINGER_FOLLOW_REDIRECTS", "true").lower() == "true",
            RATE_LIMIT_DELAY=float(os.getenv("WPFINGER_RATE_LIMIT_DELAY", 0.0)),
            WP_CONTENT_DIR=os.getenv("WPFINGER_WP_CONTENT_DIR", "wp-content"),
        )

settings = Settings.load()
