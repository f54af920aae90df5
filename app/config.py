import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    site_url: str
    site_name: str
    default_preview_image: str
    default_social_image: str
    timeout: float = 5.0
    user_agent: str = "Mozilla/5.0 (compatible; LinkCards Auto Link Preview)"
    preview_description_length: int = 200
    social_description_length: int = 160
    native_embeds: bool = True


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    """Read settings from the environment (and .env). Cheap enough to call per render."""
    site_url = os.getenv("SITE_URL", "http://localhost:8000").rstrip("/")
    return Settings(
        site_url=site_url,
        site_name=os.getenv("SITE_NAME", "Link Cards"),
        default_preview_image=os.getenv(
            "DEFAULT_PREVIEW_IMAGE", f"{site_url}/static/default-og-image.jpg"
        ),
        default_social_image=os.getenv(
            "DEFAULT_SOCIAL_IMAGE", f"{site_url}/static/social-default.png"
        ),
        timeout=float(os.getenv("PREVIEW_TIMEOUT", "5.0")),
        user_agent=os.getenv(
            "PREVIEW_USER_AGENT",
            "Mozilla/5.0 (compatible; LinkCards Auto Link Preview)",
        ),
        preview_description_length=int(os.getenv("PREVIEW_DESCRIPTION_LENGTH", "200")),
        social_description_length=int(os.getenv("SOCIAL_DESCRIPTION_LENGTH", "160")),
        native_embeds=_env_flag("ENABLE_NATIVE_EMBEDS", True),
    )
