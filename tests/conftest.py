import pytest

from app.config import Settings


@pytest.fixture
def settings():
    return Settings(
        site_url="https://blog.example.org",
        site_name="Example Blog",
        default_preview_image="https://blog.example.org/static/default-og-image.jpg",
        default_social_image="https://blog.example.org/static/social-default.png",
        native_embeds=False,
    )
