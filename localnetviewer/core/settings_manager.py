# localnetviewer/core/settings_manager.py

from localnetviewer.config import get_settings, update_settings
from localnetviewer.core.models import ImagePageMode


def get_position() -> str:
    return str(get_settings().get("position") or "")


def set_position(position: str):
    update_settings(position=position)


def get_image_page_mode() -> ImagePageMode:
    value = get_settings().get("image_page_mode", ImagePageMode.SCROLL)
    try:
        return ImagePageMode(value)
    except ValueError:
        # hand-edited config
        return ImagePageMode.SCROLL


def set_image_page_mode(mode: ImagePageMode):
    update_settings(image_page_mode=int(mode))
