# localnetviewer/core/models.py

from enum import IntEnum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from localnetviewer.core.file_type import FileType


class ImagePageMode(IntEnum):
    SCROLL = 0
    PAGE = 1


class FileInfo(BaseModel):
    """One entry of a directory or drive listing, sent to the client in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = ""
    position: str = ""
    is_directory: bool = False
    file_type: FileType = FileType.NONE
    child_image_positions: List[str] = Field(default_factory=list)
