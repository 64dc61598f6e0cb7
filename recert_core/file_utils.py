from __future__ import annotations
from pathlib import Path
from typing import Any, Union

import aiofiles

from .locations import FileLocation
from .yaml_utils import load_literal_yaml


async def read_file_to_string(path: Union[str, Path]) -> str:
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        return await f.read()


async def write_file(path: Union[str, Path], content: str) -> None:
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(content)


async def get_filesystem_yaml(file_location: FileLocation) -> Any:
    # typed scalars stay as text so the rewrite leaves them byte-for-byte intact
    return load_literal_yaml(await read_file_to_string(file_location.path))
