# 19.10.26

import json
import logging
from pathlib import Path

import aiofiles

from Presence.config import Configuration
from Presence.const import SETTINGS_FILE_NAME


logger = logging.getLogger(__name__)


class SettingsLoadError(RuntimeError):
    """Settings could not be loaded where they were expected to exist"""


class SettingsService:
    """Reads and writes the Configuration as indented JSON"""
    def __init__(self, diagnostics, folder=None):
        self.diagnostics = diagnostics
        self.settings_file = Path(folder or Path.cwd()) / SETTINGS_FILE_NAME

    async def exists(self) -> bool:
        """True only if the file is present and actually loads"""
        try:
            if not self.settings_file.exists():
                return False
            return await self.load() is not None
        except Exception as e:
            self.diagnostics.track_exception(e)
            return False

    async def load(self):
        try:
            async with aiofiles.open(self.settings_file, "r", encoding="utf-8") as f:
                content = await f.read()
            return Configuration.from_dict(json.loads(content))
        except Exception as e:
            self.diagnostics.track_exception(e)
            return None

    async def save(self, config: Configuration) -> bool:
        try:
            content = json.dumps(config.to_dict(), indent=2)
            async with aiofiles.open(self.settings_file, "w", encoding="utf-8") as f:
                await f.write(content)
            logger.debug("Settings written to %s", self.settings_file)
            return True
        except Exception as e:
            self.diagnostics.track_exception(e)
            return False

    async def delete(self) -> bool:
        raise NotImplementedError("Deleting settings is not supported")

    async def load_or_create(self, defaults: Configuration) -> Configuration:
        """Startup path: persist defaults when nothing usable is on disk, then load"""
        if not await self.exists():
            logger.info("No usable settings at %s, writing defaults", self.settings_file)
            await self.save(defaults)

        config = await self.load()
        if config is None:
            raise SettingsLoadError("Settings load returned nothing")
        return config
