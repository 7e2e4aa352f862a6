"""
Assembles ZIP download packages of logo renditions.

Every file in a package plan is fetched concurrently. The package is
all-or-nothing: if any fetch fails, no archive is produced.
"""

import asyncio
import io
import logging
import zipfile
from typing import List, Optional

from ..config import ConsoleSettings
from ..core.asset_data import AssetCategory, BrandAsset, Variant, parse_logo_data, resolve_category
from ..core.exceptions import ApiError, PackageError
from ..core.logo_variants import PackageEntry, package_file_name, package_kind_for, package_plan_for
from ..logging import timed_operation
from .storage_abstraction import StorageInterface

logger = logging.getLogger(__name__)

SUSPICIOUS_FILE_BYTES = 100


class LogoPackager:
    """
    Builds logo packages through an API client.

    Args:
        api: Object with an async ``fetch_url(url) -> bytes``, such as BrandConsoleClient
        settings: Optional settings overriding package sizes and formats
    """

    def __init__(self, api, settings: Optional[ConsoleSettings] = None):
        self.api = api
        self.settings = settings or ConsoleSettings()

    def _logo_type(self, asset: BrandAsset):
        result = parse_logo_data(asset.data, asset.id)
        return result.value.type if result.ok else None

    def plan(self, asset: BrandAsset, variant: str = Variant.LIGHT.value,
             kind: Optional[str] = None) -> List[PackageEntry]:
        if resolve_category(asset.category) is not AssetCategory.LOGO:
            raise PackageError(f"Asset {asset.id} is not a logo")

        try:
            return package_plan_for(
                self._logo_type(asset), asset, variant, kind,
                png_sizes=self.settings.png_sizes,
                vector_formats=self.settings.vector_formats,
                favicon_sizes=self.settings.favicon_sizes,
                app_icon_sizes=self.settings.app_icon_sizes,
            )
        except ValueError as e:
            raise PackageError(str(e)) from e

    async def _fetch(self, entry: PackageEntry) -> bytes:
        content = await self.api.fetch_url(entry.url)
        if len(content) < SUSPICIOUS_FILE_BYTES:
            logger.warning(f"Small file size ({len(content)} bytes) for {entry.file_name}")
        return content

    @timed_operation("logo_packager.build_package")
    async def build_package(self, asset: BrandAsset, variant: str = Variant.LIGHT.value,
                            kind: Optional[str] = None) -> bytes:
        """
        Fetch every rendition in the plan and zip them.

        Returns:
            ZIP archive bytes with PNG/, Vector/ and ICO/ folders as the plan requires

        Raises:
            PackageError: If any rendition fails to download
        """
        entries = self.plan(asset, variant, kind)
        logger.info(f"Building {kind or 'auto'} package for asset {asset.id} ({len(entries)} files)")

        tasks = [asyncio.ensure_future(self._fetch(entry)) for entry in entries]
        try:
            contents = await asyncio.gather(*tasks)
        except ApiError as e:
            logger.error(f"Package for asset {asset.id} aborted: {e}")
            raise PackageError(f"Failed to download logo package: {e}") from e
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                logger.debug(f"Cancelled {len(pending)} outstanding fetches for asset {asset.id}")
                await asyncio.gather(*pending, return_exceptions=True)

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
            for entry, content in zip(entries, contents):
                archive.writestr(f"{entry.folder}/{entry.file_name}", content)

        return buffer.getvalue()

    async def download_package(self, asset: BrandAsset, storage: StorageInterface,
                               variant: str = Variant.LIGHT.value, kind: Optional[str] = None) -> str:
        """Build a package and save it to storage, returning the storage key."""
        kind = kind or package_kind_for(self._logo_type(asset))
        archive = await self.build_package(asset, variant, kind)
        key = package_file_name(asset.name, variant, kind)
        await storage.write_bytes(key, archive)
        logger.info(f"Saved logo package {key} ({len(archive)} bytes)")
        return key
