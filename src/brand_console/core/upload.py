"""
Client-side validation and preparation of logo uploads.

Files are checked before any request is sent: name safety, extension
allow-list and size limit. Raster files are opened with Pillow to record
their dimensions alongside the upload.
"""

import hashlib
import logging
import mimetypes
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from PIL import Image, UnidentifiedImageError

from .exceptions import UploadValidationError
from .logo_variants import ALLOWED_LOGO_EXTENSIONS

logger = logging.getLogger(__name__)

RASTER_EXTENSIONS = {'png', 'jpg', 'jpeg'}

# Types mimetypes does not know reliably across platforms
EXTRA_MIME_TYPES = {
    'svg': 'image/svg+xml',
    'ai': 'application/postscript',
    'eps': 'application/postscript',
    'pdf': 'application/pdf',
}


@dataclass
class PreparedUpload:
    """A validated file ready to be sent as multipart form data."""

    file_name: str
    mime_type: str
    size: int
    checksum: str
    content: bytes = field(repr=False)
    metadata: Dict[str, Any] = field(default_factory=dict)


class UploadValidator:
    """
    Validates logo files before upload.
    """

    MAX_UPLOAD_BYTES = 500 * 1024 * 1024
    MAX_FILENAME_LENGTH = 255

    SAFE_FILENAME_PATTERN = re.compile(r'^[a-zA-Z0-9 ._()-]+$')

    RESERVED_NAMES = {
        'con', 'prn', 'aux', 'nul',
        'com1', 'com2', 'com3', 'com4', 'com5', 'com6', 'com7', 'com8', 'com9',
        'lpt1', 'lpt2', 'lpt3', 'lpt4', 'lpt5', 'lpt6', 'lpt7', 'lpt8', 'lpt9',
    }

    def __init__(self, max_bytes: int = MAX_UPLOAD_BYTES,
                 allowed_extensions=ALLOWED_LOGO_EXTENSIONS):
        self.max_bytes = max_bytes
        self.allowed_extensions = tuple(ext.lower().lstrip('.') for ext in allowed_extensions)

    def validate_filename(self, filename: str) -> Tuple[bool, List[str]]:
        """
        Validate a file name.

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        issues = []

        if len(filename) > self.MAX_FILENAME_LENGTH:
            issues.append(f"Filename too long: {len(filename)} > {self.MAX_FILENAME_LENGTH}")

        if not self.SAFE_FILENAME_PATTERN.match(filename) or '..' in filename:
            issues.append("Filename contains unsafe characters")

        if Path(filename).stem.lower() in self.RESERVED_NAMES:
            issues.append(f"Filename is a reserved name: {filename}")

        extension = Path(filename).suffix.lstrip('.').lower()
        if extension not in self.allowed_extensions:
            issues.append(
                f"Invalid file type '{extension or filename}'. Allowed: {', '.join(self.allowed_extensions)}"
            )

        return len(issues) == 0, issues

    def validate_size(self, size: int) -> Tuple[bool, List[str]]:
        if size == 0:
            return False, ["File is empty"]
        if size > self.max_bytes:
            return False, [f"File too large: {size} bytes > {self.max_bytes}"]
        return True, []

    def validate(self, filename: str, size: int) -> None:
        """
        Raises:
            UploadValidationError: Listing every issue found
        """
        _, name_issues = self.validate_filename(filename)
        _, size_issues = self.validate_size(size)
        issues = name_issues + size_issues
        if issues:
            raise UploadValidationError("; ".join(issues))


def guess_mime_type(filename: str) -> str:
    extension = Path(filename).suffix.lstrip('.').lower()
    if extension in EXTRA_MIME_TYPES:
        return EXTRA_MIME_TYPES[extension]
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type or 'application/octet-stream'


def _raster_metadata(path: Path) -> Dict[str, Any]:
    try:
        with Image.open(path) as img:
            return {'width': img.width, 'height': img.height, 'mode': img.mode}
    except (UnidentifiedImageError, OSError) as e:
        raise UploadValidationError(f"Unreadable image {path.name}: {e}")


def prepare_logo_upload(path: Union[str, Path], validator: UploadValidator = None) -> PreparedUpload:
    """
    Validate a logo file and load it for upload.

    Args:
        path: Path to the logo file
        validator: Optional validator with non-default limits

    Returns:
        PreparedUpload with content, checksum and format metadata

    Raises:
        UploadValidationError: If the file is missing or fails validation
    """
    path = Path(path)
    validator = validator or UploadValidator()

    if not path.is_file():
        raise UploadValidationError(f"File not found: {path}")

    size = path.stat().st_size
    validator.validate(path.name, size)

    content = path.read_bytes()
    extension = path.suffix.lstrip('.').lower()
    metadata: Dict[str, Any] = {'format': extension}
    if extension in RASTER_EXTENSIONS:
        metadata.update(_raster_metadata(path))

    prepared = PreparedUpload(
        file_name=path.name,
        mime_type=guess_mime_type(path.name),
        size=size,
        checksum=hashlib.sha256(content).hexdigest(),
        content=content,
        metadata=metadata,
    )
    logger.info(f"Prepared upload {prepared.file_name} ({prepared.size} bytes)")
    return prepared
