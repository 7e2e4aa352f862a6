"""
Async consumer for the brand asset HTTP API.

Wraps ``httpx.AsyncClient``. Non-2xx responses and transport failures are
raised as ApiError with the most specific message the response offers.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import httpx

from ..core.asset_data import (
    BrandAsset,
    HiddenSection,
    UserPersona,
    Variant,
    parse_brand_asset,
    parse_hidden_section,
    parse_persona,
    persona_to_payload,
)
from ..core.exceptions import ApiError, AssetParseError
from ..core.logo_variants import get_secure_asset_url
from ..core.upload import PreparedUpload, UploadValidator, prepare_logo_upload

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def extract_error_message(response: httpx.Response) -> str:
    """
    Pick the most specific error message from a failed response.

    Tried in order: ``error.message``, ``message``, ``details``, the raw body,
    the status reason phrase, then ``HTTP <status>``.
    """
    text = response.text
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get('error')
        if isinstance(error, dict) and error.get('message'):
            return str(error['message'])
        if isinstance(error, str) and error:
            return error
        if body.get('message'):
            return str(body['message'])
        if body.get('details'):
            details = body['details']
            return details if isinstance(details, str) else json.dumps(details)

    if text:
        return text
    if response.reason_phrase:
        return response.reason_phrase
    return f"HTTP {response.status_code}"


def _variant_params(variant: Optional[str]) -> Dict[str, str]:
    if variant == Variant.DARK or variant == Variant.DARK.value:
        return {'variant': Variant.DARK.value}
    return {}


def _parse_records(records: Any, parser: Callable[[Any], Any], label: str) -> List[Any]:
    """Parse each record of a list response, logging and skipping malformed ones."""
    parsed = []
    for record in records or []:
        try:
            parsed.append(parser(record))
        except (AssetParseError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed {label} record: {e}")
    return parsed


class BrandConsoleClient:
    """
    Client for brand assets, personas, fonts and hidden sections.

    Usage::

        async with BrandConsoleClient("https://brand.example.com") as api:
            assets = await api.list_assets(42)

    Args:
        base_url: API origin
        client: Optional preconfigured ``httpx.AsyncClient``, which the caller owns
        timeout: Request timeout in seconds for the internally created client
        validator: Upload validator applied before any file is sent
    """

    def __init__(self, base_url: str = "", *, client: Optional[httpx.AsyncClient] = None,
                 timeout: float = DEFAULT_TIMEOUT, validator: Optional[UploadValidator] = None):
        self.base_url = base_url.rstrip('/')
        self.validator = validator or UploadValidator()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    @classmethod
    def from_settings(cls, settings, *, client: Optional[httpx.AsyncClient] = None) -> "BrandConsoleClient":
        """Build a client from ConsoleSettings: base URL, timeout and upload limits."""
        validator = UploadValidator(settings.max_upload_bytes, settings.allowed_logo_extensions)
        return cls(settings.api_base_url, client=client, timeout=settings.request_timeout,
                   validator=validator)

    async def __aenter__(self) -> "BrandConsoleClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(f"Request failed: {e}") from e

        if response.is_success:
            return response

        message = extract_error_message(response)
        logger.error(f"{method} {path} returned {response.status_code}: {message}")
        raise ApiError(message, status_code=response.status_code)

    async def _json(self, method: str, path: str, **kwargs) -> Any:
        response = await self._request(method, path, **kwargs)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Brand assets

    async def list_assets(self, client_id: int) -> List[BrandAsset]:
        records = await self._json('GET', f"/api/clients/{client_id}/assets")
        return _parse_records(records, parse_brand_asset, "asset")

    async def get_asset(self, client_id: int, asset_id: int) -> BrandAsset:
        record = await self._json('GET', f"/api/clients/{client_id}/brand-assets/{asset_id}")
        return parse_brand_asset(record)

    async def create_asset(self, client_id: int, name: str, category: str,
                           data: Dict[str, Any]) -> BrandAsset:
        payload = {'clientId': client_id, 'name': name, 'category': category, 'data': data}
        record = await self._json('POST', f"/api/clients/{client_id}/assets", json=payload)
        return parse_brand_asset(record)

    def _prepare(self, file: Union[str, Path, PreparedUpload]) -> PreparedUpload:
        if isinstance(file, PreparedUpload):
            self.validator.validate(file.file_name, file.size)
            return file
        return prepare_logo_upload(file, self.validator)

    async def upload_logo(self, client_id: int, path: Union[str, Path, PreparedUpload],
                          logo_type: str, name: Optional[str] = None) -> BrandAsset:
        """
        Upload a new logo as multipart form data.

        Raises:
            UploadValidationError: Before any request if the file is rejected
            ApiError: If the server rejects the upload
        """
        upload = self._prepare(path)
        logo_data = {
            'type': logo_type,
            'format': upload.metadata['format'],
            'fileName': upload.file_name,
            'hasDarkVariant': False,
        }
        form = {
            'name': name or f"{logo_type.replace('_', ' ').title()} Logo",
            'type': logo_type,
            'category': 'logo',
            'data': json.dumps(logo_data),
        }
        files = {'file': (upload.file_name, upload.content, upload.mime_type)}
        record = await self._json('POST', f"/api/clients/{client_id}/assets", data=form, files=files)
        logger.info(f"Uploaded {logo_type} logo for client {client_id}")
        return parse_brand_asset(record)

    async def update_asset(self, client_id: int, asset_id: int, data: Optional[Dict[str, Any]] = None, *,
                           file: Union[str, Path, PreparedUpload, None] = None,
                           variant: Optional[str] = None, name: Optional[str] = None) -> BrandAsset:
        """
        Update an asset's data, or replace one of its files.

        With ``file`` the request is multipart; ``variant="dark"`` targets the
        dark variant of a logo.
        """
        path = f"/api/clients/{client_id}/assets/{asset_id}"
        params = _variant_params(variant)

        if file is None:
            payload: Dict[str, Any] = {}
            if data is not None:
                payload['data'] = data
            if name is not None:
                payload['name'] = name
            record = await self._json('PATCH', path, params=params, json=payload)
            return parse_brand_asset(record)

        upload = self._prepare(file)
        form = {'category': 'logo'}
        if data is not None:
            form['data'] = json.dumps(data)
            if data.get('type'):
                form['type'] = data['type']
        if name is not None:
            form['name'] = name
        if params:
            form['isDarkVariant'] = 'true'
        files = {'file': (upload.file_name, upload.content, upload.mime_type)}
        record = await self._json('PATCH', path, params=params, data=form, files=files)
        return parse_brand_asset(record)

    async def upload_dark_variant(self, client_id: int, asset_id: int,
                                  path: Union[str, Path, PreparedUpload], logo_type: str) -> BrandAsset:
        upload = self._prepare(path)
        data = {
            'type': logo_type,
            'format': upload.metadata.get('format', Path(upload.file_name).suffix.lstrip('.').lower()),
            'hasDarkVariant': True,
            'isDarkVariant': True,
        }
        name = f"{logo_type.replace('_', ' ').title()} Logo (Dark)"
        return await self.update_asset(client_id, asset_id, data, file=upload,
                                       variant=Variant.DARK.value, name=name)

    async def delete_asset(self, client_id: int, asset_id: int, variant: Optional[str] = None) -> None:
        await self._request('DELETE', f"/api/clients/{client_id}/assets/{asset_id}",
                            params=_variant_params(variant))

    async def update_description(self, client_id: int, asset_id: int, description: str,
                                 variant: Optional[str] = None) -> Any:
        return await self._json(
            'PATCH',
            f"/api/clients/{client_id}/brand-assets/{asset_id}/description",
            params=_variant_params(variant),
            json={'description': description},
        )

    async def fetch_asset_file(self, asset_id: int, client_id: int, **url_options) -> bytes:
        """Download an asset file; accepts the keyword options of get_secure_asset_url."""
        return await self.fetch_url(get_secure_asset_url(asset_id, client_id, **url_options))

    async def fetch_url(self, url: str) -> bytes:
        response = await self._request('GET', url)
        return response.content

    # Personas

    async def list_personas(self, client_id: int) -> List[UserPersona]:
        records = await self._json('GET', f"/api/clients/{client_id}/personas")
        return _parse_records(records, parse_persona, "persona")

    async def create_persona(self, persona: UserPersona) -> UserPersona:
        record = await self._json('POST', f"/api/clients/{persona.client_id}/personas",
                                  json=persona_to_payload(persona))
        return parse_persona(record)

    async def update_persona(self, persona: UserPersona) -> UserPersona:
        if persona.id is None:
            raise ValueError("Cannot update a persona without an id")
        record = await self._json('PATCH', f"/api/clients/{persona.client_id}/personas/{persona.id}",
                                  json=persona_to_payload(persona))
        return parse_persona(record)

    async def delete_persona(self, client_id: int, persona_id: int) -> None:
        await self._request('DELETE', f"/api/clients/{client_id}/personas/{persona_id}")

    # Fonts

    async def list_google_fonts(self) -> List[Dict[str, Any]]:
        body = await self._json('GET', "/api/google-fonts")
        if isinstance(body, dict):
            return body.get('items', body.get('fonts', []))
        return body or []

    # Hidden sections

    async def list_hidden_sections(self, client_id: int) -> List[HiddenSection]:
        records = await self._json('GET', f"/api/clients/{client_id}/hidden-sections")
        return _parse_records(records, parse_hidden_section, "hidden section")

    async def add_hidden_section(self, client_id: int, section_type: str) -> Optional[HiddenSection]:
        record = await self._json('POST', f"/api/clients/{client_id}/hidden-sections",
                                  json={'sectionType': section_type})
        return parse_hidden_section(record) if record else None

    async def remove_hidden_section(self, client_id: int, section_type: str) -> None:
        await self._request('DELETE', f"/api/clients/{client_id}/hidden-sections/{section_type}")
