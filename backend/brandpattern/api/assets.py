"""/api/assets: upload, list and remove shape assets."""

from __future__ import annotations

import base64
import binascii
import logging

from fastapi import APIRouter, Depends

from brandpattern.api.errors import to_http
from brandpattern.assets.normalizer import NormalizationFailure, UploadedFile
from brandpattern.dependencies import get_session
from brandpattern.errors import PatternError
from brandpattern.models.requests import UploadFileIn, UploadRequest
from brandpattern.models.responses import AssetListResponse, AssetOut, FailureOut, UploadResponse
from brandpattern.session import PatternSession

router = APIRouter(prefix="/assets")
logger = logging.getLogger(__name__)


def _to_upload(item: UploadFileIn) -> UploadedFile:
    if item.encoding == "base64":
        content = base64.b64decode(item.content, validate=True)
    else:
        content = item.content.encode("utf-8")
    return UploadedFile(name=item.name, media_type=item.media_type, content=content)


@router.get("", response_model=AssetListResponse)
async def list_assets(session: PatternSession = Depends(get_session)) -> AssetListResponse:
    return AssetListResponse(assets=[AssetOut.from_asset(a) for a in session.assets])


@router.post("", response_model=UploadResponse)
async def upload_assets(req: UploadRequest, session: PatternSession = Depends(get_session)) -> UploadResponse:
    uploads: list[UploadedFile] = []
    failures: list[NormalizationFailure] = []
    for item in req.files:
        try:
            uploads.append(_to_upload(item))
        except binascii.Error as e:
            logger.warning("Skipping %s: invalid base64 content", item.name)
            failures.append(NormalizationFailure(item.name, "AssetDecodeFailure", f"Could not decode {item.name}: {e}"))

    report = await session.upload(uploads)
    failures.extend(report.failures)

    return UploadResponse(
        assets=[AssetOut.from_asset(a) for a in report.assets],
        failures=[FailureOut.from_failure(f) for f in failures],
    )


@router.delete("/{asset_id}", response_model=AssetOut)
async def remove_asset(asset_id: str, session: PatternSession = Depends(get_session)) -> AssetOut:
    try:
        asset = session.remove_asset(asset_id)
    except PatternError as e:
        raise to_http(e) from e
    return AssetOut.from_asset(asset)
