import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from staticapi.api.deps import get_settings, get_static_repo, get_teammate_repo
from staticapi.core.config import Settings
from staticapi.core.values import is_valid_guid
from staticapi.models.teammate import StaticTeammate
from staticapi.repository.statics import StaticRepository
from staticapi.repository.teammates import TeammateRepository
from staticapi.schemas.payload import InvalidJSON, fold_keys, load_json
from staticapi.schemas.static import StaticCreate, StaticCreateOut
from staticapi.schemas.teammate import TeammateIn, TeammateOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["statics"])

INTERNAL_ERROR = "Internal server error"


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _query_value(request: Request, name: str) -> str | None:
    # query keys match ignoring case: ?GUID= works like ?guid=
    for key, value in request.query_params.multi_items():
        if key.lower() == name:
            return value
    return None


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR
    )


@router.post("/static", status_code=status.HTTP_201_CREATED, response_model=StaticCreateOut)
async def create_static(
    request: Request,
    repo: StaticRepository = Depends(get_static_repo),
):
    try:
        data = load_json(await request.body())
        if data is not None and not isinstance(data, dict):
            raise InvalidJSON("expected an object")
        payload = (
            StaticCreate.model_validate(fold_keys(data, StaticCreate))
            if data is not None
            else None
        )
    except (InvalidJSON, ValidationError) as e:
        logger.warning("POST /static: Invalid JSON: %s", e)
        raise _bad_request("Invalid JSON") from e

    if payload is None or not (payload.name or "").strip():
        logger.warning("POST /static: Missing or invalid name")
        raise _bad_request("Missing or invalid name")

    try:
        static = await repo.create(name=payload.name)
    except Exception as e:
        logger.exception("POST /static: Unexpected error")
        raise _internal_error() from e

    logger.info("POST /static: created static %s", static.guid)
    return StaticCreateOut(guid=static.guid)


@router.get("/static", response_model=list[TeammateOut])
async def list_teammates(
    request: Request,
    repo: TeammateRepository = Depends(get_teammate_repo),
    settings: Settings = Depends(get_settings),
):
    guid = _query_value(request, "guid")

    if not guid:
        logger.warning("GET /static: Missing guid parameter")
        raise _bad_request("Missing guid parameter")

    if not is_valid_guid(guid):
        logger.warning("GET /static: Invalid guid format '%s'", guid)
        raise _bad_request("Invalid guid format")

    try:
        teammates = await repo.list_by_static(guid)
    except Exception as e:
        logger.exception("GET /static: Error fetching teammates for guid %s", guid)
        raise _internal_error() from e

    if not teammates and settings.not_found_on_empty_list:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No teammates found for the provided guid",
        )

    return [TeammateOut.model_validate(t) for t in teammates]


@router.post("/staticmember")
async def upsert_teammate(
    request: Request,
    teammates: TeammateRepository = Depends(get_teammate_repo),
    statics: StaticRepository = Depends(get_static_repo),
    settings: Settings = Depends(get_settings),
):
    try:
        data = load_json(await request.body())
        if data is None or not isinstance(data, dict):
            logger.warning("POST /staticmember: Invalid payload (%s)", type(data).__name__)
            raise _bad_request("Invalid payload")
        payload = TeammateIn.model_validate(fold_keys(data, TeammateIn))
    except (InvalidJSON, ValidationError) as e:
        logger.warning("POST /staticmember: Invalid JSON: %s", e)
        raise _bad_request("Invalid JSON") from e

    if not payload.name.strip():
        logger.warning("POST /staticmember: Invalid payload (empty name)")
        raise _bad_request("Invalid payload")

    try:
        if settings.enforce_static_exists and not await statics.exists(payload.static_guid):
            logger.warning(
                "POST /staticmember: Static %s does not exist", payload.static_guid
            )
            raise _bad_request("Static with provided StaticGUID does not exist")

        _, created = await teammates.upsert(StaticTeammate(**payload.model_dump()))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("POST /staticmember: Unexpected error")
        raise _internal_error() from e

    if created:
        return PlainTextResponse("Inserted", status_code=status.HTTP_201_CREATED)
    return PlainTextResponse("Updated", status_code=status.HTTP_200_OK)
