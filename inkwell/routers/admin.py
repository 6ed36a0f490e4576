"""Administrative endpoints."""

import logging
import secrets

from fastapi import APIRouter, Depends, Header, HTTPException
from starlette.concurrency import run_in_threadpool

from inkwell.config import Settings
from inkwell.dependencies import get_app_settings, get_blog
from inkwell.errors import LoadError, ReloadInProgressError
from inkwell.models.article import ReloadResult
from inkwell.services.blog import Blog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _check_admin_key(x_admin_key: str, settings: Settings) -> None:
    if not settings.admin_key or not secrets.compare_digest(
        x_admin_key.encode(), settings.admin_key.encode()
    ):
        logger.warning("Unauthenticated access attempt to the admin API")
        raise HTTPException(status_code=403, detail="Invalid admin key")


@router.post("/reload", response_model=ReloadResult)
async def reload_blog(
    x_admin_key: str = Header(),
    blog: Blog = Depends(get_blog),
    settings: Settings = Depends(get_app_settings),
):
    """Rescan all articles. Protected by the admin key.

    The reload runs in a worker thread; readers keep being served from the
    current snapshot until the new one is complete.
    """
    _check_admin_key(x_admin_key, settings)

    try:
        return await run_in_threadpool(blog.load, blocking=False)
    except ReloadInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except LoadError as e:
        logger.error("Reload failed, keeping previous articles: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e
