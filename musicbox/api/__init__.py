"""API routes mounted under /api."""

from fastapi import APIRouter

from musicbox.api import admin, auth, events, media, tracks

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(tracks.router, prefix="/tracks", tags=["tracks"])
router.include_router(media.router, tags=["media"])
router.include_router(events.router, prefix="/event", tags=["events"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
