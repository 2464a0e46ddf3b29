from fastapi import APIRouter

from .features.lookup_guest.router import router as lookup_guest_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(lookup_guest_router)
router.include_router(submit_rsvp_router)
