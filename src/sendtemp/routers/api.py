from fastapi import APIRouter

from sendtemp.routers import status

router = APIRouter()

# include sub-routers
router.include_router(status.router)
