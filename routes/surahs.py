from fastapi import APIRouter, Depends

from config import get_recognized_users
from db.database import get_db
from utils.progress import list_surahs, surah_progress_summary, surah_verses_with_progress

router = APIRouter()


@router.get("/surahs")
async def get_surahs(conn=Depends(get_db)):
    return {"surahs": list_surahs(conn)}


@router.get("/surah/{surah_id}/progress")
async def get_surah_progress(surah_id: int, conn=Depends(get_db)):
    """Total verses and per-user memorized counts. Unknown ids give zeros."""
    return surah_progress_summary(conn, surah_id, get_recognized_users())


@router.get("/surah/{surah_id}/verses")
async def get_surah_verses(surah_id: int, conn=Depends(get_db)):
    return {"verses": surah_verses_with_progress(conn, surah_id, get_recognized_users())}


@router.get("/users")
async def get_users():
    return {"users": get_recognized_users()}
