from fastapi import APIRouter, Depends

from db.database import get_db
from models.progress import ProgressUpdate
from utils.progress import set_memorization

router = APIRouter()


@router.post("/progress")
async def update_progress(payload: ProgressUpdate, conn=Depends(get_db)):
    set_memorization(
        conn,
        ayah_id=payload.ayah_id,
        user_name=payload.user_name,
        is_memorized=payload.is_memorized,
    )
    return {"message": "Progress updated."}
