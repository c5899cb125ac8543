from fastapi import APIRouter, Depends

from db.database import get_db
from models.note import NoteCreate
from utils.progress import add_note, list_notes

router = APIRouter()


@router.get("/ayah/{ayah_id}/notes")
async def get_notes(ayah_id: int, conn=Depends(get_db)):
    """Notes for a verse, newest first."""
    return {"notes": list_notes(conn, ayah_id)}


@router.post("/notes")
async def create_note(payload: NoteCreate, conn=Depends(get_db)):
    note_id = add_note(
        conn,
        ayah_id=payload.ayah_id,
        user_name=payload.user_name,
        note_text=payload.note_text,
    )
    return {"message": "Note added.", "note_id": note_id}
