from pydantic import BaseModel, validator

from utils.users import validate_user_name


class NoteCreate(BaseModel):
    ayah_id: int
    user_name: str
    note_text: str

    @validator('user_name')
    def validate_user(cls, v):
        return validate_user_name(v)
