from functools import partial

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request, status
from fastapi.responses import JSONResponse

from db.database import get_db_path
from utils.importer import run_import
from utils.jobs import JobAlreadyRunning

router = APIRouter()


@router.post("/populate-database")
async def populate_database(request: Request, background_tasks: BackgroundTasks):
    """Start the corpus import and return at once; poll /status for the outcome.

    No "already populated" check is made here, unlike `main.py --init`.
    """
    job = request.app.state.import_job
    try:
        job.start()
    except JobAlreadyRunning as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    background_tasks.add_task(job.run, partial(run_import, get_db_path()))
    return JSONResponse(
        {"message": "Database population started.", "status": job.status},
        status_code=status.HTTP_202_ACCEPTED,
    )


@router.get("/populate-database/status")
async def populate_status(request: Request):
    return request.app.state.import_job.snapshot()
