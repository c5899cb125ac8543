import pytest

from utils.jobs import FAILED, IDLE, RUNNING, SUCCEEDED, ImportJob, JobAlreadyRunning


def test_job_starts_idle():
    job = ImportJob()

    assert job.status == IDLE
    assert job.snapshot()["started_at"] is None


def test_job_records_success():
    job = ImportJob()
    job.start()
    assert job.status == RUNNING

    job.run(lambda: {"surahs": 1})

    snapshot = job.snapshot()
    assert snapshot["status"] == SUCCEEDED
    assert snapshot["result"] == {"surahs": 1}
    assert snapshot["finished_at"] is not None


def test_job_records_failure_message():
    job = ImportJob()
    job.start()

    def boom():
        raise RuntimeError("download failed")

    job.run(boom)

    snapshot = job.snapshot()
    assert snapshot["status"] == FAILED
    assert snapshot["error"] == "download failed"


def test_job_cannot_start_twice_while_running():
    job = ImportJob()
    job.start()

    with pytest.raises(JobAlreadyRunning):
        job.start()


def test_job_can_restart_after_finishing():
    job = ImportJob()
    job.start()
    job.run(lambda: None)

    job.start()

    snapshot = job.snapshot()
    assert snapshot["status"] == RUNNING
    assert snapshot["finished_at"] is None


def test_snapshot_is_a_copy():
    job = ImportJob()
    snapshot = job.snapshot()
    snapshot["status"] = "tampered"

    assert job.status == IDLE
