import threading

import pytest
from wordduel.session import BackgroundRunner


def test_current_generation_result_is_delivered():
    runner = BackgroundRunner()
    got = []
    try:
        fut = runner.submit(lambda a, b: a + b, 2, 3,
                            on_result=lambda token, r: got.append((token, r)))
        assert fut.result(timeout=5) == 5
        assert got == [(runner.generation, 5)]
    finally:
        runner.shutdown()


def test_stale_result_is_discarded():
    runner = BackgroundRunner()
    gate = threading.Event()
    got = []

    def job():
        gate.wait(5)
        return "late"

    try:
        old = runner.generation
        fut = runner.submit(job, on_result=lambda token, r: got.append(r))
        new = runner.mint()
        assert new != old
        assert not runner.is_current(old)
        gate.set()
        # the job still finishes; only its delivery is dropped
        assert fut.result(timeout=5) == "late"
        assert got == []
    finally:
        runner.shutdown()


def test_generations_are_unique_across_runners():
    a, b = BackgroundRunner(), BackgroundRunner()
    try:
        assert a.generation != b.generation
    finally:
        a.shutdown()
        b.shutdown()


def test_shutdown_retires_token_and_rejects_work():
    runner = BackgroundRunner()
    token = runner.generation
    runner.shutdown()
    assert not runner.is_current(token)
    with pytest.raises(RuntimeError):
        runner.submit(lambda: None)
    runner.shutdown()


def test_job_errors_stay_on_the_future():
    runner = BackgroundRunner()
    got = []

    def boom():
        raise ValueError("bad")

    try:
        fut = runner.submit(boom, on_result=lambda token, r: got.append(r))
        with pytest.raises(ValueError):
            fut.result(timeout=5)
        assert got == []
    finally:
        runner.shutdown()
