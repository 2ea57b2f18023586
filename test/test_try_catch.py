import asyncio
import inspect
import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from tryresult import ArgumentShapeError, Err, Ok, UnexpectedThrowError, to_error, try_catch


class AnticipatedError(Exception):
    pass


def only_expected(e: BaseException) -> BaseException:
    if str(e) == "expected error":
        return AnticipatedError()
    raise e


def fail(message: str):
    raise ValueError(message)


async def reject(message: str):
    await asyncio.sleep(0)
    raise ValueError(message)


async def resolve(value):
    await asyncio.sleep(0)
    return value


def test_sync_value():
    r = try_catch(lambda: "test")
    assert r == Ok("test")
    assert r.error is None


def test_sync_none():
    r = try_catch(lambda: None)
    assert r == Ok(None)


def test_sync_raise():
    r = try_catch(lambda: fail("test"))
    assert isinstance(r, Err)
    assert r.value is None
    assert isinstance(r.error, ValueError)
    assert str(r.error) == "test"


def test_sync_raise_is_never_deferred():
    def boom():
        raise RuntimeError("early")

    r = try_catch(boom, lambda e: AnticipatedError(str(e)))
    assert not inspect.isawaitable(r)
    assert isinstance(r.error, AnticipatedError)


def test_sync_transform_reraise():
    with pytest.raises(ValueError, match="other"):
        try_catch(lambda: fail("other"), only_expected)
    r = try_catch(lambda: fail("expected error"), only_expected)
    assert isinstance(r.error, AnticipatedError)


def test_base_exceptions_pass_through():
    def interrupt():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        try_catch(interrupt)


@pytest.mark.asyncio
async def test_async_value():
    deferred = try_catch(lambda: resolve("test"))
    assert inspect.iscoroutine(deferred)
    r = await deferred
    assert r == Ok("test")


@pytest.mark.asyncio
async def test_async_function_returning_none():
    r = await try_catch(lambda: asyncio.sleep(0))
    assert r == Ok(None)


@pytest.mark.asyncio
async def test_async_reject():
    r = await try_catch(lambda: reject("test"))
    assert isinstance(r, Err)
    assert r.value is None
    assert isinstance(r.error, ValueError)
    assert str(r.error) == "test"


@pytest.mark.asyncio
async def test_async_transform():
    r = await try_catch(lambda: reject("expected error"), only_expected)
    assert not r
    assert isinstance(r.error, AnticipatedError)
    assert type(r.error).__name__ == "AnticipatedError"

    with pytest.raises(ValueError, match="unexpected error"):
        await try_catch(lambda: reject("unexpected error"), only_expected)


@pytest.mark.asyncio
async def test_asyncio_future():
    loop = asyncio.get_running_loop()
    future = loop.create_future()
    loop.call_soon(future.set_result, 42)
    assert await try_catch(lambda: future) == Ok(42)

    failed = loop.create_future()
    loop.call_soon(failed.set_exception, KeyError("missing"))
    r = await try_catch(lambda: failed)
    assert isinstance(r.error, KeyError)


@pytest.mark.asyncio
async def test_thread_future():
    with ThreadPoolExecutor(max_workers=1) as pool:
        assert await try_catch(lambda: pool.submit(pow, 2, 10)) == Ok(1024)
        r = await try_catch(lambda: pool.submit(fail, "in thread"))
    assert str(r.error) == "in thread"


@pytest.mark.asyncio
async def test_cancellation_passes_through():
    task = asyncio.ensure_future(try_catch(lambda: asyncio.sleep(10)))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_independent_calls():
    results = await asyncio.gather(
        try_catch(lambda: resolve(1)),
        try_catch(lambda: reject("two")),
        try_catch(lambda: resolve(3)),
    )
    assert [bool(r) for r in results] == [True, False, True]
    assert results[0].value == 1 and results[2].value == 3


def test_to_error_keeps_exceptions():
    e = RuntimeError("x")
    assert to_error(e) is e


def test_to_error_wraps_other_values():
    e = to_error("x")
    assert isinstance(e, UnexpectedThrowError)
    assert e.value == "x"
    assert str(e) == "Unexpected throw value 'x' of type str"
    assert e.__traceback__ is not None
    assert str(to_error(3)) == "Unexpected throw value '3' of type int"


def test_captured_errors_are_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="tryresult")
    try_catch(lambda: fail("logged"))
    assert "captured `ValueError`: logged" in caplog.text


class Opaque(Exception):
    def __str__(self):
        raise RuntimeError("no message")


def raise_opaque():
    raise Opaque()


async def reject_opaque():
    await asyncio.sleep(0)
    raise Opaque()


def test_unprintable_error_is_captured():
    r = try_catch(raise_opaque)
    assert isinstance(r.error, Opaque)


@pytest.mark.asyncio
async def test_unprintable_error_is_captured_async():
    r = await try_catch(reject_opaque)
    assert isinstance(r.error, Opaque)


def test_transform_must_return_an_exception():
    with pytest.raises(ArgumentShapeError):
        try_catch(lambda: fail("x"), lambda e: 1)
