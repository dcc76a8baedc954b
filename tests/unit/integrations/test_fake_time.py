"""Tests for FakeTime."""

from mcp_gemini_cli.integrations.time.fake import FakeTime


async def test_sleep_records_and_advances() -> None:
    time = FakeTime(start=10.0)

    await time.sleep(1.5)
    await time.sleep(0.5)

    assert time.sleep_calls == [1.5, 0.5]
    assert time.monotonic() == 12.0


def test_advance_does_not_record_sleep() -> None:
    time = FakeTime()

    time.advance(30.0)

    assert time.monotonic() == 30.0
    assert time.sleep_calls == []
