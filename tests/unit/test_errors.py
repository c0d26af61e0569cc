import pytest

from blobwriter_poc.utils.errors import ByteMismatchError, HarnessError, LengthMismatchError


class TestLengthMismatchError:

    def test_stores_lengths(self):
        exc = LengthMismatchError(10, 12)
        assert exc.expected_length == 10
        assert exc.actual_length == 12

    def test_default_message_mentions_both_lengths(self):
        msg = str(LengthMismatchError(10, 12))
        assert "buffer lengths differ" in msg
        assert "10" in msg and "12" in msg

    def test_custom_message(self):
        assert str(LengthMismatchError(1, 2, message="length mismatch")) == "length mismatch"

    def test_is_harness_error(self):
        assert issubclass(LengthMismatchError, HarnessError)


class TestByteMismatchError:

    def test_stores_offset_and_bytes(self):
        exc = ByteMismatchError(offset=7, expected_byte=0x00, actual_byte=0xff)
        assert exc.offset == 7
        assert exc.expected_byte == 0
        assert exc.actual_byte == 255

    def test_message_format(self):
        msg = str(ByteMismatchError(7, 0x0a, 0xff))
        assert msg == "buffers differ at offset 7: expected 0x0a, got 0xff"

    def test_catchable_as_harness_error(self):
        with pytest.raises(HarnessError):
            raise ByteMismatchError(0, 1, 2)
