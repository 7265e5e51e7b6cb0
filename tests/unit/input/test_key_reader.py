"""Raw-key decoding tests.

Covers ESC timing, CSI/SS3 sequences with modifier parameters, Alt prefixes,
and control-byte mapping. Bytes are fed through an ``os.pipe``.
"""

from __future__ import annotations

import os
import time
import unittest

from blake.input import reader
from blake.input.binding import FKey, KeyBinding, KeyCode


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader._PENDING_BYTES.clear()

    def _read_all(self, data: bytes, count: int = 1) -> list[KeyBinding | None]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, data)
            return [reader.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def _read_one(self, data: bytes) -> KeyBinding | None:
        return self._read_all(data)[0]

    def test_timeout_without_input_returns_none(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            self.assertIsNone(reader.read_key(read_fd, timeout_ms=10))
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_escape_without_second_keypress(self) -> None:
        started = time.monotonic()
        key = self._read_one(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(key, KeyBinding(KeyCode.ESCAPE))
        self.assertLess(elapsed, 0.2)

    def test_printable_characters(self) -> None:
        self.assertEqual(self._read_one(b"j"), KeyBinding("j"))
        self.assertEqual(self._read_one(b"G"), KeyBinding.of("G", shift=True))
        self.assertEqual(self._read_one("é".encode("utf-8")), KeyBinding("é"))

    def test_arrow_and_navigation_sequences(self) -> None:
        cases = {
            b"\x1b[A": KeyCode.UP,
            b"\x1b[B": KeyCode.DOWN,
            b"\x1b[C": KeyCode.RIGHT,
            b"\x1b[D": KeyCode.LEFT,
            b"\x1b[H": KeyCode.HOME,
            b"\x1b[F": KeyCode.END,
            b"\x1b[1~": KeyCode.HOME,
            b"\x1b[4~": KeyCode.END,
            b"\x1b[5~": KeyCode.PAGE_UP,
            b"\x1b[6~": KeyCode.PAGE_DOWN,
            b"\x1b[2~": KeyCode.INSERT,
            b"\x1b[3~": KeyCode.DELETE,
            b"\x1bOA": KeyCode.UP,
            b"\x1bOH": KeyCode.HOME,
        }
        for data, expected in cases.items():
            with self.subTest(data=data):
                self.assertEqual(self._read_one(data), KeyBinding(expected))

    def test_function_keys(self) -> None:
        cases = {
            b"\x1bOP": 1,
            b"\x1bOS": 4,
            b"\x1b[15~": 5,
            b"\x1b[17~": 6,
            b"\x1b[21~": 10,
            b"\x1b[24~": 12,
        }
        for data, number in cases.items():
            with self.subTest(data=data):
                self.assertEqual(self._read_one(data), KeyBinding(FKey(number)))

    def test_modifier_parameters(self) -> None:
        self.assertEqual(self._read_one(b"\x1b[1;5A"), KeyBinding.of(KeyCode.UP, ctrl=True))
        self.assertEqual(self._read_one(b"\x1b[1;3B"), KeyBinding.of(KeyCode.DOWN, alt=True))
        self.assertEqual(self._read_one(b"\x1b[1;2C"), KeyBinding.of(KeyCode.RIGHT, shift=True))
        self.assertEqual(self._read_one(b"\x1b[5;5~"), KeyBinding.of(KeyCode.PAGE_UP, ctrl=True))
        self.assertEqual(self._read_one(b"\x1b[Z"), KeyBinding.of(KeyCode.TAB, shift=True))

    def test_control_bytes(self) -> None:
        self.assertEqual(self._read_one(b"\r"), KeyBinding(KeyCode.ENTER))
        self.assertEqual(self._read_one(b"\n"), KeyBinding(KeyCode.ENTER))
        self.assertEqual(self._read_one(b"\t"), KeyBinding(KeyCode.TAB))
        self.assertEqual(self._read_one(b"\x7f"), KeyBinding(KeyCode.BACKSPACE))
        self.assertEqual(self._read_one(b"\x04"), KeyBinding.of("d", ctrl=True))
        self.assertEqual(self._read_one(b"\x15"), KeyBinding.of("u", ctrl=True))
        self.assertEqual(self._read_one(b"\x03"), KeyBinding.of("c", ctrl=True))

    def test_escape_prefix_reports_alt(self) -> None:
        self.assertEqual(self._read_one(b"\x1bx"), KeyBinding.of("x", alt=True))
        self.assertEqual(self._read_one(b"\x1b\x04"), KeyBinding.of("d", ctrl=True, alt=True))

    def test_double_escape_yields_two_escapes(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b\x1b", count=2),
            [KeyBinding(KeyCode.ESCAPE), KeyBinding(KeyCode.ESCAPE)],
        )

    def test_mouse_report_is_dropped(self) -> None:
        first, second = self._read_all(b"\x1b[<0;10;5Mj", count=2)
        self.assertIsNone(first)
        self.assertEqual(second, KeyBinding("j"))


if __name__ == "__main__":
    unittest.main()
