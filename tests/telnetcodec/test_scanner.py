# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from unittest import TestCase

# Telnet Codec Modules:
from telnetcodec.scanner import ByteScanner


class TestByteScanner(TestCase):
	def test_advance_and_peek(self) -> None:
		scanner: ByteScanner = ByteScanner(b"ab")
		self.assertEqual(len(scanner), 2)
		self.assertEqual(scanner.peek(), ord("a"))
		self.assertEqual(scanner.position, 0)
		self.assertEqual(scanner.advance(), ord("a"))
		self.assertEqual((scanner.position, scanner.remaining), (1, 1))
		self.assertFalse(scanner.at_end)
		self.assertEqual(scanner.advance(), ord("b"))
		self.assertTrue(scanner.at_end)
		self.assertIsNone(scanner.peek())
		self.assertIsNone(scanner.advance())
		self.assertEqual(scanner.position, 2)

	def test_advance_until(self) -> None:
		with ByteScanner(b"hello\r\nworld") as scanner:
			self.assertEqual(bytes(scanner.advance_until({13, 10})), b"hello")
			self.assertEqual(scanner.position, 5)
			# Already at a stop byte.
			self.assertEqual(bytes(scanner.advance_until({13})), b"")
			self.assertEqual(scanner.advance(), 13)
			self.assertEqual(scanner.advance(), 10)
			self.assertEqual(bytes(scanner.advance_until({13})), b"world")
			self.assertTrue(scanner.at_end)

	def test_buffer_can_be_resized_after_scanning(self) -> None:
		buffer: bytearray = bytearray(b"hello")
		with ByteScanner(buffer) as scanner:
			scanner.advance_until({ord("l")})
			consumed: int = scanner.position
		del buffer[:consumed]
		self.assertEqual(buffer, bytearray(b"llo"))

	def test_memoryview_of_wider_items_is_scanned_as_bytes(self) -> None:
		view: memoryview = memoryview(b"\x01\x00\x02\x00").cast("H")
		with ByteScanner(view) as scanner:
			self.assertEqual(len(scanner), 4)
			self.assertEqual(scanner.advance(), 1)
