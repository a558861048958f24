# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from unittest import TestCase
from unittest.mock import Mock, patch

# Telnet Codec Modules:
from telnetcodec.events import (
	CharsetAccepted,
	CharsetRejected,
	CharsetRequest,
	CharsetTTableRejected,
	Subnegotiate,
	Unknown,
	WindowSize,
)
from telnetcodec.options import TelnetOption
from telnetcodec.subnegotiation import SubnegotiationParser


CHARSET: TelnetOption = TelnetOption.CHARSET


class TestSubnegotiationParser(TestCase):
	def setUp(self) -> None:
		self.parser: SubnegotiationParser = SubnegotiationParser()

	def tearDown(self) -> None:
		del self.parser

	def test_naws(self) -> None:
		self.assertEqual(self.parser.parse(TelnetOption.NAWS, b"\x00\x50\x00\x18"), WindowSize(80, 24))
		self.assertEqual(self.parser.parse(31, b"\xff\xff\x00\x01"), WindowSize(65535, 1))

	@patch("telnetcodec.subnegotiation.logger")
	def test_naws_when_invalid_payload(self, mock_logger: Mock) -> None:
		self.assertEqual(
			self.parser.parse(TelnetOption.NAWS, b"\x00\x50\x00"),
			Unknown(b"\x00\x50\x00", TelnetOption.NAWS),
		)
		mock_logger.warning.assert_called_once()

	def test_charset_request(self) -> None:
		self.assertEqual(
			self.parser.parse(CHARSET, b"\x01 UTF-8 US-ASCII"), CharsetRequest((b"UTF-8", b"US-ASCII"))
		)
		# Any separator may be used, and empty names are skipped.
		self.assertEqual(
			self.parser.parse(CHARSET, b"\x01;UTF-8;;US-ASCII;"), CharsetRequest((b"UTF-8", b"US-ASCII"))
		)

	@patch("telnetcodec.subnegotiation.logger")
	def test_charset_request_without_names(self, mock_logger: Mock) -> None:
		self.assertEqual(self.parser.parse(CHARSET, b"\x01"), Unknown(b"\x01", CHARSET))
		self.assertEqual(self.parser.parse(CHARSET, b"\x01;;"), Unknown(b"\x01;;", CHARSET))
		self.assertEqual(mock_logger.warning.call_count, 2)

	def test_charset_responses(self) -> None:
		self.assertEqual(self.parser.parse(CHARSET, b"\x02UTF-8"), CharsetAccepted(b"UTF-8"))
		self.assertEqual(self.parser.parse(CHARSET, b"\x03"), CharsetRejected())
		self.assertEqual(self.parser.parse(CHARSET, b"\x05"), CharsetTTableRejected())

	@patch("telnetcodec.subnegotiation.logger")
	def test_charset_when_unknown_status(self, mock_logger: Mock) -> None:
		self.assertEqual(self.parser.parse(CHARSET, b"\x04table"), Unknown(b"\x04table", CHARSET))
		self.assertEqual(self.parser.parse(CHARSET, b""), Unknown(b"", CHARSET))
		self.assertEqual(mock_logger.warning.call_count, 2)

	def test_unhandled(self) -> None:
		self.assertEqual(self.parser.parse(200, b"payload"), Unknown(b"payload", 200))

	def test_register(self) -> None:
		handler: Mock = Mock(return_value=Subnegotiate(TelnetOption.TTYPE, b"\x00xterm"))
		self.parser.register(24, handler)
		self.assertEqual(
			self.parser.parse(TelnetOption.TTYPE, b"\x00xterm"), Subnegotiate(TelnetOption.TTYPE, b"\x00xterm")
		)
		handler.assert_called_once_with(TelnetOption.TTYPE, b"\x00xterm")
