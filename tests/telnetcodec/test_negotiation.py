# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from unittest import TestCase
from unittest.mock import Mock, patch

# Telnet Codec Modules:
from telnetcodec.events import Do, Dont, Will, Wont
from telnetcodec.negotiation import NegotiationResult, NegotiationState, OptionTable
from telnetcodec.options import TelnetOption
from telnetcodec.telnet_constants import DO, DONT, SE, WILL, WONT


ECHO: TelnetOption = TelnetOption.ECHO
NAWS: TelnetOption = TelnetOption.NAWS
TTYPE: TelnetOption = TelnetOption.TTYPE


class TestOptionTable(TestCase):
	def setUp(self) -> None:
		self.table: OptionTable = OptionTable()

	def tearDown(self) -> None:
		del self.table

	def test_defaults(self) -> None:
		self.assertEqual(self.table.local_options, {ECHO, TelnetOption.SGA})
		self.assertEqual(self.table.remote_options, {NAWS, TelnetOption.SGA})
		self.assertIs(self.table.local_state(ECHO), NegotiationState.DISABLED)
		self.assertIs(self.table.remote_state(NAWS), NegotiationState.DISABLED)
		self.assertEqual(repr(self.table.state(ECHO)), "<OptionState local=DISABLED remote=DISABLED>")

	def test_invalid_verb(self) -> None:
		with self.assertRaises(ValueError):
			self.table.request(SE, ECHO)
		with self.assertRaises(ValueError):
			self.table.apply(SE, ECHO)

	def test_peer_enables_supported_options(self) -> None:
		self.assertEqual(self.table.apply(DO, ECHO), NegotiationResult(Do(ECHO), Will(ECHO)))
		self.assertTrue(self.table.is_enabled_local(ECHO))
		self.assertEqual(self.table.apply(WILL, NAWS), NegotiationResult(Will(NAWS), Do(NAWS)))
		self.assertTrue(self.table.is_enabled_remote(NAWS))
		# Already enabled.
		self.assertEqual(self.table.apply(DO, ECHO), NegotiationResult(Do(ECHO)))
		self.assertEqual(self.table.apply(WILL, NAWS), NegotiationResult(Will(NAWS)))

	def test_peer_enables_unsupported_options(self) -> None:
		self.assertEqual(self.table.apply(DO, NAWS), NegotiationResult(Do(NAWS), Wont(NAWS)))
		self.assertIs(self.table.local_state(NAWS), NegotiationState.DISABLED)
		self.assertEqual(self.table.apply(WILL, TTYPE), NegotiationResult(Will(TTYPE), Dont(TTYPE)))
		self.assertIs(self.table.remote_state(TTYPE), NegotiationState.DISABLED)

	def test_peer_disables_options(self) -> None:
		self.table.apply(DO, ECHO)
		self.assertEqual(self.table.apply(DONT, ECHO), NegotiationResult(Dont(ECHO), Wont(ECHO)))
		self.assertIs(self.table.local_state(ECHO), NegotiationState.DISABLED)
		self.table.apply(WILL, NAWS)
		self.assertEqual(self.table.apply(WONT, NAWS), NegotiationResult(Wont(NAWS), Dont(NAWS)))
		self.assertIs(self.table.remote_state(NAWS), NegotiationState.DISABLED)
		# Already disabled.
		self.assertEqual(self.table.apply(WONT, NAWS), NegotiationResult(Wont(NAWS)))

	def test_custom_options(self) -> None:
		table: OptionTable = OptionTable(local_options=[200], remote_options=())
		option: TelnetOption = TelnetOption(200)
		self.assertEqual(table.apply(DO, 200), NegotiationResult(Do(option), Will(option)))
		self.assertEqual(table.apply(WILL, NAWS), NegotiationResult(Will(NAWS), Dont(NAWS)))

	@patch("telnetcodec.negotiation.logger")
	def test_local_request_completion(self, mock_logger: Mock) -> None:
		self.assertTrue(self.table.request(WILL, ECHO))
		self.assertIs(self.table.local_state(ECHO), NegotiationState.PENDING_ENABLE)
		mock_logger.debug.assert_called_once_with("Send to peer: IAC WILL ECHO")
		# Another request while pending is not sent.
		self.assertFalse(self.table.request(WILL, ECHO))
		mock_logger.warning.assert_called_once()
		self.assertEqual(self.table.apply(DO, ECHO), NegotiationResult(Do(ECHO)))
		self.assertIs(self.table.local_state(ECHO), NegotiationState.ENABLED)
		mock_logger.warning.reset_mock()
		self.assertFalse(self.table.request(WILL, ECHO))
		mock_logger.warning.assert_called_once_with(
			"Not sending IAC WILL ECHO: the option is already enabled on our side."
		)
		self.assertTrue(self.table.request(WONT, ECHO))
		self.assertIs(self.table.local_state(ECHO), NegotiationState.PENDING_DISABLE)
		self.assertEqual(self.table.apply(DONT, ECHO), NegotiationResult(Dont(ECHO)))
		self.assertIs(self.table.local_state(ECHO), NegotiationState.DISABLED)

	def test_local_request_refused(self) -> None:
		self.assertTrue(self.table.request(WILL, TTYPE))
		self.assertEqual(self.table.apply(DONT, TTYPE), NegotiationResult(Dont(TTYPE)))
		self.assertIs(self.table.local_state(TTYPE), NegotiationState.DISABLED)

	def test_remote_request_completion(self) -> None:
		self.assertTrue(self.table.request(DO, TTYPE))
		self.assertIs(self.table.remote_state(TTYPE), NegotiationState.PENDING_ENABLE)
		self.assertEqual(self.table.apply(WILL, TTYPE), NegotiationResult(Will(TTYPE)))
		self.assertTrue(self.table.is_enabled_remote(TTYPE))
		self.assertFalse(self.table.request(DO, TTYPE))
		self.assertTrue(self.table.request(DONT, TTYPE))
		self.assertEqual(self.table.apply(WONT, TTYPE), NegotiationResult(Wont(TTYPE)))
		self.assertIs(self.table.remote_state(TTYPE), NegotiationState.DISABLED)

	def test_remote_request_refused(self) -> None:
		self.assertTrue(self.table.request(DO, NAWS))
		self.assertEqual(self.table.apply(WONT, NAWS), NegotiationResult(Wont(NAWS)))
		self.assertIs(self.table.remote_state(NAWS), NegotiationState.DISABLED)

	@patch("telnetcodec.negotiation.logger")
	def test_disabling_disabled_option_is_not_sent(self, mock_logger: Mock) -> None:
		self.assertFalse(self.table.request(DONT, NAWS))
		mock_logger.warning.assert_called_once_with(
			"Not sending IAC DONT NAWS: the option is already disabled on peer's side."
		)

	@patch("telnetcodec.negotiation.logger")
	def test_enable_request_while_disabling(self, mock_logger: Mock) -> None:
		self.table.apply(DO, ECHO)
		self.table.request(WONT, ECHO)
		self.assertEqual(self.table.apply(DO, ECHO), NegotiationResult(Do(ECHO)))
		self.assertIs(self.table.local_state(ECHO), NegotiationState.DISABLED)
		mock_logger.warning.assert_called_once()

	def test_reset(self) -> None:
		self.table.apply(DO, ECHO)
		self.table.reset()
		self.assertIs(self.table.local_state(ECHO), NegotiationState.DISABLED)
