# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""A read cursor over pending input."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from collections.abc import Container
from types import TracebackType
from typing import Optional

# Third-party Modules:
from knickknacks.typedef import Self

# Local Modules:
from .typedef import BytesLike


class ByteScanner:
	"""
	Scans a bytes-like object one byte at a time.

	The scanned object is viewed, never copied. The number of consumed bytes is
	available from `position`, so that the owner of the underlying buffer knows how
	many bytes may be discarded once scanning is done.
	"""

	def __init__(self, data: BytesLike) -> None:
		"""
		Defines the constructor.

		Args:
			data: The bytes to be scanned.
		"""
		view: memoryview = memoryview(data)
		self._view: memoryview = view if view.format == "B" else view.cast("B")
		self._position: int = 0

	def __enter__(self) -> Self:
		return self

	def __exit__(
		self,
		exc_type: Optional[type[BaseException]],
		exc_value: Optional[BaseException],
		exc_traceback: Optional[TracebackType],
	) -> None:
		self.release()

	def __len__(self) -> int:
		return len(self._view)

	@property
	def position(self) -> int:
		"""The number of bytes consumed so far."""
		return self._position

	@property
	def remaining(self) -> int:
		"""The number of bytes left to consume."""
		return len(self._view) - self._position

	@property
	def at_end(self) -> bool:
		"""True if every byte has been consumed, False otherwise."""
		return self._position >= len(self._view)

	def peek(self) -> Optional[int]:
		"""
		Returns the next byte without consuming it.

		Returns:
			The next byte, or None if the input is exhausted.
		"""
		if self._position >= len(self._view):
			return None
		return self._view[self._position]

	def advance(self) -> Optional[int]:
		"""
		Consumes the next byte.

		Returns:
			The consumed byte, or None if the input is exhausted.
		"""
		if self._position >= len(self._view):
			return None
		byte: int = self._view[self._position]
		self._position += 1
		return byte

	def advance_until(self, stops: Container[int]) -> memoryview:
		"""
		Consumes bytes up to, but not including, the first byte found in stops.

		Note:
			The returned view shares memory with the scanned object, and
			must not be kept after the scanned object is modified.

		Args:
			stops: The byte values which end the run.

		Returns:
			A view of the consumed run, which may be empty.
		"""
		start: int = self._position
		end: int = len(self._view)
		position: int = start
		while position < end and self._view[position] not in stops:
			position += 1
		self._position = position
		return self._view[start:position]

	def release(self) -> None:
		"""Releases the view of the scanned object."""
		self._view.release()
