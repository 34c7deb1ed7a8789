"""
Undo/Redo for a MaskStore

Each committed edit (draft finalize, point edit, drag end, delete) records the
store state it replaced. Undo and redo swap that state back into the store
through set_snapshot, so listeners on the store (the interaction controller)
see a snapshot_restored event and can drop stale mode state.

Pointer-move updates are never committed, only the edit that ends them.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from constants import MAX_HISTORY_ENTRIES


@dataclass
class HistoryEntry:
	"""A store snapshot and the edit that moved away from it"""
	description: str
	snapshot: Dict[str, Any]
	timestamp: int


class HistoryManager:
	"""Undo and redo stacks of MaskStore snapshots"""

	def __init__(self, store, max_history=MAX_HISTORY_ENTRIES):
		"""
		Args:
			store: MaskStore whose state is recorded and restored
			max_history: Maximum number of undoable edits kept
		"""
		self._logger = logging.getLogger('HistoryManager')
		self.store = store
		self.max_history = max_history
		self.undo_stack: List[HistoryEntry] = []
		self.redo_stack: List[HistoryEntry] = []
		self._current = self._capture()
		self._listeners = []

	def _capture(self):
		return copy.deepcopy(self.store.get_snapshot())

	def commit(self, description=""):
		"""Record the store's current state as one undoable edit

		Args:
			description: Label for the edit (e.g. "Move mask")

		Returns:
			False if the store did not change since the last commit
		"""
		snapshot = self._capture()
		if snapshot == self._current:
			self._logger.debug(f"Nothing to commit for '{description}'")
			return False

		self.undo_stack.append(HistoryEntry(description, self._current, self.store.now()))
		if len(self.undo_stack) > self.max_history:
			del self.undo_stack[0]
		self.redo_stack.clear()
		self._current = snapshot

		self._notify_listeners()
		self._logger.debug(f"Committed '{description}' ({len(self.undo_stack)} undoable)")
		return True

	def undo(self):
		"""Restore the state before the last committed edit

		Returns:
			True if a state was restored
		"""
		if not self.undo_stack:
			self._logger.debug("Cannot undo - nothing committed")
			return False
		entry = self.undo_stack.pop()
		self.redo_stack.append(HistoryEntry(entry.description, self._current, self.store.now()))
		self._restore(entry.snapshot)
		self._logger.debug(f"Undid '{entry.description}'")
		return True

	def redo(self):
		"""Re-apply the last undone edit

		Returns:
			True if a state was restored
		"""
		if not self.redo_stack:
			self._logger.debug("Cannot redo - nothing undone")
			return False
		entry = self.redo_stack.pop()
		self.undo_stack.append(HistoryEntry(entry.description, self._current, self.store.now()))
		self._restore(entry.snapshot)
		self._logger.debug(f"Redid '{entry.description}'")
		return True

	def _restore(self, snapshot):
		self.store.set_snapshot(copy.deepcopy(snapshot))
		self._current = self._capture()
		self._notify_listeners()

	def can_undo(self):
		return bool(self.undo_stack)

	def can_redo(self):
		return bool(self.redo_stack)

	def clear(self):
		"""Forget all edits; the store's current state becomes the baseline"""
		self.undo_stack.clear()
		self.redo_stack.clear()
		self._current = self._capture()
		self._notify_listeners()

	def add_listener(self, callback):
		"""
		Args:
			callback: Called with (can_undo, can_redo) after every change
		"""
		self._listeners.append(callback)

	def remove_listener(self, callback):
		if callback in self._listeners:
			self._listeners.remove(callback)

	def _notify_listeners(self):
		for callback in list(self._listeners):
			try:
				callback(self.can_undo(), self.can_redo())
			except Exception:
				self._logger.exception("Error notifying history listener")

	@property
	def undo_description(self):
		return self.undo_stack[-1].description if self.undo_stack else ""

	@property
	def redo_description(self):
		return self.redo_stack[-1].description if self.redo_stack else ""
