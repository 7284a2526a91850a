#!/usr/bin/env python3

"""
Generic keyed collection for draft records.

A Registry wraps one live list inside the draft document (for example
materials.speeds) and enforces id uniqueness within that list. Every
record kind uses the same class; kinds differ only by the default
template passed in.

Reads come in two flavors:
	peek() / get(id) return the live record so owners can mutate nested
	state in place (the track model appends segments this way).
	snapshot() returns a deep copy for everyone else.
"""

import copy
from jyeditlib.core import errors
from jyeditlib.core import utils

#============================================

class Registry():
	def __init__(self, items: list = None, template: dict = None,
		kind: str = 'item'):
		if items is None:
			items = []
		if not isinstance(items, list):
			raise errors.InvalidRecord(f"{kind} registry requires a list")
		self._items = items
		self._template = template if template is not None else {}
		self.kind = kind

	#============================
	def __len__(self) -> int:
		return len(self._items)

	#============================
	def _find_index(self, item_id: str) -> int:
		if not isinstance(item_id, str) or item_id == '':
			raise errors.InvalidRecord(f"{self.kind} id must be a non-empty string")
		for index, item in enumerate(self._items):
			if item.get('id') == item_id:
				return index
		return -1

	#============================
	def create(self, data: dict) -> dict:
		if not isinstance(data, dict):
			raise errors.InvalidRecord(f"{self.kind} data must be a mapping")
		item_id = data.get('id')
		if not isinstance(item_id, str) or item_id == '':
			raise errors.InvalidRecord(f"{self.kind} requires a non-empty string id")
		if self._find_index(item_id) != -1:
			raise errors.DuplicateIdentifier(f"{self.kind} id already exists: {item_id}")
		record = copy.deepcopy(self._template)
		record.update(copy.deepcopy(data))
		self._items.append(record)
		return record

	#============================
	def get(self, item_id: str = None):
		"""
		Return the live collection, or the live record for item_id.

		Neither result is a copy; use snapshot() when the caller must not
		share state with the document.
		"""
		if item_id is None:
			return self._items
		return self.peek(item_id)

	#============================
	def peek(self, item_id: str):
		index = self._find_index(item_id)
		if index == -1:
			return None
		return self._items[index]

	#============================
	def snapshot(self, item_id: str = None):
		if item_id is None:
			return copy.deepcopy(self._items)
		record = self.peek(item_id)
		if record is None:
			return None
		return copy.deepcopy(record)

	#============================
	def update(self, item_id: str, fields: dict):
		if not isinstance(fields, dict):
			raise errors.InvalidRecord(f"{self.kind} update data must be a mapping")
		index = self._find_index(item_id)
		if index == -1:
			utils.log_warning(f"{self.kind} {item_id} not found, nothing updated")
			return None
		safe_fields = dict(fields)
		new_id = safe_fields.pop('id', None)
		if new_id is not None and new_id != item_id:
			utils.log_warning(f"{self.kind} id cannot be changed by update: {item_id}")
		record = self._items[index]
		record.update(copy.deepcopy(safe_fields))
		return record

	#============================
	def remove(self, item_id: str) -> bool:
		index = self._find_index(item_id)
		if index == -1:
			utils.log_warning(f"{self.kind} {item_id} not found, nothing removed")
			return False
		del self._items[index]
		return True

	#============================
	def has(self, item_id: str) -> bool:
		return self._find_index(item_id) != -1
