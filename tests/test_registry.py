#!/usr/bin/env python3

import os
import sys
import unittest

import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from jyeditlib.core import errors
from jyeditlib.core import utils
from jyeditlib.core.registry import Registry

#============================================

class RegistryTest(unittest.TestCase):
	#============================================
	def setUp(self) -> None:
		utils.set_quiet_mode(True)
		self.items = []
		self.template = {'type': 'speed', 'speed': 1.0, 'curve_speed': None}
		self.registry = Registry(self.items, self.template, 'speed')

	#============================================
	def tearDown(self) -> None:
		utils.set_quiet_mode(False)

	#============================================
	def test_create_fills_defaults(self) -> None:
		"""Caller fields override template defaults."""
		record = self.registry.create({'id': 'A', 'speed': 2.0})
		self.assertEqual(record['type'], 'speed')
		self.assertEqual(record['speed'], 2.0)
		self.assertIsNone(record['curve_speed'])
		self.assertEqual(len(self.registry), 1)
		self.assertIs(self.items[0], record)

	#============================================
	def test_create_does_not_share_template(self) -> None:
		"""Records never alias the template or the caller's data."""
		registry = Registry([], {'tags': []}, 'tagged')
		data = {'id': 'A', 'extra': {'nested': 1}}
		first = registry.create(data)
		first['tags'].append('x')
		second = registry.create({'id': 'B'})
		self.assertEqual(second['tags'], [])
		data['extra']['nested'] = 2
		self.assertEqual(first['extra']['nested'], 1)

	#============================================
	def test_duplicate_id_leaves_original(self) -> None:
		self.registry.create({'id': 'A', 'speed': 2.0})
		with self.assertRaises(errors.DuplicateIdentifier):
			self.registry.create({'id': 'A', 'speed': 3.0})
		self.assertEqual(len(self.registry), 1)
		self.assertEqual(self.registry.peek('A')['speed'], 2.0)

	#============================================
	def test_create_requires_string_id(self) -> None:
		with self.assertRaises(errors.InvalidRecord):
			self.registry.create({'speed': 2.0})
		with self.assertRaises(errors.InvalidRecord):
			self.registry.create({'id': ''})
		with self.assertRaises(errors.InvalidRecord):
			self.registry.create(['id', 'A'])
		self.assertEqual(len(self.registry), 0)

	#============================================
	def test_snapshot_is_isolated(self) -> None:
		self.registry.create({'id': 'A'})
		copy_record = self.registry.snapshot('A')
		copy_record['speed'] = 9.0
		self.assertEqual(self.registry.peek('A')['speed'], 1.0)
		copy_list = self.registry.snapshot()
		copy_list.clear()
		self.assertEqual(len(self.registry), 1)

	#============================================
	def test_get_returns_live_state(self) -> None:
		self.registry.create({'id': 'A'})
		self.registry.get('A')['speed'] = 4.0
		self.assertEqual(self.items[0]['speed'], 4.0)
		self.assertIs(self.registry.get(), self.items)
		self.assertIsNone(self.registry.get('missing'))

	#============================================
	def test_update_keeps_id(self) -> None:
		self.registry.create({'id': 'A'})
		updated = self.registry.update('A', {'id': 'B', 'speed': 0.5})
		self.assertEqual(updated['id'], 'A')
		self.assertEqual(updated['speed'], 0.5)
		self.assertFalse(self.registry.has('B'))

	#============================================
	def test_update_and_remove_unknown(self) -> None:
		self.assertIsNone(self.registry.update('missing', {'speed': 2.0}))
		self.assertFalse(self.registry.remove('missing'))

	#============================================
	def test_update_copies_nested_values(self) -> None:
		"""Caller objects passed to update are not stored by reference."""
		self.registry.create({'id': 'A'})
		curve = {'points': [1, 2]}
		self.registry.update('A', {'curve_speed': curve})
		curve['points'].append(99)
		self.assertEqual(self.registry.peek('A')['curve_speed'], {'points': [1, 2]})

	#============================================
	def test_remove(self) -> None:
		self.registry.create({'id': 'A'})
		self.registry.create({'id': 'B'})
		self.assertTrue(self.registry.remove('A'))
		self.assertFalse(self.registry.has('A'))
		self.assertTrue(self.registry.has('B'))

#============================================

@pytest.mark.parametrize("bad_id", ["", None, 5])
def test_lookup_rejects_invalid_id(bad_id) -> None:
	"""
	Lookups with an id that is not a non-empty string raise InvalidRecord.
	"""
	registry = Registry([], {}, 'item')
	with pytest.raises(errors.InvalidRecord):
		registry.peek(bad_id)

#============================================

def test_registry_requires_list() -> None:
	with pytest.raises(errors.InvalidRecord):
		Registry({}, {}, 'item')

#============================================

def test_errors_are_runtime_errors() -> None:
	registry = Registry([], {}, 'item')
	registry.create({'id': 'A'})
	with pytest.raises(RuntimeError):
		registry.create({'id': 'A'})
