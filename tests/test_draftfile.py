#!/usr/bin/env python3

import json
import os
import sys
import tempfile
import unittest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from jyeditlib.core import draftfile
from jyeditlib.core import utils

#============================================

def _write_template(template_dir: str) -> None:
	"""Write a minimal template draft folder with backup leftovers.

	Args:
		template_dir: Folder to create.
	"""
	os.makedirs(os.path.join(template_dir, ".backup"))
	with open(os.path.join(template_dir, ".backup", "old.json"), "w") as handle:
		handle.write("{}")
	with open(os.path.join(template_dir, "draft_content.json.bak"), "w") as handle:
		handle.write("{}")
	with open(os.path.join(template_dir, draftfile.DRAFT_CONTENT_FILE), "w") as handle:
		json.dump({'id': "TEMPLATE", 'tracks': [], 'materials': {}}, handle)
	with open(os.path.join(template_dir, draftfile.DRAFT_META_FILE), "w") as handle:
		json.dump({'draft_name': "template", 'draft_id': "OLD"}, handle)

#============================================

class DraftFileTest(unittest.TestCase):
	#============================================
	def setUp(self) -> None:
		utils.set_quiet_mode(True)

	#============================================
	def tearDown(self) -> None:
		utils.set_quiet_mode(False)

	#============================================
	def test_create_new_project(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			template_dir = os.path.join(temp_dir, "template")
			drafts_dir = os.path.join(temp_dir, "drafts")
			os.makedirs(drafts_dir)
			_write_template(template_dir)
			info = draftfile.create_new_project(drafts_dir, template_dir, "song")
			root_dir = info['project_root_dir']
			self.assertEqual(root_dir, os.path.join(drafts_dir, "song"))
			self.assertFalse(os.path.exists(os.path.join(root_dir, ".backup")))
			self.assertFalse(os.path.exists(os.path.join(root_dir, "draft_content.json.bak")))
			document = draftfile.load_document(info['draft_content_path'])
			self.assertEqual(document['id'], info['project_id'])
			self.assertNotEqual(document['id'], "TEMPLATE")
			self.assertEqual(document['id'], document['id'].upper())
			with open(os.path.join(root_dir, draftfile.DRAFT_META_FILE)) as handle:
				meta = json.load(handle)
			self.assertEqual(meta['draft_name'], "song")
			self.assertNotEqual(meta['draft_id'], "OLD")
			self.assertTrue(meta['draft_fold_path'].endswith("/song"))
			self.assertEqual(meta['tm_draft_create'], meta['tm_draft_modified'])
			self.assertEqual(meta['tm_draft_create'] % 1000, 0)
			with self.assertRaises(RuntimeError):
				draftfile.create_new_project(drafts_dir, template_dir, "song")

	#============================================
	def test_missing_template(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			with self.assertRaises(RuntimeError):
				draftfile.create_new_project(temp_dir, os.path.join(temp_dir, "none"))

	#============================================
	def test_save_document_sorted(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			path = os.path.join(temp_dir, draftfile.DRAFT_CONTENT_FILE)
			document = {'tracks': [{'name': "字幕", 'id': "T"}], 'duration': 5}
			draftfile.save_document(document, path, sort_keys=True)
			with open(path, encoding="utf-8") as handle:
				text = handle.read()
			self.assertIn("字幕", text)
			self.assertLess(text.index('"duration"'), text.index('"tracks"'))
			self.assertLess(text.index('"id"'), text.index('"name"'))
			self.assertEqual(draftfile.load_document(path), document)
			with self.assertRaises(RuntimeError):
				draftfile.save_document(None, path)
