#!/usr/bin/env python3

"""
Draft folder bootstrap and draft_content.json persistence.
"""

import json
import os
import shutil
import time
from jyeditlib.core import utils

DRAFT_CONTENT_FILE = "draft_content.json"
DRAFT_META_FILE = "draft_meta_info.json"

#============================================

def _ignore_backups(directory: str, names: list) -> list:
	ignored = []
	for name in names:
		full_path = os.path.join(directory, name)
		if name == '.backup' and os.path.isdir(full_path):
			ignored.append(name)
		elif name.endswith('.bak') and os.path.isfile(full_path):
			ignored.append(name)
	return ignored

#============================================

def _read_json(json_file: str) -> dict:
	with open(json_file, 'r', encoding='utf-8') as handle:
		return json.load(handle)

#============================================

def _write_json(data: dict, json_file: str) -> None:
	with open(json_file, 'w', encoding='utf-8') as handle:
		json.dump(data, handle, ensure_ascii=False)
	return

#============================================

def create_new_project(draft_location: str, template_dir: str,
	project_name: str = None) -> dict:
	"""
	Copy a template draft folder into the drafts location under a new name
	and give it fresh ids.

	Args:
		draft_location: Folder that holds the host editor's drafts.
		template_dir: Template draft folder with draft_content.json.
		project_name: Folder name for the new draft, timestamp by default.

	Returns:
		dict: project_root_dir, draft_content_path, project_id.
	"""
	if not draft_location:
		raise RuntimeError("draft location is required")
	if not os.path.isdir(template_dir):
		raise RuntimeError(f"template draft folder not found: {template_dir}")
	if project_name is None:
		project_name = utils.make_project_name()
	project_root_dir = os.path.join(draft_location, project_name)
	if os.path.exists(project_root_dir):
		raise RuntimeError(f"draft folder already exists: {project_root_dir}")
	shutil.copytree(template_dir, project_root_dir, ignore=_ignore_backups)
	draft_content_path = os.path.join(project_root_dir, DRAFT_CONTENT_FILE)
	utils.ensure_file_exists(draft_content_path)
	project_id = utils.generate_id()
	draft_content = _read_json(draft_content_path)
	draft_content['id'] = project_id
	_write_json(draft_content, draft_content_path)
	draft_meta_path = os.path.join(project_root_dir, DRAFT_META_FILE)
	if os.path.isfile(draft_meta_path):
		# host timestamps are unix time in microseconds
		timestamp = int(time.time() * 1000) * 1000
		meta = _read_json(draft_meta_path)
		meta['draft_fold_path'] = f"{utils.normalize_path(draft_location)}/{project_name}"
		meta['draft_name'] = project_name
		meta['draft_id'] = utils.generate_id()
		meta['draft_root_path'] = draft_location
		meta['tm_draft_create'] = timestamp
		meta['tm_draft_modified'] = timestamp
		_write_json(meta, draft_meta_path)
	utils.log_message(f"new draft {project_id} at {project_root_dir}")
	return {
		'project_root_dir': project_root_dir,
		'draft_content_path': draft_content_path,
		'project_id': project_id,
	}

#============================================

def load_document(draft_content_path: str) -> dict:
	utils.ensure_file_exists(draft_content_path)
	document = _read_json(draft_content_path)
	if not isinstance(document, dict):
		raise RuntimeError("draft content must be a mapping at the top level")
	return document

#============================================

def save_document(document: dict, draft_content_path: str,
	sort_keys: bool = False) -> None:
	if document is None:
		raise RuntimeError("no draft document to save")
	data = document
	if sort_keys:
		data = utils.sort_keys_recursive(document)
	_write_json(data, draft_content_path)
	utils.log_message(f"saved draft to {draft_content_path}")
	return
