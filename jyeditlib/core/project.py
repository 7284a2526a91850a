#!/usr/bin/env python3

from jyeditlib.core import draftfile
from jyeditlib.core import templates
from jyeditlib.core import utils
from jyeditlib.core.editor import DraftEditor
from jyeditlib.core.loader import PlanLoader
from jyeditlib.core.planner import ClipPlanner

#============================================

class JianyingProject():
	def __init__(self, yaml_file: str, draft_location: str = None,
		dry_run: bool = False, prober=None):
		loader = PlanLoader(yaml_file, draft_location=draft_location)
		self.plan = loader.load()
		self.yaml_file = yaml_file
		self.dry_run = dry_run
		self.prober = prober
		self.draft_info = None
		self.editor = None

	#============================
	def _make_editor(self, document: dict) -> DraftEditor:
		self.editor = DraftEditor(document, prober=self.prober,
			fps=self.plan.profile['fps'], text_style=self.plan.text_style)
		return self.editor

	#============================
	def build_in_memory(self) -> DraftEditor:
		"""Apply the plan to an empty document without touching the drafts folder."""
		editor = self._make_editor(templates.empty_document(utils.generate_id()))
		ClipPlanner(self.plan, editor).run()
		return editor

	#============================
	def run(self):
		if self.dry_run:
			utils.log_message("dry run: plan validation complete")
			return None
		draft = self.plan.draft
		self.draft_info = draftfile.create_new_project(draft['location'],
			draft['template'], project_name=draft['name'])
		draft_content_path = self.draft_info['draft_content_path']
		document = draftfile.load_document(draft_content_path)
		if draft['reset']:
			document = templates.empty_document(document.get('id', self.draft_info['project_id']))
		editor = self._make_editor(document)
		ClipPlanner(self.plan, editor).run()
		draftfile.save_document(editor.document, draft_content_path,
			sort_keys=draft['sort_keys'])
		return self.draft_info

	#============================
	def summarize_tracks(self) -> list:
		if self.editor is None:
			return []
		summary = []
		for track in self.editor.tracks.get():
			summary.append({
				'name': track['name'],
				'type': track['type'],
				'segments': len(track['segments']),
				'duration': self.editor.tracks.get_track_duration(track['id']),
			})
		return summary
