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
from jyeditlib.core.project import JianyingProject

#============================================

def fake_prober(media_path: str) -> dict:
	"""Report two seconds of audio and 800x600 images without ffprobe."""
	if media_path.endswith(".mp3"):
		return {'kind': 'audio', 'metadata': {'duration': 2.0, 'sample_rate': 44100}}
	return {'kind': 'image', 'metadata': {'width': 800, 'height': 600, 'codec_name': 'png'}}

#============================================

def _write_fixture(temp_dir: str, reset: bool = True,
	template_track: dict = None) -> str:
	"""Write a template draft, one subtitle file, and a plan yaml.

	Args:
		temp_dir: Working folder.
		reset: Value for draft.reset.
		template_track: Track stored in the template draft.

	Returns:
		str: Plan yaml path.
	"""
	template_dir = os.path.join(temp_dir, "template")
	os.makedirs(template_dir)
	os.makedirs(os.path.join(temp_dir, "drafts"))
	if template_track is None:
		template_track = {'id': "OLD", 'type': "video", 'segments': []}
	with open(os.path.join(template_dir, draftfile.DRAFT_CONTENT_FILE), "w") as handle:
		json.dump({'id': "TEMPLATE", 'tracks': [template_track],
			'materials': {}}, handle)
	with open(os.path.join(temp_dir, "vocal1.srt"), "w", encoding="utf-8") as handle:
		handle.write("1\n00:00:00,360 --> 00:00:01,000\nfirst\n\n")
		handle.write("2\n00:00:01,000 --> 00:00:01,900\nsecond\n")
	lines = []
	lines.append("jyedit: 1")
	lines.append("draft:")
	lines.append(f"  location: {os.path.join(temp_dir, 'drafts')}")
	lines.append("  template: template")
	lines.append("  name: song")
	lines.append(f"  reset: {'true' if reset else 'false'}")
	lines.append("  sort_keys: true")
	lines.append("profile:")
	lines.append("  fps: 30")
	lines.append("  canvas: [1080, 1920]")
	lines.append("tracks:")
	lines.append("  - {name: images, type: video}")
	lines.append("  - {name: vocal, type: audio}")
	lines.append("  - {name: subtitle, type: text, flag: 3}")
	lines.append("clips:")
	lines.append("  - {track: vocal, kind: media, files: [vocal1.mp3, vocal2.mp3]}")
	lines.append("  - {track: images, kind: image, reference_track: vocal, files: [a.png, b.png]}")
	lines.append("  - {track: subtitle, kind: subtitle, reference_track: vocal, files: [vocal1.srt]}")
	yaml_path = os.path.join(temp_dir, "plan.yaml")
	with open(yaml_path, "w") as yaml_file:
		yaml_file.write("\n".join(lines))
		yaml_file.write("\n")
	return yaml_path

#============================================

class PlannerProjectTest(unittest.TestCase):
	#============================================
	def setUp(self) -> None:
		utils.set_quiet_mode(True)

	#============================================
	def tearDown(self) -> None:
		utils.set_quiet_mode(False)

	#============================================
	def test_run_writes_draft(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			yaml_path = _write_fixture(temp_dir)
			project = JianyingProject(yaml_path, prober=fake_prober)
			info = project.run()
			document = draftfile.load_document(info['draft_content_path'])
			self.assertEqual(document['id'], info['project_id'])
			self.assertEqual(document['duration'], 4000000)
			names = [track['name'] for track in document['tracks']]
			self.assertEqual(names, ["images", "vocal", "subtitle"])
			images, vocal, subtitle = document['tracks']
			self.assertEqual(vocal['segments'][1]['target_timerange'],
				{'start': 2000000, 'duration': 2000000})
			self.assertEqual(images['segments'][1]['target_timerange'],
				vocal['segments'][1]['target_timerange'])
			self.assertEqual(len(subtitle['segments']), 2)
			self.assertEqual(subtitle['segments'][0]['target_timerange'],
				{'start': 360000, 'duration': 640000})
			self.assertEqual(len(document['materials']['videos']), 2)
			self.assertEqual(len(document['materials']['texts']), 2)
			summary = project.summarize_tracks()
			self.assertEqual(summary[2]['segments'], 2)

	#============================================
	def test_run_without_reset_keeps_template_tracks(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			yaml_path = _write_fixture(temp_dir, reset=False)
			info = JianyingProject(yaml_path, prober=fake_prober).run()
			document = draftfile.load_document(info['draft_content_path'])
			self.assertEqual(document['tracks'][0]['id'], "OLD")
			self.assertEqual(len(document['tracks']), 4)

	#============================================
	def test_template_track_with_same_name_stays_empty(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			template_track = {'id': "OLD", 'name': "vocal", 'type': "audio",
				'segments': []}
			yaml_path = _write_fixture(temp_dir, reset=False, template_track=template_track)
			info = JianyingProject(yaml_path, prober=fake_prober).run()
			document = draftfile.load_document(info['draft_content_path'])
			vocal_tracks = [track for track in document['tracks'] if track.get('name') == "vocal"]
			self.assertEqual(len(vocal_tracks), 2)
			self.assertEqual(vocal_tracks[0]['id'], "OLD")
			self.assertEqual(vocal_tracks[0]['segments'], [])
			self.assertEqual(len(vocal_tracks[1]['segments']), 2)
			self.assertEqual(document['duration'], 4000000)

	#============================================
	def test_dry_run_and_in_memory(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			yaml_path = _write_fixture(temp_dir)
			project = JianyingProject(yaml_path, dry_run=True, prober=fake_prober)
			self.assertIsNone(project.run())
			editor = project.build_in_memory()
			self.assertEqual(editor.document['duration'], 4000000)
			self.assertEqual(os.listdir(os.path.join(temp_dir, "drafts")), [])
			self.assertEqual(project.summarize_tracks()[1]['duration'], 4000000)
