#!/usr/bin/env python3

from tqdm import tqdm
from jyeditlib import subtitles
from jyeditlib.core import utils
from jyeditlib.core.editor import DraftEditor
from jyeditlib.core.loader import PlanData

#============================================

class ClipPlanner():
	"""
	Applies a loaded plan to a draft: creates the declared tracks, then
	inserts every clip group in plan order.

	Media clips are appended at the current end of their track. Image and
	subtitle files are matched by position to the segments of their
	reference track, so the n-th file is placed against the n-th segment.
	"""
	def __init__(self, plan: PlanData, editor: DraftEditor):
		self.plan = plan
		self.editor = editor
		self.track_map = {}

	#============================
	def run(self) -> int:
		if self.plan.profile.get('width') is not None:
			self.editor.update_canvas_size(self.plan.profile['width'],
				self.plan.profile['height'])
		self.create_tracks()
		for group in self.plan.clips:
			self._apply_group(group)
		duration = self.editor.finalize()
		utils.log_message(f"total duration: {duration} us")
		return duration

	#============================
	def create_tracks(self) -> dict:
		"""
		Create the plan tracks and map plan names to the new records.

		Template tracks kept with reset off may share a name, so clip groups
		are routed through this map rather than by name lookup.
		"""
		self.track_map = {}
		for track_def in self.plan.tracks:
			track = self.editor.create_track(track_def['name'], track_def['type'],
				flag=track_def['flag'])
			self.track_map[track_def['name']] = track
		return self.track_map

	#============================
	def _apply_group(self, group: dict) -> None:
		track = self.track_map[group['track']]
		reference = None
		if group['reference_track'] is not None:
			reference = self.track_map[group['reference_track']]
		files = group['files']
		if utils.is_quiet_mode():
			iter_files = files
		else:
			iter_files = tqdm(files, desc=group['track'])
		for index, filepath in enumerate(iter_files):
			if group['kind'] == 'media':
				self.editor.append_media_clip(filepath, track['id'])
			elif group['kind'] == 'image':
				self.editor.insert_image_clip(filepath, track['id'], reference, index)
			elif group['kind'] == 'subtitle':
				cues = subtitles.parse_srt_file(filepath)
				self.editor.insert_subtitle_clips(cues, track['id'], reference, index,
					text_type=group['text_type'])
			else:
				raise RuntimeError(f"unsupported clip group kind {group['kind']}")
		return
