#!/usr/bin/env python3

import copy
from jyeditlib.core import errors
from jyeditlib.core import metrics
from jyeditlib.core import templates
from jyeditlib.core import utils
from jyeditlib.core.registry import Registry

#============================================

def segment_end(segment: dict) -> int:
	timerange = segment.get('target_timerange')
	if not timerange:
		return 0
	return timerange['start'] + timerange['duration']

#============================================

def segment_start(segment: dict) -> int:
	timerange = segment.get('target_timerange')
	if not timerange:
		return 0
	return timerange['start']

#============================================

class TrackRegistry(Registry):
	"""
	Tracks of the draft, each owning an ordered list of segments.

	Segment operations reach into the live track records, so this class
	uses peek() rather than snapshot().
	"""
	def __init__(self, items: list = None):
		super().__init__(items, template=templates.TRACK, kind='track')

	#============================
	def create(self, data: dict) -> dict:
		if not isinstance(data, dict):
			raise errors.InvalidRecord("track metadata must be a mapping")
		track_data = dict(data)
		if track_data.get('id') is None:
			track_data['id'] = utils.generate_id()
		track_type = track_data.get('type')
		if track_type not in templates.TRACK_TYPES:
			raise errors.InvalidRecord(f"track type must be video, audio, or text: {track_type}")
		return super().create(track_data)

	#============================
	def create_track(self, data: dict) -> dict:
		return self.create(data)

	#============================
	def _require_track(self, track_id: str) -> dict:
		track = self.peek(track_id)
		if track is None:
			raise errors.TrackNotFound(f"track not found: {track_id}")
		return track

	#============================
	def add_segment(self, track_id: str, segment: dict) -> dict:
		"""
		Append a segment to a track and return a copy of what was stored.

		The stored segment is default-filled with the common segment
		fields. Material references are not checked here.
		"""
		track = self._require_track(track_id)
		if not isinstance(segment, dict):
			raise errors.InvalidRecord("segment data must be a mapping")
		if not isinstance(segment.get('id'), str) or segment['id'] == '':
			raise errors.InvalidRecord("segment requires a non-empty string id")
		stored = copy.deepcopy(templates.SEGMENT)
		stored.update(copy.deepcopy(segment))
		track['segments'].append(stored)
		utils.log_message(f"added segment {stored['id']} to track {track_id}")
		return copy.deepcopy(stored)

	#============================
	def _find_segment_index(self, track: dict, segment_id: str) -> int:
		for index, segment in enumerate(track['segments']):
			if segment.get('id') == segment_id:
				return index
		return -1

	#============================
	def update_segment(self, track_id: str, segment_id: str, fields: dict):
		track = self.peek(track_id)
		if track is None:
			utils.log_warning(f"track {track_id} not found, segment not updated")
			return None
		index = self._find_segment_index(track, segment_id)
		if index == -1:
			utils.log_warning(f"segment {segment_id} not found in track {track_id}")
			return None
		safe_fields = dict(fields)
		new_id = safe_fields.pop('id', None)
		if new_id is not None and new_id != segment_id:
			utils.log_warning(f"segment id cannot be changed by update: {segment_id}")
		segment = track['segments'][index]
		segment.update(copy.deepcopy(safe_fields))
		return copy.deepcopy(segment)

	#============================
	def remove_segment(self, track_id: str, segment_id: str) -> bool:
		track = self.peek(track_id)
		if track is None:
			utils.log_warning(f"track {track_id} not found, segment not removed")
			return False
		index = self._find_segment_index(track, segment_id)
		if index == -1:
			utils.log_warning(f"segment {segment_id} not found in track {track_id}")
			return False
		del track['segments'][index]
		return True

	#============================
	def get_track_duration(self, track_id: str) -> int:
		track = self.peek(track_id)
		if track is None:
			utils.log_warning(f"track {track_id} not found")
			return 0
		track_duration = 0
		for segment in track['segments']:
			track_duration = max(track_duration, segment_end(segment))
		return track_duration

	#============================
	def get_total_duration(self) -> int:
		total_duration = 0
		for track in self.get():
			for segment in track.get('segments', []):
				total_duration = max(total_duration, segment_end(segment))
		return total_duration

	#============================
	def get_track_by_name(self, name: str) -> dict:
		for track in self.get():
			if track.get('name') == name:
				return track
		raise errors.TrackNotFound(f"track named {name} not found")

	#============================
	def get_last_segment(self, track_id: str):
		track = self.peek(track_id)
		if track is None or len(track['segments']) == 0:
			return None
		return track['segments'][-1]

	#============================
	def get_last_remaining_frames(self, track_id: str, fps=30) -> int:
		track = self.peek(track_id)
		if track is None:
			utils.log_warning(f"track {track_id} not found")
			return 0
		segments = track['segments']
		if len(segments) == 0:
			return 0
		latest = segments[0]
		for segment in segments[1:]:
			if segment_start(segment) > segment_start(latest):
				latest = segment
		source = latest.get('source_timerange')
		if not source:
			return 0
		return metrics.remaining_frames(source['duration'], fps)

	#============================
	def get_reference_segment(self, reference_track, index: int) -> dict:
		"""
		Return the live segment at index on a reference track.

		Args:
			reference_track: Track record or track id.
			index: Zero-based segment position.
		"""
		if isinstance(reference_track, dict):
			track = reference_track
		else:
			track = self._require_track(reference_track)
		segments = track.get('segments', [])
		if not isinstance(index, int) or index < 0 or index >= len(segments):
			raise errors.ReferenceSegmentMissing(
				f"reference track {track.get('name', track.get('id'))} has no segment at index {index}"
			)
		return segments[index]
