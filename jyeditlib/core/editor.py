#!/usr/bin/env python3

import copy
import json
import os
from jyeditlib import medialib
from jyeditlib.core import errors
from jyeditlib.core import metrics
from jyeditlib.core import segments
from jyeditlib.core import templates
from jyeditlib.core import utils
from jyeditlib.core.registry import Registry
from jyeditlib.core.timeline import TrackRegistry

TEXT_TYPES = ('subtitle', 'text')

#============================================

class DraftEditor():
	"""
	Inserts clips into a draft document.

	Every insert creates a material record, fresh auxiliary records, and
	one segment on the target track. Records created before a failure are
	not rolled back.
	"""
	def __init__(self, document: dict, prober=None, fps=30,
		text_style: dict = None):
		if not isinstance(document, dict):
			raise RuntimeError("draft document must be a mapping")
		self.document = document
		self.prober = prober if prober is not None else medialib.probeMedia
		self.fps = utils.parse_fps(fps)
		self.text_style = dict(templates.TEXT_STYLE)
		if text_style is not None:
			self.text_style.update(text_style)
		document['color_space'] = 0
		materials = document.setdefault('materials', {})
		for list_name in templates.MATERIAL_LISTS:
			materials.setdefault(list_name, [])
		config = document.setdefault('config', {})
		config.setdefault('lyrics_taskinfo', [])
		title_template = dict(templates.TEXT_MATERIAL, type="text")
		self.videos = Registry(materials['videos'], templates.VIDEO_MATERIAL, 'video')
		self.images = Registry(materials['videos'], templates.PHOTO_MATERIAL, 'image')
		self.audios = Registry(materials['audios'], templates.AUDIO_MATERIAL, 'audio')
		self.subtitles = Registry(materials['texts'], templates.TEXT_MATERIAL, 'subtitle')
		self.titles = Registry(materials['texts'], title_template, 'title')
		self.speeds = Registry(materials['speeds'], templates.SPEED, 'speed')
		self.canvases = Registry(materials['canvases'], templates.CANVAS, 'canvas')
		self.sound_channel_mappings = Registry(materials['sound_channel_mappings'],
			templates.SOUND_CHANNEL_MAPPING, 'sound channel mapping')
		self.vocal_separations = Registry(materials['vocal_separations'],
			templates.VOCAL_SEPARATION, 'vocal separation')
		self.beats = Registry(materials['beats'], templates.BEAT, 'beat')
		self.material_animations = Registry(materials['material_animations'],
			templates.MATERIAL_ANIMATION, 'material animation')
		self.lyrics_taskinfo = Registry(config['lyrics_taskinfo'], {}, 'lyrics task')
		self.tracks = TrackRegistry(document.setdefault('tracks', []))

	#============================
	# tracks
	#============================
	def create_track(self, name: str, track_type: str, flag: int = 0) -> dict:
		return self.tracks.create({
			'id': utils.generate_id(),
			'name': name,
			'type': track_type,
			'flag': flag,
		})

	#============================
	def add_video_track(self, name: str = "video") -> dict:
		return self.create_track(name, 'video')

	#============================
	def add_audio_track(self, name: str = "audio") -> dict:
		return self.create_track(name, 'audio')

	#============================
	def add_subtitle_track(self, name: str = "subtitle") -> dict:
		return self.create_track(name, 'text', flag=3)

	#============================
	def add_title_track(self, name: str = "title") -> dict:
		return self.create_track(name, 'text', flag=0)

	#============================
	def get_last_clip_in_track(self, track_id: str):
		segment = self.tracks.get_last_segment(track_id)
		if segment is None:
			return None
		return copy.deepcopy(segment)

	#============================
	def update_canvas_size(self, width: int = 1080, height: int = 1920) -> dict:
		canvas_config = self.document.setdefault('canvas_config', {})
		canvas_config.update(utils.scale_dimensions(width, height))
		return canvas_config

	#============================
	def finalize(self) -> int:
		duration = self.tracks.get_total_duration()
		self.document['duration'] = duration
		return duration

	#============================
	def find_dangling_references(self) -> list:
		"""
		List segment references that do not resolve to any material record.

		Returns:
			list: dicts with track_id, segment_id, and the unresolved ref.
		"""
		known_ids = set()
		for records in self.document['materials'].values():
			if not isinstance(records, list):
				continue
			for record in records:
				if isinstance(record, dict) and record.get('id'):
					known_ids.add(record['id'])
		dangling = []
		for track in self.tracks.get():
			for segment in track.get('segments', []):
				refs = [segment.get('material_id')]
				refs += segment.get('extra_material_refs', [])
				for ref in refs:
					if ref not in known_ids:
						dangling.append({
							'track_id': track['id'],
							'segment_id': segment.get('id'),
							'ref': ref,
						})
		return dangling

	#============================
	def log_media_metadata(self, probe_result: dict) -> None:
		kind = probe_result.get('kind')
		meta = probe_result.get('metadata', {})
		if kind == 'video':
			audio_text = "yes" if meta.get('has_audio') else "no"
			utils.log_message("media kind: video")
			utils.log_message(
				f"  - size: {meta.get('width')}x{meta.get('height')}"
				f" | duration: {meta.get('duration') or 0:.2f}s"
				f" | frame rate: {meta.get('frame_rate') or 0:.2f}fps"
				f" | codec: {meta.get('codec_name')}"
				f" | audio: {audio_text}"
			)
		elif kind == 'audio':
			utils.log_message("media kind: audio")
			utils.log_message(
				f"  - duration: {meta.get('duration') or 0:.2f}s"
				f" | sample rate: {meta.get('sample_rate')}Hz"
				f" | codec: {meta.get('codec_name')}"
				f" | bit rate: {(meta.get('bit_rate') or 0) / 1000:.0f}kbps"
			)
		elif kind == 'image':
			utils.log_message("media kind: image")
			utils.log_message(
				f"  - size: {meta.get('width')}x{meta.get('height')}"
				f" | codec: {meta.get('codec_name')}"
			)
		elif kind == 'unsupported':
			utils.log_warning(f"unsupported media: {meta.get('error')}")
		else:
			utils.log_warning(f"unknown media kind: {kind}")
		return

	#============================
	# shared insert steps
	#============================
	def _require_track_id(self, track_id: str) -> None:
		if not track_id:
			raise errors.InvalidRecord("track id is required")
		return

	#============================
	def _require_timerange(self, target_timerange: dict) -> dict:
		if target_timerange is None:
			raise errors.InvalidRecord("target timerange is required")
		return segments.copy_timerange(target_timerange)

	#============================
	def _probe(self, media_path: str, expected_kind: str = None) -> dict:
		utils.log_message(f"probing media: {media_path}")
		probe_result = self.prober(media_path)
		kind = probe_result.get('kind')
		if expected_kind is not None and kind != expected_kind:
			raise errors.UnsupportedMediaKind(
				f"expected {expected_kind} file but got {kind}: {media_path}"
			)
		self.log_media_metadata(probe_result)
		return probe_result

	#============================
	def _media_duration(self, metadata: dict) -> int:
		result = metrics.compute_timeline_duration(metadata.get('duration'), self.fps)
		if result['error'] is not None:
			raise result['error']
		return result['timeline_duration_us']

	#============================
	def _new_record(self, registry: Registry, fields: dict = None) -> dict:
		data = {'id': utils.generate_id()}
		if fields is not None:
			data.update(fields)
		return registry.create(data)

	#============================
	def _append_segment(self, track_id: str, segment: dict, label: str):
		try:
			stored = self.tracks.add_segment(track_id, segment)
		except errors.TrackNotFound as exc:
			utils.log_error(f"failed to insert {label} clip: {exc}")
			return None
		utils.log_message(f"--- {label} clip inserted ---")
		return stored

	#============================
	# video
	#============================
	def insert_video_clip(self, video_path: str, track_id: str,
		target_timerange: dict):
		utils.log_message("--- inserting video clip ---")
		self._require_track_id(track_id)
		target = self._require_timerange(target_timerange)
		probe_result = self._probe(video_path, 'video')
		return self._insert_video(video_path, probe_result['metadata'], track_id, target)

	#============================
	def _insert_video(self, video_path: str, metadata: dict, track_id: str,
		target: dict):
		duration_us = self._media_duration(metadata)
		material = self._new_record(self.videos, {
			'duration': duration_us,
			'height': metadata.get('height', 0),
			'width': metadata.get('width', 0),
			'local_material_id': utils.generate_id(),
			'material_name': os.path.basename(video_path),
			'path': utils.normalize_path(video_path),
		})
		extra_refs = [
			self._new_record(self.speeds)['id'],
			self._new_record(self.canvases)['id'],
			self._new_record(self.sound_channel_mappings)['id'],
			self._new_record(self.vocal_separations)['id'],
		]
		segment = segments.build_video_segment(material['id'], extra_refs,
			duration_us, target)
		metrics.apply_boundary_pad(segment, self.fps)
		return self._append_segment(track_id, segment, 'video')

	#============================
	# audio
	#============================
	def insert_audio_clip(self, audio_path: str, track_id: str,
		target_timerange: dict):
		utils.log_message("--- inserting audio clip ---")
		self._require_track_id(track_id)
		target = self._require_timerange(target_timerange)
		probe_result = self._probe(audio_path, 'audio')
		return self._insert_audio(audio_path, probe_result['metadata'], track_id, target)

	#============================
	def _insert_audio(self, audio_path: str, metadata: dict, track_id: str,
		target: dict):
		duration_us = self._media_duration(metadata)
		material = self._new_record(self.audios, {
			'duration': duration_us,
			'local_material_id': utils.generate_id(),
			'music_id': utils.generate_id(),
			'name': os.path.basename(audio_path),
			'path': utils.normalize_path(audio_path),
		})
		extra_refs = [
			self._new_record(self.speeds)['id'],
			self._new_record(self.beats)['id'],
			self._new_record(self.sound_channel_mappings)['id'],
			self._new_record(self.vocal_separations)['id'],
		]
		segment = segments.build_audio_segment(material['id'], extra_refs,
			duration_us, target)
		metrics.apply_boundary_pad(segment, self.fps)
		return self._append_segment(track_id, segment, 'audio')

	#============================
	def append_media_clip(self, media_path: str, track_id: str):
		"""
		Probe a video or audio file once and place it at the current end of
		the track with its compensated duration.
		"""
		self._require_track_id(track_id)
		probe_result = self._probe(media_path)
		kind = probe_result.get('kind')
		if kind not in ('video', 'audio'):
			raise errors.UnsupportedMediaKind(
				f"expected video or audio file but got {kind}: {media_path}"
			)
		metadata = probe_result['metadata']
		target = segments.make_timerange(self.tracks.get_track_duration(track_id),
			self._media_duration(metadata))
		if kind == 'video':
			return self._insert_video(media_path, metadata, track_id, target)
		return self._insert_audio(media_path, metadata, track_id, target)

	#============================
	# image
	#============================
	def insert_image_clip(self, image_path: str, track_id: str,
		reference_track, index: int):
		utils.log_message("--- inserting image clip ---")
		self._require_track_id(track_id)
		reference_segment = self.tracks.get_reference_segment(reference_track, index)
		probe_result = self._probe(image_path, 'image')
		metadata = probe_result['metadata']
		material = self._new_record(self.images, {
			'height': metadata.get('height', 0),
			'width': metadata.get('width', 0),
			'material_name': os.path.basename(image_path),
			'path': utils.normalize_path(image_path),
		})
		extra_refs = [
			self._new_record(self.canvases)['id'],
			self._new_record(self.sound_channel_mappings)['id'],
			self._new_record(self.speeds)['id'],
			self._new_record(self.vocal_separations)['id'],
		]
		segment = segments.build_image_segment(material['id'], extra_refs,
			reference_segment['target_timerange'])
		return self._append_segment(track_id, segment, 'image')

	#============================
	# subtitles and titles
	#============================
	def insert_subtitle_clips(self, subtitles: list, track_id: str,
		reference_track, index: int, text_type: str = 'subtitle') -> list:
		"""
		Insert subtitle cues timed against a segment on a reference track.

		Cue times are relative to the start of the reference segment.

		Args:
			subtitles: Cues with start_time, end_time (microseconds), text.
			track_id: Text track to receive the cues.
			reference_track: Track record or id, usually the vocal track.
			index: Segment position on the reference track.
			text_type: subtitle or text.

		Returns:
			list: Inserted segments, None for any cue that failed to append.
		"""
		self._require_track_id(track_id)
		reference_segment = self.tracks.get_reference_segment(reference_track, index)
		start_offset = reference_segment['target_timerange']['start']
		inserted = []
		for subtitle in subtitles:
			inserted.append(self.insert_subtitle_clip(subtitle, track_id,
				start_offset, text_type))
		return inserted

	#============================
	def insert_subtitle_clip(self, subtitle: dict, track_id: str,
		start_offset: int = 0, text_type: str = 'subtitle'):
		utils.log_message("--- inserting subtitle clip ---")
		self._require_track_id(track_id)
		if text_type not in TEXT_TYPES:
			raise errors.InvalidRecord(f"text type must be subtitle or text: {text_type}")
		registry = self.subtitles if text_type == 'subtitle' else self.titles
		text = subtitle['text']
		style = self.text_style
		material = self._new_record(registry, {
			'content': self._text_content(text),
			'font_path': style['font_path'],
			'font_size': style['font_size'],
			'font_title': style['font_title'],
			'text_color': style['text_color'],
			'type': text_type,
		})
		animation = self._new_record(self.material_animations)
		segment = segments.build_text_segment(material['id'], [animation['id']],
			start_offset, subtitle['start_time'], subtitle['end_time'])
		return self._append_segment(track_id, segment, 'subtitle')

	#============================
	def _text_content(self, text: str) -> str:
		style = self.text_style
		content = {
			'text': text,
			'styles': [{
				'fill': {'content': {'solid': {'color': style['fill_color']}}},
				'font': {'path': style['font_path'], 'id': ""},
				'strokes': [{
					'content': {'solid': {'color': style['stroke_color']}},
					'width': style['stroke_width'],
				}],
				'size': style['font_size'],
				'useLetterColor': True,
				# the host measures text in UTF-16 code units
				'range': [0, len(text.encode('utf-16-le')) // 2],
			}],
		}
		return json.dumps(content, ensure_ascii=False)
