#!/usr/bin/env python3

import os
import yaml
from jyeditlib.core import templates
from jyeditlib.core import utils

CLIP_KINDS = ('media', 'image', 'subtitle')

#============================================

class PlanData():
	def __init__(self):
		self.yaml_file = None
		self.data = {}
		self.draft = {}
		self.profile = {}
		self.text_style = {}
		self.tracks = []
		self.clips = []

#============================================

class PlanLoader():
	def __init__(self, yaml_file: str, draft_location: str = None):
		self.yaml_file = yaml_file
		self.draft_location = draft_location

	#============================
	def load(self) -> PlanData:
		plan = PlanData()
		plan.yaml_file = self.yaml_file
		plan.data = self._load_yaml()
		self._validate_required_keys(plan.data)
		plan.draft = self._parse_draft(plan.data.get('draft'))
		plan.profile = self._parse_profile(plan.data.get('profile', {}))
		plan.text_style = self._parse_text_style(plan.data.get('text_style', {}))
		plan.tracks = self._parse_tracks(plan.data.get('tracks'))
		plan.clips = self._parse_clips(plan, plan.data.get('clips'))
		return plan

	#============================
	def _load_yaml(self) -> dict:
		utils.ensure_file_exists(self.yaml_file)
		file_size = os.path.getsize(self.yaml_file)
		if file_size > 10 ** 7:
			raise RuntimeError("yaml file is larger than 10MB")
		with open(self.yaml_file, 'r', encoding='utf-8') as data_file:
			data = yaml.safe_load(data_file)
		if not isinstance(data, dict):
			raise RuntimeError("plan yaml must be a mapping at the top level")
		return data

	#============================
	def _validate_required_keys(self, data: dict) -> None:
		if data.get('jyedit') != 1:
			raise RuntimeError("jyedit must be set to 1 for plan files")
		required_keys = ('draft', 'tracks', 'clips')
		for key in required_keys:
			if key not in data:
				raise RuntimeError(f"missing required key: {key}")

	#============================
	def _parse_draft(self, draft: dict) -> dict:
		if not isinstance(draft, dict):
			raise RuntimeError("draft must be a mapping")
		location = self.draft_location or draft.get('location')
		if not location:
			raise RuntimeError("draft.location is required (or pass a draft location)")
		template = draft.get('template')
		if not template:
			raise RuntimeError("draft.template is required")
		return {
			'location': str(location),
			'template': self._resolve_path(str(template)),
			'name': draft.get('name'),
			'reset': bool(draft.get('reset', True)),
			'sort_keys': bool(draft.get('sort_keys', False)),
		}

	#============================
	def _parse_profile(self, profile: dict) -> dict:
		if profile is None:
			profile = {}
		if not isinstance(profile, dict):
			raise RuntimeError("profile must be a mapping")
		fps = utils.parse_fps(profile.get('fps', 30))
		canvas = profile.get('canvas')
		width = None
		height = None
		if canvas is not None:
			if not isinstance(canvas, list) or len(canvas) != 2:
				raise RuntimeError("profile.canvas must be [width, height]")
			width = int(canvas[0])
			height = int(canvas[1])
		return {
			'fps': fps,
			'width': width,
			'height': height,
		}

	#============================
	def _parse_text_style(self, text_style: dict) -> dict:
		if text_style is None:
			return {}
		if not isinstance(text_style, dict):
			raise RuntimeError("text_style must be a mapping")
		for key in text_style:
			if key not in templates.TEXT_STYLE:
				raise RuntimeError(f"unknown text_style key: {key}")
		return dict(text_style)

	#============================
	def _parse_tracks(self, tracks: list) -> list:
		if not isinstance(tracks, list) or len(tracks) == 0:
			raise RuntimeError("tracks must be a non-empty list")
		parsed = []
		seen_names = set()
		for track in tracks:
			if not isinstance(track, dict):
				raise RuntimeError("tracks entries must be mappings")
			name = track.get('name')
			if not name:
				raise RuntimeError("track entry requires name")
			if name in seen_names:
				raise RuntimeError(f"duplicate track name: {name}")
			seen_names.add(name)
			track_type = track.get('type')
			if track_type not in templates.TRACK_TYPES:
				raise RuntimeError(f"track {name} type must be video, audio, or text")
			flag = track.get('flag')
			if flag is None:
				flag = 0
			parsed.append({
				'name': str(name),
				'type': track_type,
				'flag': int(flag),
			})
		return parsed

	#============================
	def _parse_clips(self, plan: PlanData, clips: list) -> list:
		if not isinstance(clips, list):
			raise RuntimeError("clips must be a list")
		track_types = {}
		for track in plan.tracks:
			track_types[track['name']] = track['type']
		parsed = []
		for group in clips:
			parsed_group = self._parse_clip_group(group, track_types)
			if parsed_group is not None:
				parsed.append(parsed_group)
		return parsed

	#============================
	def _parse_clip_group(self, group: dict, track_types: dict):
		if not isinstance(group, dict):
			raise RuntimeError("clips entries must be mappings")
		if group.get('enabled') is False:
			return None
		track_name = group.get('track')
		if track_name not in track_types:
			raise RuntimeError(f"clip group track not declared in tracks: {track_name}")
		kind = group.get('kind', 'media')
		if kind not in CLIP_KINDS:
			raise RuntimeError(f"clip group kind must be media, image, or subtitle: {kind}")
		if kind == 'subtitle' and track_types[track_name] != 'text':
			raise RuntimeError(f"subtitle clips require a text track: {track_name}")
		if kind == 'image' and track_types[track_name] != 'video':
			raise RuntimeError(f"image clips require a video track: {track_name}")
		reference_track = group.get('reference_track')
		if kind in ('image', 'subtitle'):
			if reference_track is None:
				raise RuntimeError(f"{kind} clips require reference_track")
			if reference_track not in track_types:
				raise RuntimeError(f"reference track not declared in tracks: {reference_track}")
		files = group.get('files')
		if not isinstance(files, list) or len(files) == 0:
			raise RuntimeError("clip group requires a non-empty files list")
		directory = group.get('directory', '')
		if directory:
			directory = self._resolve_path(str(directory))
		file_paths = []
		for filename in files:
			if directory:
				file_paths.append(os.path.join(directory, str(filename)))
			else:
				file_paths.append(self._resolve_path(str(filename)))
		text_type = group.get('text_type', 'subtitle')
		if text_type not in ('subtitle', 'text'):
			raise RuntimeError(f"text_type must be subtitle or text: {text_type}")
		return {
			'track': track_name,
			'kind': kind,
			'reference_track': reference_track,
			'files': file_paths,
			'text_type': text_type,
		}

	#============================
	def _resolve_path(self, filepath: str) -> str:
		if os.path.isabs(filepath):
			return filepath
		base_dir = os.path.dirname(os.path.abspath(self.yaml_file))
		return os.path.join(base_dir, filepath)
