#!/usr/bin/env python3

"""
Segment builders, one per segment kind.

Each builder starts from the static defaults in templates.py and sets only
the computed fields: ids, references, and timeranges.
"""

import copy
from jyeditlib.core import errors
from jyeditlib.core import templates
from jyeditlib.core import utils

#============================================

def make_timerange(start: int, duration: int) -> dict:
	if isinstance(start, bool) or not isinstance(start, int) or start < 0:
		raise errors.InvalidRecord(f"timerange start must be a non-negative integer: {start!r}")
	if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
		raise errors.InvalidRecord(f"timerange duration must be a non-negative integer: {duration!r}")
	return {'start': start, 'duration': duration}

#============================================

def copy_timerange(timerange: dict) -> dict:
	if not isinstance(timerange, dict):
		raise errors.InvalidRecord("timerange must be a mapping with start and duration")
	return make_timerange(timerange.get('start'), timerange.get('duration'))

#============================================

def _build(template: dict, material_id: str, extra_refs: list,
	source_timerange, target_timerange: dict) -> dict:
	segment = copy.deepcopy(template)
	segment['id'] = utils.generate_id()
	segment['material_id'] = material_id
	segment['extra_material_refs'] = list(extra_refs)
	segment['source_timerange'] = source_timerange
	segment['target_timerange'] = target_timerange
	return segment

#============================================

def build_video_segment(material_id: str, extra_refs: list,
	source_duration: int, target_timerange: dict) -> dict:
	source = make_timerange(0, source_duration)
	return _build(templates.VISUAL_SEGMENT, material_id, extra_refs, source,
		copy_timerange(target_timerange))

#============================================

def build_audio_segment(material_id: str, extra_refs: list,
	source_duration: int, target_timerange: dict) -> dict:
	source = make_timerange(0, source_duration)
	return _build(templates.AUDIO_SEGMENT, material_id, extra_refs, source,
		copy_timerange(target_timerange))

#============================================

def build_image_segment(material_id: str, extra_refs: list,
	reference_timerange: dict) -> dict:
	"""
	Image segments take the reference segment's placement and consume the
	same duration from the start of the still.
	"""
	target = copy_timerange(reference_timerange)
	source = make_timerange(0, target['duration'])
	return _build(templates.VISUAL_SEGMENT, material_id, extra_refs, source,
		target)

#============================================

def build_text_segment(material_id: str, extra_refs: list,
	start_offset: int, cue_start: int, cue_end: int) -> dict:
	if cue_end < cue_start:
		raise errors.InvalidRecord(f"subtitle ends before it starts: {cue_start} > {cue_end}")
	target = make_timerange(start_offset + cue_start, cue_end - cue_start)
	return _build(templates.TEXT_SEGMENT, material_id, extra_refs, None,
		target)
