#!/usr/bin/env python3

"""
SRT subtitle parsing into microsecond cues.
"""

import re

SRT_TIME_RE = re.compile(r'(\d{2}):(\d{2}):(\d{2}),(\d{3})')
SRT_RANGE_RE = re.compile(
	r'(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})'
)

#============================================

def srt_time_to_microseconds(srt_time: str) -> int:
	"""
	Convert an SRT timestamp such as 00:00:02,980 to microseconds.
	"""
	match = SRT_TIME_RE.search(srt_time)
	if match is None:
		raise RuntimeError(f"invalid SRT time format: {srt_time}")
	hours = int(match.group(1))
	minutes = int(match.group(2))
	seconds = int(match.group(3))
	milliseconds = int(match.group(4))
	return (hours * 3600 + minutes * 60 + seconds) * 1000000 + milliseconds * 1000

#============================================

def parse_srt_text(text: str) -> list:
	"""
	Parse SRT text into cue dicts.

	Blocks without a numeric index, a time range line, or any text are
	skipped.

	Args:
		text: Full SRT file contents.

	Returns:
		list: Cues with index, start_time, end_time (microseconds), text.
	"""
	cues = []
	normalized = text.replace('\r\n', '\n').lstrip('\ufeff')
	for block in re.split(r'\n\s*\n', normalized):
		lines = block.strip().split('\n')
		if len(lines) < 3:
			continue
		index_text = lines[0].strip()
		if not index_text.isdigit():
			continue
		match = SRT_RANGE_RE.search(lines[1])
		if match is None:
			continue
		cues.append({
			'index': int(index_text),
			'start_time': srt_time_to_microseconds(match.group(1)),
			'end_time': srt_time_to_microseconds(match.group(2)),
			'text': '\n'.join(lines[2:]),
		})
	return cues

#============================================

def parse_srt_file(srt_file: str) -> list:
	with open(srt_file, 'r', encoding='utf-8') as handle:
		text = handle.read()
	return parse_srt_text(text)
