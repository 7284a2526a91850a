#!/usr/bin/env python3

"""
Frame-quantized timeline durations.

The draft stores times as whole microseconds, but 30 fps frames are
33333.33 microseconds long. Frames are therefore counted in cycles of
three: a full cycle is exactly 100000 us, a leftover frame is 33333 us,
two leftover frames are 66666 us. Summing whole cycles never drifts.
"""

import math
from decimal import Decimal
from fractions import Fraction
from jyeditlib.core import errors
from jyeditlib.core import utils

MICROSECONDS_PER_SECOND = 1000000
FRAMES_PER_CYCLE = 3

#============================================

def _is_numeric(value) -> bool:
	if isinstance(value, bool):
		return False
	if isinstance(value, float):
		return math.isfinite(value)
	if isinstance(value, Decimal):
		return value.is_finite()
	return isinstance(value, (int, Fraction))

#============================================

def _exact(value) -> Fraction:
	if isinstance(value, Fraction):
		return value
	if isinstance(value, int):
		return Fraction(value, 1)
	return Fraction(str(value))

#============================================

def _zero_metrics(error=None) -> dict:
	return {
		'total_frames': 0,
		'timeline_duration_us': 0,
		'remaining_frames': 0,
		'error': error,
	}

#============================================

def cycle_microseconds(fps=30) -> int:
	"""
	Length of three frames in microseconds, rounded as a whole cycle.

	This is 100000 at 30 fps. Other rates scale the cycle with the frame
	length, e.g. 50000 at 60 fps and 100100 at 30000/1001.
	"""
	fps_value = utils.parse_fps(fps)
	cycle = Fraction(FRAMES_PER_CYCLE * MICROSECONDS_PER_SECOND, 1) / fps_value
	return utils.round_half_up_fraction(cycle)

#============================================

def remainder_microseconds(frames: int, fps=30) -> int:
	# 33333 and 66666 at 30 fps
	fps_value = utils.parse_fps(fps)
	return math.floor(Fraction(frames * MICROSECONDS_PER_SECOND, 1) / fps_value)

#============================================

def compute_timeline_duration(real_seconds, fps=30) -> dict:
	"""
	Convert a probed duration in seconds to a compensated timeline duration.

	Invalid input does not raise. The result is all zeros and the error
	key holds an InvalidDuration instance the caller may inspect or raise.

	Args:
		real_seconds: Non-negative duration in seconds.
		fps: Frame rate, 30 by default.

	Returns:
		dict: total_frames, timeline_duration_us, remaining_frames, error.
	"""
	if not _is_numeric(real_seconds) or real_seconds < 0:
		message = f"duration must be a non-negative number, got {real_seconds!r}"
		utils.log_warning(message)
		return _zero_metrics(errors.InvalidDuration(message))
	if real_seconds == 0:
		return _zero_metrics()
	fps_value = utils.parse_fps(fps)
	total_frames = math.ceil(_exact(real_seconds) * fps_value)
	if total_frames == 0:
		return _zero_metrics()
	cycles = total_frames // FRAMES_PER_CYCLE
	remaining = total_frames % FRAMES_PER_CYCLE
	duration_us = cycles * cycle_microseconds(fps_value)
	duration_us += remainder_microseconds(remaining, fps_value)
	return {
		'total_frames': total_frames,
		'timeline_duration_us': duration_us,
		'remaining_frames': remaining,
		'error': None,
	}

#============================================

def timeline_duration_us(real_seconds, fps=30) -> int:
	metrics = compute_timeline_duration(real_seconds, fps)
	if metrics['error'] is not None:
		raise metrics['error']
	return metrics['timeline_duration_us']

#============================================

def remaining_frames(microseconds, fps=30) -> int:
	if not _is_numeric(microseconds) or microseconds < 0:
		utils.log_warning(f"time must be a non-negative number, got {microseconds!r}")
		return 0
	if microseconds == 0:
		return 0
	fps_value = utils.parse_fps(fps)
	seconds = _exact(microseconds) / MICROSECONDS_PER_SECOND
	total_frames = math.ceil(seconds * fps_value)
	return total_frames % FRAMES_PER_CYCLE

#============================================

def needs_boundary_pad(track_start_us: int, source_duration_us: int,
	fps=30) -> bool:
	track_remaining = remaining_frames(track_start_us, fps)
	source_remaining = remaining_frames(source_duration_us, fps)
	return track_remaining + source_remaining >= FRAMES_PER_CYCLE

#============================================

def apply_boundary_pad(segment: dict, fps=30) -> bool:
	"""
	Add one microsecond to the segment's target duration when the leftover
	frames at the track position and in the source reach a full cycle.

	Call this only once the target duration is otherwise final.

	Args:
		segment: Segment with target_timerange and source_timerange.
		fps: Frame rate.

	Returns:
		bool: True when the pad was applied.
	"""
	target = segment['target_timerange']
	source = segment.get('source_timerange')
	if source is None:
		return False
	if not needs_boundary_pad(target['start'], source['duration'], fps):
		return False
	target['duration'] += 1
	return True
