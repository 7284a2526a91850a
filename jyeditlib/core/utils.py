#!/usr/bin/env python3

import math
import os
import shlex
import subprocess
import sys
import time
import uuid
from fractions import Fraction

#============================================

_QUIET_MODE = False

#============================================

def set_quiet_mode(quiet: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(quiet)
	return

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def log_message(text: str) -> None:
	if _QUIET_MODE:
		return
	print(text)
	return

#============================================

def log_warning(text: str) -> None:
	if _QUIET_MODE:
		return
	print(f"WARNING: {text}", file=sys.stderr)
	return

#============================================

def log_error(text: str) -> None:
	print(f"ERROR: {text}", file=sys.stderr)
	return

#============================================

def run_process(cmd: list) -> subprocess.CompletedProcess:
	"""
	Run a subprocess command and return the completed process.

	Args:
		cmd: Command list to execute.

	Returns:
		subprocess.CompletedProcess: Completed process with text output.
	"""
	showcmd = shlex.join(cmd)
	log_message(f"CMD: '{showcmd}'")
	proc = subprocess.run(cmd, capture_output=True, text=True)
	if proc.returncode != 0:
		stderr_text = proc.stderr.strip()
		raise RuntimeError(f"command failed: {showcmd}\n{stderr_text}")
	return proc

#============================================

def parse_fps(raw_fps) -> Fraction:
	if raw_fps is None:
		raise RuntimeError("profile.fps is required")
	if isinstance(raw_fps, bool):
		raise RuntimeError("profile.fps must be int, float, or fraction string")
	if isinstance(raw_fps, Fraction):
		fps = raw_fps
	elif isinstance(raw_fps, int):
		fps = Fraction(raw_fps, 1)
	elif isinstance(raw_fps, float):
		fps = Fraction(str(raw_fps))
	elif isinstance(raw_fps, str):
		if '/' in raw_fps:
			parts = raw_fps.split('/')
			fps = Fraction(int(parts[0]), int(parts[1]))
		else:
			fps = Fraction(raw_fps)
	else:
		fps = Fraction(str(raw_fps))
	if fps <= 0:
		raise RuntimeError("profile.fps must be positive")
	return fps

#============================================

def round_half_up_fraction(value: Fraction) -> int:
	numerator = value.numerator
	denominator = value.denominator
	whole = numerator // denominator
	remainder = numerator - (whole * denominator)
	if remainder * 2 >= denominator:
		return whole + 1
	return whole

#============================================

def generate_id() -> str:
	return str(uuid.uuid4()).upper()

#============================================

def normalize_path(filepath: str) -> str:
	return filepath.replace("\\", "/")

#============================================

def ensure_file_exists(filepath: str) -> None:
	if not os.path.exists(filepath):
		raise RuntimeError(f"file not found: {filepath}")
	return

#============================================

def make_project_name() -> str:
	# month, day, then time of day, e.g. 0714_093502
	return time.strftime("%m%d_%H%M%S")

#============================================

def scale_dimensions(width: int, height: int) -> dict:
	"""
	Scale canvas dimensions up so both sides exceed 1000 pixels and at
	least one side reaches 1920. Dimensions are never scaled down.

	Args:
		width: Source width in pixels.
		height: Source height in pixels.

	Returns:
		dict: Scaled width and height.
	"""
	if width <= 0 or height <= 0:
		raise RuntimeError("canvas width and height must be positive")
	scale_for_min = 1001 / min(width, height)
	scale_for_target = 1920 / max(width, height)
	final_scale = max(1, scale_for_min, scale_for_target)
	return {
		'width': math.ceil(width * final_scale),
		'height': math.ceil(height * final_scale),
	}

#============================================

def sort_keys_recursive(value):
	if isinstance(value, dict):
		return {key: sort_keys_recursive(value[key]) for key in sorted(value.keys())}
	if isinstance(value, list):
		return [sort_keys_recursive(item) for item in value]
	return value
