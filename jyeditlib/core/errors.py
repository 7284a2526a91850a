#!/usr/bin/env python3

"""
Exception types raised while editing a draft document.

All of them derive from RuntimeError so code that already guards
RuntimeError keeps working.
"""

#============================================

class DraftError(RuntimeError):
	pass

#============================================

class InvalidRecord(DraftError):
	"""Record payload is missing, not a mapping, or has no usable id."""
	pass

#============================================

class DuplicateIdentifier(DraftError):
	pass

#============================================

class TrackNotFound(DraftError):
	pass

#============================================

class ReferenceSegmentMissing(DraftError):
	"""Reference track has no segment at the requested index."""
	pass

#============================================

class UnsupportedMediaKind(DraftError):
	pass

#============================================

class ProbeFailure(DraftError):
	"""ffprobe or Pillow could not read the media file."""
	pass

#============================================

class InvalidDuration(DraftError):
	pass
