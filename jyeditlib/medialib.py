#python wrapper for ffprobe and Pillow

import json
import os
import PIL.Image
from jyeditlib.core import errors
from jyeditlib.core import utils

VIDEO_EXTENSIONS = ('.mp4', '.mov', '.avi', '.mkv', '.webm', '.flv')
AUDIO_EXTENSIONS = ('.mp3', '.wav', '.aac', '.flac', '.ogg', '.m4a')
IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.gif', '.webp', '.bmp', '.tiff')

#===============================
def getProbeData(mediafile: str) -> dict:
	if not os.path.isfile(mediafile):
		raise errors.ProbeFailure(f"media file not found: {mediafile}")
	cmd = ['ffprobe', '-v', 'error', '-print_format', 'json',
		'-show_format', '-show_streams', mediafile]
	try:
		proc = utils.run_process(cmd)
	except (OSError, RuntimeError) as exc:
		raise errors.ProbeFailure(f"ffprobe failed for {mediafile}: {exc}") from exc
	try:
		data = json.loads(proc.stdout)
	except ValueError as exc:
		raise errors.ProbeFailure(f"ffprobe returned invalid json for {mediafile}") from exc
	if not isinstance(data, dict):
		raise errors.ProbeFailure(f"ffprobe returned no data for {mediafile}")
	return data

#===============================
def _findStream(data: dict, codec_types: tuple):
	for stream in data.get('streams', []):
		if stream.get('codec_type') in codec_types:
			return stream
	return None

#===============================
def _parseFrameRate(raw_rate) -> float:
	if not raw_rate or '/' not in str(raw_rate):
		return 0.0
	num, den = str(raw_rate).split('/')
	if float(den) <= 0:
		return 0.0
	return float(num) / float(den)

#===============================
def _toNumber(value, cast=float, default=0):
	if value is None:
		return default
	try:
		return cast(value)
	except (TypeError, ValueError):
		return default

#===============================
def _probeDuration(data: dict, stream: dict, mediafile: str) -> float:
	# container duration first, stream duration for formats that omit it
	for raw_duration in (data.get('format', {}).get('duration'), stream.get('duration')):
		duration = _toNumber(raw_duration, float, None)
		if duration is not None:
			return duration
	raise errors.ProbeFailure(f"ffprobe reported no duration for {mediafile}")

#===============================
def getVideoMetadata(mediafile: str) -> dict:
	data = getProbeData(mediafile)
	video_stream = _findStream(data, ('video',))
	if video_stream is None:
		raise errors.ProbeFailure(f"no video stream found in {mediafile}")
	audio_stream = _findStream(data, ('audio',))
	file_format = data.get('format', {})
	metadata = {
		'has_audio': audio_stream is not None,
		'duration': _probeDuration(data, video_stream, mediafile),
		'width': _toNumber(video_stream.get('width'), int),
		'height': _toNumber(video_stream.get('height'), int),
		'codec_name': video_stream.get('codec_name', ''),
		'format_name': file_format.get('format_name', ''),
		'bit_rate': _toNumber(file_format.get('bit_rate'), int),
		'frame_rate': _parseFrameRate(video_stream.get('r_frame_rate')),
		'sample_rate': 0,
		'channels': 0,
		'channel_layout': 'unknown',
	}
	if audio_stream is not None:
		metadata['sample_rate'] = _toNumber(audio_stream.get('sample_rate'), int)
		metadata['channels'] = _toNumber(audio_stream.get('channels'), int)
		metadata['channel_layout'] = audio_stream.get('channel_layout', 'unknown')
	return metadata

#===============================
def getAudioMetadata(mediafile: str) -> dict:
	data = getProbeData(mediafile)
	audio_stream = _findStream(data, ('audio',))
	if audio_stream is None:
		raise errors.ProbeFailure(f"no audio stream found in {mediafile}")
	file_format = data.get('format', {})
	# stream bit rate is more precise when the container reports one
	bit_rate = audio_stream.get('bit_rate', file_format.get('bit_rate'))
	return {
		'duration': _probeDuration(data, audio_stream, mediafile),
		'sample_rate': _toNumber(audio_stream.get('sample_rate'), int),
		'channels': _toNumber(audio_stream.get('channels'), int),
		'codec_name': audio_stream.get('codec_name', ''),
		'format_name': file_format.get('format_name', ''),
		'bit_rate': _toNumber(bit_rate, int),
	}

#===============================
def getImageMetadata(mediafile: str) -> dict:
	try:
		with PIL.Image.open(mediafile) as image:
			width, height = image.size
			codec_name = (image.format or '').lower()
	except (OSError, ValueError) as exc:
		raise errors.ProbeFailure(f"cannot read image {mediafile}: {exc}") from exc
	return {
		'width': width,
		'height': height,
		'codec_name': codec_name,
	}

#===============================
def mediaKind(mediafile: str) -> str:
	ext = os.path.splitext(mediafile)[1].lower()
	if ext in VIDEO_EXTENSIONS:
		return 'video'
	if ext in AUDIO_EXTENSIONS:
		return 'audio'
	if ext in IMAGE_EXTENSIONS:
		return 'image'
	return 'unsupported'

#===============================
def probeMedia(mediafile: str) -> dict:
	kind = mediaKind(mediafile)
	if kind == 'video':
		return {'kind': kind, 'metadata': getVideoMetadata(mediafile)}
	if kind == 'audio':
		return {'kind': kind, 'metadata': getAudioMetadata(mediafile)}
	if kind == 'image':
		return {'kind': kind, 'metadata': getImageMetadata(mediafile)}
	ext = os.path.splitext(mediafile)[1].lower()
	return {'kind': 'unsupported', 'metadata': {'error': f"unsupported file type: {ext}"}}
