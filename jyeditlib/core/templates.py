#!/usr/bin/env python3

"""
Static default fields for draft records.

These tables hold the fields the host editor expects on each record kind.
Computed fields (ids, durations, paths, dimensions, timeranges) are filled
in by the registries and segment builders, never here.
"""

import copy

#============================================

CROP = {
	'lower_left_x': 0,
	'lower_left_y': 1,
	'lower_right_x': 1,
	'lower_right_y': 1,
	'upper_left_x': 0,
	'upper_left_y': 0,
	'upper_right_x': 1,
	'upper_right_y': 0,
}

#============================================

VIDEO_MATERIAL = {
	'aigc_type': "none",
	'audio_fade': None,
	'cartoon_path': "",
	'category_id': "",
	'category_name': "local",
	'check_flag': 63487,
	'crop': CROP,
	'crop_ratio': "free",
	'crop_scale': 1,
	'duration': 0,
	'extra_type_option': 0,
	'formula_id': "",
	'freeze': None,
	'has_audio': False,
	'height': 0,
	'intensifies_audio_path': "",
	'intensifies_path': "",
	'is_ai_generate_content': False,
	'is_copyright': False,
	'is_text_edit_overdub': False,
	'is_unified_beauty_mode': False,
	'local_id': "",
	'local_material_id': "",
	'material_id': "",
	'material_name': "",
	'material_url': "",
	'matting': {
		'flag': 0,
		'has_use_quick_brush': False,
		'has_use_quick_eraser': False,
		'interactiveTime': [],
		'path': "",
		'strokes': [],
	},
	'media_path': "",
	'object_locked': None,
	'origin_material_id': "",
	'path': "",
	'picture_from': "none",
	'picture_set_category_id': "",
	'picture_set_category_name': "",
	'request_id': "",
	'reverse_intensifies_path': "",
	'reverse_path': "",
	'smart_motion': None,
	'source': 0,
	'source_platform': 0,
	'stable': {
		'matrix_path': "",
		'stable_level': 0,
		'time_range': {'duration': 0, 'start': 0},
	},
	'team_id': "",
	'type': "video",
	'video_algorithm': {
		'algorithms': [],
		'complement_frame_config': None,
		'deflicker': None,
		'gameplay_configs': [],
		'motion_blur_config': None,
		'noise_reduction': None,
		'path': "",
		'quality_enhance': None,
		'time_range': None,
	},
	'width': 0,
}

# still images are video materials of type photo with a three hour extent
PHOTO_MATERIAL = dict(VIDEO_MATERIAL, type="photo", duration=10800000000)

#============================================

AUDIO_MATERIAL = {
	'app_id': 0,
	'category_id': "",
	'category_name': "local",
	'check_flag': 1,
	'copyright_limit_type': "none",
	'duration': 0,
	'effect_id': "",
	'formula_id': "",
	'intensifies_path': "",
	'is_ai_clone_tone': False,
	'is_text_edit_overdub': False,
	'is_ugc': False,
	'local_material_id': "",
	'music_id': "",
	'name': "",
	'path': "",
	'query': "",
	'request_id': "",
	'resource_id': "",
	'search_id': "",
	'source_from': "",
	'source_platform': 0,
	'team_id': "",
	'text_id': "",
	'tone_category_id': "",
	'tone_category_name': "",
	'tone_effect_id': "",
	'tone_effect_name': "",
	'tone_platform': "",
	'tone_second_category_id': "",
	'tone_second_category_name': "",
	'tone_speaker': "",
	'tone_type': "",
	'type': "extract_music",
	'video_id': "",
	'wave_points': [],
}

#============================================

TEXT_MATERIAL = {
	'add_type': 1,
	'alignment': 1,
	'background_alpha': 1,
	'background_color': "#000000",
	'background_height': 0.14,
	'background_horizontal_offset': 0,
	'background_round_radius': 0,
	'background_style': 0,
	'background_vertical_offset': 0,
	'background_width': 0.14,
	'base_content': "",
	'bold_width': 0,
	'border_alpha': 1,
	'border_color': "#000000",
	'border_width': 0.08,
	'caption_template_info': {
		'category_id': "",
		'category_name': "",
		'effect_id': "",
		'is_new': False,
		'path': "",
		'request_id': "",
		'resource_id': "",
		'resource_name': "",
		'source_platform': 0,
	},
	'check_flag': 7,
	'combo_info': {'text_templates': []},
	'content': "",
	'fixed_height': -1,
	'fixed_width': -1,
	'font_category_id': "",
	'font_category_name': "",
	'font_id': "",
	'font_name': "",
	'font_path': "",
	'font_resource_id': "",
	'font_size': 5,
	'font_source_platform': 0,
	'font_team_id': "",
	'font_title': "",
	'font_url': "",
	'fonts': [],
	'force_apply_line_max_width': False,
	'global_alpha': 1,
	'group_id': "",
	'has_shadow': False,
	'initial_scale': 1,
	'inner_padding': -1,
	'is_rich_text': False,
	'italic_degree': 0,
	'ktv_color': "",
	'language': "",
	'layer_weight': 1,
	'letter_spacing': 0,
	'line_feed': 1,
	'line_max_width': 0.82,
	'line_spacing': 0.02,
	'multi_language_current': "none",
	'name': "",
	'original_size': [],
	'preset_category': "",
	'preset_category_id': "",
	'preset_has_set_alignment': False,
	'preset_id': "",
	'preset_index': 0,
	'preset_name': "",
	'recognize_task_id': "",
	'recognize_type': 0,
	'relevance_segment': [],
	'shadow_alpha': 0.9,
	'shadow_angle': -45,
	'shadow_color': "",
	'shadow_distance': 5,
	'shadow_point': {'x': 0.6363961030678928, 'y': -0.6363961030678928},
	'shadow_smoothing': 0.45,
	'shape_clip_x': False,
	'shape_clip_y': False,
	'source_from': "",
	'style_name': "",
	'sub_type': 0,
	'subtitle_keywords': None,
	'subtitle_template_original_fontsize': 0,
	'text_alpha': 1,
	'text_color': "#ffde00",
	'text_curve': None,
	'text_preset_resource_id': "",
	'text_size': 30,
	'text_to_audio_ids': [],
	'tts_auto_update': False,
	'type': "subtitle",
	'typesetting': 0,
	'underline': False,
	'underline_offset': 0.22,
	'underline_width': 0.05,
	'use_effect_default_color': True,
	'words': {'end_time': [], 'start_time': [], 'text': []},
}

# yellow fill, thin black stroke
TEXT_STYLE = {
	'font_path': "",
	'font_title': "",
	'text_color': "#ffde00",
	'fill_color': [1, 0.87058824300766, 0],
	'stroke_color': [0, 0, 0],
	'stroke_width': 0.07999999821186066,
	'font_size': 5,
}

#============================================

SPEED = {
	'curve_speed': None,
	'mode': 0,
	'speed': 1,
	'type': "speed",
}

CANVAS = {
	'album_image': "",
	'blur': 0,
	'color': "",
	'image': "",
	'image_id': "",
	'image_name': "",
	'source_platform': 0,
	'team_id': "",
	'type': "canvas_color",
}

SOUND_CHANNEL_MAPPING = {
	'audio_channel_mapping': 0,
	'is_config_open': False,
	'type': "",
}

VOCAL_SEPARATION = {
	'choice': 0,
	'production_path': "",
	'time_range': None,
	'type': "vocal_separation",
}

BEAT = {
	'ai_beats': {
		'beat_speed_infos': [],
		'beats_path': "",
		'beats_url': "",
		'melody_path': "",
		'melody_percents': [0],
		'melody_url': "",
	},
	'enable_ai_beats': False,
	'gear': 404,
	'gear_count': 0,
	'mode': 404,
	'type': "beats",
	'user_beats': [],
	'user_delete_ai_beats': None,
}

MATERIAL_ANIMATION = {
	'animations': [],
	'multi_language_current': "none",
	'type': "sticker_animation",
}

#============================================

TRACK = {
	'attribute': 0,
	'flag': 0,
	'is_default_name': True,
	'name': "",
	'segments': [],
}

TRACK_TYPES = ('video', 'audio', 'text')

#============================================

RESPONSIVE_LAYOUT = {
	'enable': False,
	'horizontal_pos_layout': 0,
	'size_layout': 0,
	'target_follow': "",
	'vertical_pos_layout': 0,
}

# fields every segment carries regardless of kind
SEGMENT = {
	'caption_info': None,
	'cartoon': False,
	'clip': None,
	'common_keyframes': [],
	'enable_adjust': False,
	'enable_color_correct_adjust': False,
	'enable_color_curves': True,
	'enable_color_match_adjust': False,
	'enable_color_wheels': True,
	'enable_lut': False,
	'enable_smart_color_adjust': False,
	'extra_material_refs': [],
	'group_id': "",
	'hdr_settings': None,
	'intensifies_audio': False,
	'is_placeholder': False,
	'is_tone_modify': False,
	'keyframe_refs': [],
	'last_nonzero_volume': 1,
	'material_id': "",
	'render_index': 0,
	'responsive_layout': RESPONSIVE_LAYOUT,
	'reverse': False,
	'source_timerange': None,
	'speed': 1,
	'target_timerange': None,
	'template_id': "",
	'template_scene': "default",
	'track_attribute': 0,
	'track_render_index': 0,
	'uniform_scale': None,
	'visible': True,
	'volume': 1,
}

CLIP = {
	'alpha': 1,
	'flip': {'horizontal': False, 'vertical': False},
	'rotation': 0,
	'scale': {'x': 1, 'y': 1},
	'transform': {'x': 0, 'y': 0},
}

VISUAL_SEGMENT = dict(SEGMENT,
	clip=CLIP,
	enable_adjust=True,
	enable_lut=True,
	hdr_settings={'intensity': 1, 'mode': 1, 'nits': 1000},
	uniform_scale={'on': True, 'value': 1},
)

AUDIO_SEGMENT = dict(SEGMENT)

# captions sit near the bottom of the frame and above the video layers
TEXT_SEGMENT = dict(SEGMENT,
	clip=dict(CLIP, transform={'x': 0, 'y': -0.73}),
	render_index=14000,
	track_render_index=1,
	uniform_scale={'on': True, 'value': 1},
)

#============================================

MATERIAL_LISTS = (
	'audios',
	'beats',
	'canvases',
	'material_animations',
	'sound_channel_mappings',
	'speeds',
	'texts',
	'videos',
	'vocal_separations',
)

#============================================

def empty_document(document_id: str = "") -> dict:
	"""
	Build a draft document with no materials and no tracks.

	Args:
		document_id: Project id to keep on the new document.

	Returns:
		dict: Empty draft document.
	"""
	materials = {}
	for list_name in MATERIAL_LISTS:
		materials[list_name] = []
	document = {
		'canvas_config': {'height': 1920, 'ratio': "original", 'width': 1080},
		'color_space': 0,
		'config': {'lyrics_taskinfo': []},
		'duration': 0,
		'fps': 30.0,
		'id': document_id,
		'materials': materials,
		'tracks': [],
	}
	return copy.deepcopy(document)
