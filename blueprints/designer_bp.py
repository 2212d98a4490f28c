"""
SmartLight Core — Designer Blueprint
Routes: /api/designer/*
Dependencies: animation_registry, preview_service, designer_commands, at_commands
"""

import logging
from flask import Blueprint, jsonify, request

from animation_registry import animation_registry
from at_commands import (
    LightSettings,
    describe_command,
    generate_animation_command,
    generate_color_command,
    COLOR_CHANNEL_TYPE,
)
from color_math import round_half_up, to_float
from designer_commands import (
    SAMPLE_DESIGNER_CONFIG,
    SAMPLE_POLICE_COMMAND_BYTES,
    build_sample_result,
    convert_designer_config,
    scenario_byte_for,
    to_hex_string,
)
from designer_models import DesignerConfig
from preview_service import DEFAULT_INTERVAL_MS, render_preview_frames
from scenario_presets import BASE_SCENARIOS

designer_bp = Blueprint('designer', __name__)

api_logger = logging.getLogger('smartlight.api')

_allow_sample_fallback = True


def init_app(allow_sample_fallback=True):
    """Initialize blueprint with required dependencies."""
    global _allow_sample_fallback
    _allow_sample_fallback = allow_sample_fallback


def _json_object():
    """Request body as a dict, or None if it is not a JSON object"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def _bad_request(message):
    return jsonify({'success': False, 'error': message}), 400


@designer_bp.route('/api/designer/animations', methods=['GET'])
def list_animations():
    """Animation catalog with scenario bytes"""
    animations = []
    for anim_id in animation_registry.list_ids():
        entry = animation_registry.get(anim_id).to_dict()
        entry['scenario'] = scenario_byte_for(anim_id)
        animations.append(entry)

    return jsonify({
        'animations': animations,
        'default': animation_registry.default.anim_id,
        'scenarios': [s.to_dict() for s in BASE_SCENARIOS],
    })


@designer_bp.route('/api/designer/preview', methods=['POST'])
def preview():
    """Evaluate preview frames for a configuration"""
    data = _json_object()
    if data is None:
        return _bad_request('Request body must be a JSON object')

    config = DesignerConfig.coerce(data.get('config', {}))
    frames = render_preview_frames(
        config,
        start_ms=to_float(data.get('timestampMs'), 0.0),
        frame_count=data.get('frameCount', 1),
        interval_ms=to_float(data.get('intervalMs'), DEFAULT_INTERVAL_MS),
    )

    return jsonify({
        'success': True,
        'ledCount': len(frames[0].colors),
        'frames': [f.to_dict() for f in frames],
    })


@designer_bp.route('/api/designer/encode', methods=['POST'])
def encode():
    """
    Encode a configuration into a device command.

    Accepts {config: {...}} or the configuration itself.
    """
    data = _json_object()
    if data is None:
        return _bad_request('Request body must be a JSON object')

    raw_config = data.get('config', data)
    result = convert_designer_config(raw_config, allow_sample_fallback=_allow_sample_fallback)

    if result is None:
        api_logger.info("Encode request produced no command (fallback disabled)")
        return jsonify({
            'success': False,
            'error': 'Configuration has no animation entries',
        }), 422

    payload = result.to_dict()
    payload['success'] = True
    return jsonify(payload)


@designer_bp.route('/api/designer/at-command', methods=['POST'])
def at_command():
    """Fixed-length color or built-in scenario command"""
    data = _json_object()
    if data is None:
        return _bad_request('Request body must be a JSON object')

    kind = data.get('kind', 'color')
    settings = LightSettings.from_dict(data)

    if kind == 'color':
        channel_type = round_half_up(to_float(data.get('channelType'), COLOR_CHANNEL_TYPE))
        command = generate_color_command(settings, channel_type)
        label = 'Color'
    elif kind == 'animation':
        scenario = round_half_up(to_float(data.get('scenario'), 1))
        command = generate_animation_command(scenario, settings)
        label = 'Animation'
    else:
        return _bad_request(f"Unknown command kind '{kind}' (expected 'color' or 'animation')")

    return jsonify({
        'success': True,
        'bytes': command,
        'hexString': to_hex_string(command),
        'description': describe_command(label, command),
    })


@designer_bp.route('/api/designer/sample', methods=['GET'])
def sample():
    """Sample police configuration and its cached command"""
    result = build_sample_result()
    return jsonify({
        'config': SAMPLE_DESIGNER_CONFIG.to_dict(),
        'bytes': list(SAMPLE_POLICE_COMMAND_BYTES),
        'hexString': result.hex_string,
        'note': result.note,
    })
