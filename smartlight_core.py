#!/usr/bin/env python3
"""
SmartLight Core v1.0 - LED Animation Designer Service

Local HTTP service behind the animation designer UI:
- Animation catalog for the editor
- Preview frames for the on-screen LED strip
- Designer config -> firmware command encoding (with sample fallback)
- Fixed-length color/scenario commands for the built-in modes

Sending commands to the light (BLE/serial) is done by the client.
"""

import logging
import os
from datetime import datetime

from flask import Flask, jsonify
from flask_cors import CORS

from animation_registry import animation_registry
from blueprints.designer_bp import designer_bp, init_app as designer_init


# ============================================================
# Configuration - Environment-based with sensible defaults
# ============================================================
API_PORT = int(os.environ.get('SMARTLIGHT_API_PORT', 8892))
API_HOST = os.environ.get('SMARTLIGHT_HOST', '0.0.0.0')
LOG_LEVEL = os.environ.get('SMARTLIGHT_LOG_LEVEL', 'INFO').upper()
SAMPLE_FALLBACK = os.environ.get('SMARTLIGHT_SAMPLE_FALLBACK', '1').strip().lower() not in ('0', 'false', 'no')


# ============================================================
# Version/Runtime Info
# ============================================================
SMARTLIGHT_VERSION = "1.0.0"
SMARTLIGHT_START_TIME = datetime.now()


# Configure logging
api_logger = logging.getLogger('smartlight.api')
for _name in ('smartlight.api', 'smartlight.encoder', 'smartlight.preview'):
    logging.getLogger(_name).setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
if not api_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        '%(asctime)s [API] %(levelname)s: %(message)s'
    ))
    api_logger.addHandler(handler)


# ============================================================
# CORS Configuration
# ============================================================
# Default allowed origins for local development (Vite / Expo web)
# Add custom origins via SMARTLIGHT_CORS_ORIGINS environment variable (comma-separated)
DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:8081",
    "http://localhost:8892",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:8081",
    "http://127.0.0.1:8892",
]


def get_allowed_origins():
    """Get list of allowed CORS origins from defaults + environment"""
    origins = DEFAULT_CORS_ORIGINS.copy()
    env_origins = os.environ.get('SMARTLIGHT_CORS_ORIGINS', '')
    if env_origins:
        for origin in env_origins.split(','):
            origin = origin.strip()
            if origin and origin not in origins:
                origins.append(origin)
    return origins


# ============================================================
# Application factory
# ============================================================

def create_app(config_overrides=None):
    """
    Build the Flask app.

    Args:
        config_overrides: Optional dict merged into app.config (tests).
            SAMPLE_FALLBACK toggles the encoder's sample fallback.
    """
    app = Flask(__name__)
    app.config['SAMPLE_FALLBACK'] = SAMPLE_FALLBACK
    app.config['CORS_ORIGINS'] = get_allowed_origins()
    if config_overrides:
        app.config.update(config_overrides)

    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})

    designer_init(allow_sample_fallback=app.config['SAMPLE_FALLBACK'])
    app.register_blueprint(designer_bp)

    @app.route('/api/health', methods=['GET'])
    def health():
        uptime_s = (datetime.now() - SMARTLIGHT_START_TIME).total_seconds()
        return jsonify({
            'status': 'ok',
            'version': SMARTLIGHT_VERSION,
            'uptime_seconds': round(uptime_s, 1),
            'animations': len(animation_registry.list_ids()),
        })

    api_logger.debug(f"CORS allowed origins: {app.config['CORS_ORIGINS']}")
    return app


def main():
    app = create_app()
    print("\n" + "=" * 60)
    print(f"  SmartLight Core v{SMARTLIGHT_VERSION} - Animation Designer Service")
    print(f"  Listening on http://{API_HOST}:{API_PORT}")
    print(f"  Sample fallback: {'on' if app.config['SAMPLE_FALLBACK'] else 'off'}")
    print("=" * 60 + "\n")
    app.run(host=API_HOST, port=API_PORT, debug=False)


if __name__ == '__main__':
    main()
