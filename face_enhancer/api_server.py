#!/usr/bin/env python3
"""
Face Enhancer API Server
Single-step HTTP surface over the enhance_face pipeline.
"""

import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.utils import secure_filename

from .errors import EnhancerError
from .models.detector import Detector
from .models.enhancement_parameters import EnhancementParameters
from .models.upsampling_model import UpsamplingModel
from .pipeline.enhance_face import enhance_face
from .repositories.detector_repository import DetectorRepository
from .repositories.upsampling_model_repository import UpsamplingModelRepository
from .services.image_service import ImageService

# --- Centralized Logging Configuration ---
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
    datefmt='%H:%M:%S'
)

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend communication

# Configuration
ALLOWED_EXTENSIONS = set(os.getenv("ALLOWED_EXTENSIONS", "png,jpg,jpeg,bmp,webp").split(","))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_SIZE_MB", "25")) * 1024 * 1024

app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH
app.config['DETECTOR'] = None  # built lazily on first request
app.config['UPSAMPLING_MODEL'] = None  # resolved lazily from SR_MODEL_PATH

image_service = ImageService()

logger = logging.getLogger(__name__)


def get_detector() -> Detector:
    """Load the configured detector once and reuse it."""
    if app.config['DETECTOR'] is None:
        app.config['DETECTOR'] = DetectorRepository().load()
    return app.config['DETECTOR']


def get_upsampling_model() -> Optional[UpsamplingModel]:
    """Resolve SR_MODEL_PATH once; reload only if the path changes."""
    model_path = os.getenv("SR_MODEL_PATH")
    if not model_path:
        return None
    cached = app.config['UPSAMPLING_MODEL']
    if cached is None or cached.path != Path(model_path):
        app.config['UPSAMPLING_MODEL'] = UpsamplingModelRepository.load(model_path)
    return app.config['UPSAMPLING_MODEL']


def get_parameters(model: Optional[UpsamplingModel]) -> EnhancementParameters:
    """Environment defaults, overridden by optional form fields."""
    defaults = EnhancementParameters.from_env()
    return EnhancementParameters(
        sharpen_amount=float(request.form.get('sharpen', defaults.sharpen_amount)),
        sr_scale=float(request.form.get('sr_scale', defaults.sr_scale)),
        upsampling_model=model,
    )


def allowed_file(filename: str) -> bool:
    """Check if file extension is allowed."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


@app.route('/api/enhance', methods=['POST'])
def enhance():
    """Enhance the largest face in an uploaded image."""
    if 'image' not in request.files:
        return jsonify({'success': False, 'message': 'No image provided'}), 400

    file = request.files['image']
    if file.filename == '' or not allowed_file(file.filename):
        return jsonify({'success': False, 'message': 'Unsupported or missing file'}), 400

    try:
        model = get_upsampling_model()
    except EnhancerError as e:
        logger.error(f"Super-resolution model unavailable: {e.message}")
        return jsonify(e.to_dict()), 500

    try:
        params = get_parameters(model)
    except ValueError:
        return jsonify({'success': False, 'message': 'sharpen and sr_scale must be numbers'}), 400

    filename = secure_filename(file.filename)
    try:
        image = image_service.decode(file.read(), source=filename)
        result = enhance_face(image, get_detector(), params, image_service=image_service)
    except EnhancerError as e:
        logger.error(f"Enhancement failed for {filename}: {e.message}")
        return jsonify(e.to_dict()), 400

    logger.info(f"{filename}: enhanced={result.enhanced} region={result.region.as_tuple()}")
    return jsonify({
        'success': True,
        'enhanced': result.enhanced,
        'region': list(result.region.as_tuple()),
        'diagnostics': result.diagnostics,
        'image': image_service.to_base64(result.image),
    })


@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({'status': 'healthy', 'detector': get_detector().name})


@app.errorhandler(413)
def too_large(e):
    """Handle file too large error."""
    return jsonify({'error': f'File too large. Maximum size is {MAX_CONTENT_LENGTH // (1024*1024)}MB'}), 413


@app.errorhandler(500)
def internal_error(e):
    """Handle internal server error."""
    logger.error(f"Internal server error: {e}")
    return jsonify({'error': 'Internal server error'}), 500


if __name__ == '__main__':
    logger.info("Starting Face Enhancer API Server...")
    app.run(host='0.0.0.0', port=int(os.getenv("API_SERVER_PORT", "5002")))
