"""
Project-wide constants for the Gemini photo editor
"""

# ==============================================================================
# Upload Limits
# ==============================================================================

_KB = 1024
_MB = 1024 * _KB

MAX_UPLOAD_SIZE = 4 * _MB  # Inclusive upper bound for candidate files

SUPPORTED_MIME_TYPES = frozenset({"image/png", "image/jpeg", "image/webp"})

# Extension mapping used at the file selection boundary, consulted before mimetypes
EXTENSION_TO_MIME = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
}

UNKNOWN_MIME_TYPE = "application/octet-stream"

# ==============================================================================
# Remote Service
# ==============================================================================

DEFAULT_MODEL = "gemini-2.5-flash-image"
RESPONSE_MODALITY_IMAGE = "IMAGE"
SAFETY_FINISH_REASON = "SAFETY"

# ==============================================================================
# Download Naming
# ==============================================================================

DEFAULT_DOWNLOAD_PREFIX = "genz-hub"
FALLBACK_EXTENSION = "png"
