"""
Configuration settings for LectureDeck
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Base paths
BASE_DIR = Path(__file__).resolve().parent.parent
LOGS_DIR = BASE_DIR / "logs"

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", 8000))
API_VERSION = os.getenv("API_VERSION", "v1")
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")

# =============================================================================
# Content backend (modules, materials, analysis)
# =============================================================================
CONTENT_API_URL = os.getenv("CONTENT_API_URL", "http://localhost:3001/api")
ANALYZE_API_URL = os.getenv("ANALYZE_API_URL", f"{CONTENT_API_URL}/analyze")
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", 30))
ANALYZE_TIMEOUT = int(os.getenv("ANALYZE_TIMEOUT", 300))

# Supabase storage
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "materials")

# API Rate Limiting
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", 120))
RATE_LIMIT_PER_HOUR = int(os.getenv("RATE_LIMIT_PER_HOUR", 2000))

# =============================================================================
# Study session settings
# =============================================================================
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", 500))
ALLOWED_UPLOAD_EXTENSIONS = os.getenv("ALLOWED_UPLOAD_EXTENSIONS", ".pdf,.ppt,.pptx,.doc,.docx")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", str(LOGS_DIR / "lecturedeck.log"))
