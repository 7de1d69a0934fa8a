from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Web server configuration
PORT = config.get("PORT", 5173)
LOG_LEVEL = config.get("LOG_LEVEL", "info")
BIND_ADDRESS = config.get("BIND_ADDRESS", "127.0.0.1")

# Spotify application registration
# 1) Create an app at https://developer.spotify.com/dashboard
# 2) Put its Client ID in SPOTIFY_CLIENT_ID (environment or .env)
# 3) Register the page URL (e.g. http://127.0.0.1:5173/) as Redirect URI
SPOTIFY_CLIENT_ID = config.get("SPOTIFY_CLIENT_ID", "")
# Empty means "derive from the page URL" (origin + path, no query string)
SPOTIFY_REDIRECT_URI = config.get("SPOTIFY_REDIRECT_URI", "")

# Spotify endpoints (hardcoded - not user configurable)
AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"
API_BASE = "https://api.spotify.com/v1"
SCOPES = config.get_list("SPOTIFY_SCOPES", ["user-top-read"])

# Token lifecycle
# Seconds subtracted from expires_in to absorb clock drift and request latency
TOKEN_LEEWAY_SECONDS = 30
# A freshly written access token without expires_in is treated as already expired
EXPIRE_WHEN_TTL_MISSING = True
PKCE_VERIFIER_LENGTH = 64

# Timeout applied to every call against the token endpoint and the Web API
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 15.0)

# Top tracks view
TOP_TRACKS_TIME_RANGE = config.get("TOP_TRACKS_TIME_RANGE", "short_term")
TOP_TRACKS_LIMIT = config.get("TOP_TRACKS_LIMIT", 10)

# Session storage (verifier, access token, refresh token, expiry)
SESSION_FILE = config.get("SESSION_FILE", "~/.spotify-top/session.json")
