# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit session tokens. The token is stored in <data_dir>/session.json (gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "IKIGAI_APP_NAME": "App display name (default: Ikigai Planner).",
    "IKIGAI_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Remote API
    "IKIGAI_API_URL": "Planner service base URL (default: http://localhost:5000/api).",
    "IKIGAI_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout in seconds (default: 5).",
    "IKIGAI_READ_TIMEOUT_SECONDS": "HTTP read timeout in seconds (default: 15).",
    # Session
    "IKIGAI_REMEMBER_SESSION": "Persist the auth token between runs (true/false, default: true).",
    # Paths (gitignored)
    "IKIGAI_DATA_DIR": "Local data directory for logs and session (default: .local/ikigai).",
    "IKIGAI_SESSION_PATH": "Session token JSON path (default: <data_dir>/session.json).",
}
