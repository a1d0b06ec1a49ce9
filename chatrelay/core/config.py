import os

# --- Persistence
DATABASE_URL = os.getenv("CHATRELAY_DATABASE_URL", "sqlite:///./chatrelay.db")

# --- Logging / HTTP
LOG_LEVEL = os.getenv("CHATRELAY_LOG_LEVEL", "INFO").upper()
HOST = os.getenv("CHATRELAY_HOST", "0.0.0.0")
PORT = int(os.getenv("CHATRELAY_PORT", "5000"))
CORS_ORIGINS = [
    o.strip() for o in os.getenv("CHATRELAY_CORS_ORIGINS", "*").split(",") if o.strip()
]

# --- Chat conventions
# Recipient value meaning "everyone in the room"
ALL_RECIPIENTS = os.getenv("CHATRELAY_ALL_RECIPIENTS", "Todos")
# Text of the status message written when a participant registers
JOIN_TEXT = os.getenv("CHATRELAY_JOIN_TEXT", "entra na sala...")
