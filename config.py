# config.py
from dotenv import load_dotenv
import os

load_dotenv()

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGODB_DB = os.getenv("MONGODB_DB", "signup_service")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Whether partner/admin roles may be requested on the public signup endpoint
ALLOW_PRIVILEGED_SIGNUP = os.getenv("ALLOW_PRIVILEGED_SIGNUP", "true").lower() in ("1", "true", "yes")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
