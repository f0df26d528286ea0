import os

# ✅ Storage
JOBS_DATA_FILE = os.getenv("JOBS_DATA_FILE", "data/jobs.json")
UPLOADS_DIR = os.getenv("UPLOADS_DIR", "public/uploads")
UPLOADS_URL_PREFIX = "/uploads"

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ✅ Admin account (bcrypt hash, see remotetrail.core.security.hash_password)
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@remotetrail.local")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")

# ✅ Login throttling
LOGIN_RATE_LIMIT = int(os.getenv("LOGIN_RATE_LIMIT", "10"))
LOGIN_RATE_WINDOW_SECONDS = int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "60"))

# ✅ CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# ✅ Job lifecycle
JOB_TTL_DAYS = 14
LISTING_PAGE_SIZE = 10
