from settings.common import *


ENV = "test"

CSRF_COOKIE_SECURE = False
SESSION_COOKIE_SECURE = False

# Tests run against SQLite unless a database is supplied explicitly.
DB_URL = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
DATABASES = {
    "default": dj_database_url.parse(DB_URL),
}
DATABASES["default"]["ATOMIC_REQUESTS"] = True
SQLITE = DB_URL.startswith("sqlite")

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
