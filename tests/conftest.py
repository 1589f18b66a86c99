import os
import tempfile

# Settings are read at import time, so the environment must be in place first
_db_dir = tempfile.mkdtemp(prefix="finvue-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["DB_AUTO_CREATE_TABLES"] = "true"
os.environ["ENVIRONMENT"] = "dev"
os.environ["EMAIL_ENABLED"] = "false"
os.environ["LLM_API_KEY"] = ""
os.environ["LOGIN_RATE_LIMIT_PER_MINUTE"] = "1000"
os.environ["REGISTER_RATE_LIMIT_PER_HOUR"] = "1000"
