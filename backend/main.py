import os

from dotenv import load_dotenv

# Load environment variables for local runs before the app reads its settings
load_dotenv()  # This reads .env into os.environ

from styledecor.main import app  # noqa: E402,F401
from styledecor.core.config import settings  # noqa: E402


if __name__ == "__main__":
    import uvicorn

    workers = int(os.getenv("UVICORN_WORKERS", "1"))
    keepalive = int(os.getenv("UVICORN_KEEPALIVE", "65"))
    uvicorn.run(
        "styledecor.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=os.getenv("UVICORN_RELOAD", "0") == "1",
        workers=workers,
        timeout_keep_alive=keepalive,
    )
