"""loginapp entrypoint.

Run with:
  python -m loginapp
"""

import logging
import os

import uvicorn

from loginapp.config import Settings, env_flag


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.getenv("LOGINAPP_HOST", "0.0.0.0")
    port = int(os.getenv("LOGINAPP_PORT", "3000"))
    reload = env_flag("LOGINAPP_RELOAD")
    uvicorn.run("loginapp.app:create_app", factory=True, host=host, port=port, reload=reload)

if __name__ == "__main__":
    main()
